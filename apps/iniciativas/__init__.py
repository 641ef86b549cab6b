# apps/iniciativas/__init__.py

"""
Iniciativas - Quadro de slots do Órbita

Funcionalidades:
- Grid de slots numerados com uma iniciativa por slot
- Drag-and-drop com modos inserir/trocar (geometria do ponteiro)
- Filtros por equipe e responsável (desligam o drag)
- WebSockets para interação e atualização em tempo real
"""
