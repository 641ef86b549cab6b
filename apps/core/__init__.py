# apps/core/__init__.py

"""
Core - Aplicação base do Órbita

Contém:
- Models de tenancy (Organizacao, Usuario, Equipe, Pessoa)
- Sistema de permissões customizado
- Comando de seed para desenvolvimento
"""
