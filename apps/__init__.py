# apps/__init__.py

"""
Órbita - Aplicações Django

Este pacote contém todas as aplicações do sistema:
- core: Organizações, usuários, equipes, pessoas e permissões
- iniciativas: Quadro de slots com drag-and-drop e WebSockets
"""

__version__ = '0.1.0'
__author__ = 'Equipe Órbita'
