# apps/core/permissions.py

from functools import wraps
from django.shortcuts import redirect
from django.contrib import messages
from django.http import JsonResponse


class OrbitaPermissions:
    """
    Sistema de permissões customizado do Órbita
    Baseado nos tipos de usuário: admin, gerente, funcionário
    """

    @staticmethod
    def is_gerente_ou_admin(user):
        """Verifica se é gerente ou admin"""
        return user.is_authenticated and user.tipo in ['admin', 'gerente']

    @staticmethod
    def tem_acesso_organizacao(user, organizacao_id):
        """Verifica se o usuário pertence à organização"""
        if not user.is_authenticated or not user.organizacao_id:
            return False
        return user.organizacao_id == organizacao_id

    @staticmethod
    def pode_editar_iniciativa(user, iniciativa):
        """Verifica se pode editar uma iniciativa (inclui mexer no slot)"""
        if not OrbitaPermissions.tem_acesso_organizacao(user, iniciativa.organizacao_id):
            return False

        # Admin e gerente da organização podem editar qualquer iniciativa
        if OrbitaPermissions.is_gerente_ou_admin(user):
            return True

        # Criador da iniciativa pode editar
        if iniciativa.criado_por_id == user.id:
            return True

        # Funcionário responsável pela iniciativa pode editar
        return iniciativa.responsaveis.filter(pessoa__usuario=user).exists()


# Decoradores para views

def requer_organizacao(view_func):
    """
    Decorador que exige usuário vinculado a uma organização
    Adiciona request.organizacao_id para uso na view
    """

    @wraps(view_func)
    def wrapped_view(request, *args, **kwargs):
        if not request.user.organizacao_id:
            messages.error(request, 'Você precisa pertencer a uma organização.')
            return redirect('admin:index')

        request.organizacao_id = request.user.organizacao_id
        return view_func(request, *args, **kwargs)

    return wrapped_view


def ajax_requer_organizacao(view_func):
    """
    Versão AJAX/HTMX do requer_organizacao
    Retorna 403 em JSON ao invés de redirecionar
    """

    @wraps(view_func)
    def wrapped_view(request, *args, **kwargs):
        if not request.user.organizacao_id:
            return JsonResponse(
                {'success': False, 'error': 'Você precisa pertencer a uma organização.'},
                status=403
            )

        request.organizacao_id = request.user.organizacao_id
        return view_func(request, *args, **kwargs)

    return wrapped_view
