# apps/core/middleware.py

from django.http import Http404


class MultiTenantSecurityMiddleware:
    """
    Middleware que garante isolamento de dados entre organizações

    Segunda camada de proteção: recusa URLs que apontam para
    iniciativas de outra organização antes da view executar
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)

        # Headers de contexto do tenant
        if hasattr(request, 'user') and request.user.is_authenticated:
            response['X-Organizacao'] = str(request.user.organizacao_id or '')
            response['X-User-Type'] = request.user.tipo

        return response

    def process_view(self, request, view_func, view_args, view_kwargs):
        if not hasattr(request, 'user') or not request.user.is_authenticated:
            return None  # Deixar sistema de auth padrão lidar com isso

        if 'iniciativa_id' in view_kwargs:
            from apps.iniciativas.models import Iniciativa

            existe = Iniciativa.objects.filter(
                id=view_kwargs['iniciativa_id'],
                organizacao_id=request.user.organizacao_id
            ).exists()
            if not existe:
                raise Http404("Iniciativa não encontrada")

        return None
