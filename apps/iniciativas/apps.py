# apps/iniciativas/apps.py

import logging

from django.apps import AppConfig


class IniciativasConfig(AppConfig):
    """Configuração da app Iniciativas"""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.iniciativas'
    verbose_name = 'Iniciativas - Quadro de Slots'

    def ready(self):
        """
        Inicialização da app
        Registra sinais (liberação de slot ao encerrar iniciativa)
        """
        from . import signals  # noqa: F401

        logger = logging.getLogger(__name__)
        logger.info("🔌 Iniciativas App inicializada - quadro de slots habilitado")
