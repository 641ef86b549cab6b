# apps/iniciativas/signals.py

import logging

from django.db.models.signals import pre_save
from django.dispatch import receiver

from .models import Iniciativa, STATUS_ENCERRADOS

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=Iniciativa)
def liberar_slot_ao_encerrar(sender, instance, **kwargs):
    """
    Iniciativa concluída ou cancelada não ocupa slot
    Vale para qualquer caminho de save (admin, service, shell)
    """
    if instance.status in STATUS_ENCERRADOS and instance.slot is not None:
        logger.info(f"[SLOT] '{instance.titulo}' encerrada - liberando slot {instance.slot}")
        instance.slot = None
