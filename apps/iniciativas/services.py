# apps/iniciativas/services.py

"""
Loja de slots - camada de persistência do quadro

SlotService concentra as regras de negócio (isolamento por organização,
permissão de edição, iniciativa ativa, unicidade do slot) e roda dentro
de transações. LojaSlotsRemota expõe as mesmas operações como corrotinas
para o quadro / consumer WebSocket.
"""

import logging
from typing import Dict, List, Optional

from channels.db import database_sync_to_async
from django.db import transaction

from apps.core.permissions import OrbitaPermissions
from .models import Iniciativa, STATUS_ATIVOS
from .tipos import IniciativaSlot

logger = logging.getLogger(__name__)


class SlotError(Exception):
    """Violação de regra do quadro de slots - mensagem exibida ao usuário"""


class SlotPermissaoNegada(SlotError):
    pass


class SlotService:
    """
    Operações de slot para o usuário logado

    Todas as operações lançam SlotError com mensagem pronta para toast.
    Nenhuma retorna a lista atualizada: quem chama faz o refetch.
    """

    def __init__(self, usuario):
        self.usuario = usuario

    # === Helpers privados ===

    def _organizacao_id(self):
        organizacao_id = getattr(self.usuario, 'organizacao_id', None)
        if not organizacao_id:
            raise SlotError('Usuário precisa pertencer a uma organização para gerenciar slots')
        return organizacao_id

    def _queryset(self):
        return Iniciativa.objects.da_organizacao(self._organizacao_id())

    def _buscar_para_edicao(self, iniciativa_id, apenas_ativas=False, mensagem='Iniciativa não encontrada ou acesso negado'):
        queryset = self._queryset().select_for_update()
        if apenas_ativas:
            queryset = queryset.ativas()

        try:
            iniciativa = queryset.get(id=iniciativa_id)
        except (Iniciativa.DoesNotExist, ValueError, TypeError):
            raise SlotError(mensagem)

        if not OrbitaPermissions.pode_editar_iniciativa(self.usuario, iniciativa):
            raise SlotPermissaoNegada('Você não tem permissão para editar esta iniciativa')

        return iniciativa

    def _ocupante(self, numero_slot, excluir_id=None):
        queryset = self._queryset().select_for_update().filter(slot=numero_slot)
        if excluir_id is not None:
            queryset = queryset.exclude(id=excluir_id)
        return queryset.first()

    def _salvar_slot(self, iniciativa, slot):
        iniciativa.slot = slot
        iniciativa.save(update_fields=['slot', 'atualizado_em'])

    # === Leitura ===

    def total_slots(self) -> int:
        """Um slot por iniciativa ativa, nunca menos que o maior slot ocupado"""
        queryset = self._queryset().ativas()
        maior_slot = queryset.com_slot().order_by('-slot').values_list('slot', flat=True).first() or 0
        return max(queryset.count(), maior_slot)

    def listar_quadro(self) -> Dict:
        """
        Iniciativas ativas separadas em slotadas / sem slot

        Returns:
            Dict com slotadas, sem_slot (listas de IniciativaSlot) e total_slots
        """
        iniciativas = [
            IniciativaSlot.from_model(iniciativa)
            for iniciativa in self._queryset().ativas().para_quadro().order_by('slot', '-atualizado_em')
        ]

        return {
            'slotadas': [i for i in iniciativas if i.slot is not None],
            'sem_slot': [i for i in iniciativas if i.slot is None],
            'total_slots': self.total_slots(),
        }

    def buscar_sem_slot(self, busca='') -> List[IniciativaSlot]:
        queryset = self._queryset().ativas().sem_slot().para_quadro()
        busca = (busca or '').strip()
        if busca:
            queryset = queryset.filter(titulo__icontains=busca)

        return [IniciativaSlot.from_model(i) for i in queryset.order_by('-atualizado_em')]

    # === Mutações ===

    @transaction.atomic
    def atribuir(self, iniciativa_id, numero_slot):
        """Coloca uma iniciativa sem slot no slot informado"""
        iniciativa = self._buscar_para_edicao(
            iniciativa_id,
            apenas_ativas=True,
            mensagem='Iniciativa não encontrada, acesso negado ou iniciativa inativa',
        )

        total = self.total_slots()
        if not isinstance(numero_slot, int) or not 1 <= numero_slot <= total:
            raise SlotError(f'Slot inválido: escolha um número entre 1 e {total}')

        if iniciativa.slot is not None and iniciativa.slot != numero_slot:
            raise SlotError(f'"{iniciativa.titulo}" já está no slot {iniciativa.slot}')

        if self._ocupante(numero_slot, excluir_id=iniciativa.id):
            raise SlotError('Este slot já está atribuído a outra iniciativa')

        self._salvar_slot(iniciativa, numero_slot)
        logger.info(f"✅ '{iniciativa.titulo}' atribuída ao slot {numero_slot} por {self.usuario.username}")
        return iniciativa

    @transaction.atomic
    def remover_do_slot(self, iniciativa_id):
        iniciativa = self._buscar_para_edicao(iniciativa_id)

        if iniciativa.slot is None:
            raise SlotError(f'"{iniciativa.titulo}" não está em nenhum slot')

        slot_anterior = iniciativa.slot
        self._salvar_slot(iniciativa, None)
        logger.info(f"✅ '{iniciativa.titulo}' removida do slot {slot_anterior} por {self.usuario.username}")
        return iniciativa, slot_anterior

    @transaction.atomic
    def trocar(self, id_arrastada, numero_slot, id_alvo: Optional[str] = None):
        """
        Troca os slots de duas iniciativas, ou move para um slot vazio

        Com id_alvo a iniciativa alvo assume o slot anterior da arrastada
        (que pode ser None: a alvo volta para o pool).
        """
        arrastada = self._buscar_para_edicao(
            id_arrastada,
            apenas_ativas=True,
            mensagem='Iniciativa de origem não encontrada ou inativa',
        )

        total = self.total_slots()
        if not isinstance(numero_slot, int) or not 1 <= numero_slot <= total:
            raise SlotError(f'Slot inválido: escolha um número entre 1 e {total}')

        alvo = None
        if id_alvo and str(id_alvo) != str(arrastada.id):
            alvo = self._buscar_para_edicao(
                id_alvo,
                mensagem='Iniciativa alvo não encontrada ou acesso negado',
            )
            if alvo.slot != numero_slot:
                raise SlotError(f'"{alvo.titulo}" não está mais no slot {numero_slot}, atualize o quadro')
        else:
            ocupante = self._ocupante(numero_slot, excluir_id=arrastada.id)
            if ocupante is not None:
                raise SlotError(f'O slot {numero_slot} já está ocupado por "{ocupante.titulo}"')

        slot_origem = arrastada.slot

        # Libera a origem antes para não violar a unicidade no meio da troca
        self._salvar_slot(arrastada, None)
        if alvo is not None:
            self._salvar_slot(alvo, slot_origem)
        self._salvar_slot(arrastada, numero_slot)

        if alvo is not None:
            logger.info(
                f"🔁 '{arrastada.titulo}' (slot {slot_origem}) trocou com "
                f"'{alvo.titulo}' (slot {numero_slot}) por {self.usuario.username}"
            )
        else:
            logger.info(
                f"🔁 '{arrastada.titulo}' movida do slot {slot_origem} para o {numero_slot} por {self.usuario.username}"
            )

        return arrastada, alvo

    @transaction.atomic
    def atualizar_status(self, iniciativa_id, status):
        """Concluir ou cancelar libera o slot (ver signals)"""
        if status not in dict(Iniciativa.STATUS_CHOICES):
            raise SlotError(f'Status inválido: {status}')

        iniciativa = self._buscar_para_edicao(iniciativa_id)
        iniciativa.status = status
        iniciativa.save()

        if status not in STATUS_ATIVOS:
            logger.info(f"📦 '{iniciativa.titulo}' encerrada ({status}) - slot liberado")
        return iniciativa


class LojaSlotsRemota:
    """Adapter assíncrono do SlotService (usado pelo quadro no consumer)"""

    def __init__(self, usuario):
        self.service = SlotService(usuario)

    async def atribuir(self, iniciativa_id, numero_slot):
        await database_sync_to_async(self.service.atribuir)(iniciativa_id, numero_slot)

    async def remover_do_slot(self, iniciativa_id):
        await database_sync_to_async(self.service.remover_do_slot)(iniciativa_id)

    async def trocar(self, id_arrastada, numero_slot, id_alvo=None):
        await database_sync_to_async(self.service.trocar)(id_arrastada, numero_slot, id_alvo)

    async def listar_quadro(self):
        return await database_sync_to_async(self.service.listar_quadro)()
