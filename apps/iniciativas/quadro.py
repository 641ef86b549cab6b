# apps/iniciativas/quadro.py

"""
Quadro de slots - orquestração do drag-and-drop

O quadro é a fonte única de verdade sobre qual iniciativa ocupa cada
slot (derivado da coleção, nunca armazenado), guarda a sessão de drag
de um único gesto e confirma as intenções na loja de slots.

Estados por gesto:
    ocioso -> arrastando -> confirmando -> ocioso
    arrastando -> ocioso (drag-end sem drop)
"""

import logging
from typing import Dict, List, Optional

from .cards import criar_card
from .filtros import SEM_FILTROS, FiltrosSlots
from .geometria import PosicaoDrag
from .notificacoes import (
    FALHA_ATRIBUIR,
    FALHA_TROCAR,
    NotificadorToasts,
    mensagem_atribuida,
    mensagem_erro,
    mensagem_movida,
    mensagem_troca,
)
from .tipos import IniciativaSlot

logger = logging.getLogger(__name__)

ESTADO_OCIOSO = 'ocioso'
ESTADO_ARRASTANDO = 'arrastando'
ESTADO_CONFIRMANDO = 'confirmando'


class QuadroSlots:
    """
    Grid de slots numerados 1..total_slots

    `loja` é qualquer objeto com as corrotinas atribuir, remover_do_slot
    e trocar (ver services.LojaSlotsRemota).
    """

    def __init__(self, iniciativas, total_slots, loja, notificador=None, filtros=None):
        self.loja = loja
        self.notificador = notificador or NotificadorToasts()
        self.filtros = filtros or SEM_FILTROS

        self.iniciativas: List[IniciativaSlot] = []
        self.total_slots = 0
        self._chave_mapa = None
        self._mapa: Dict[int, IniciativaSlot] = {}
        self._cards = None

        # Sessão de drag (um gesto)
        self.estado = ESTADO_OCIOSO
        self.iniciativa_arrastada: Optional[IniciativaSlot] = None
        self.slot_alvo: Optional[int] = None
        self.posicao_alvo: Optional[PosicaoDrag] = None

        # Seletor de iniciativas (slot vazio clicado)
        self.slot_seletor: Optional[int] = None

        self.atualizar_iniciativas(iniciativas, total_slots)

    # === Dados derivados ===

    def atualizar_iniciativas(self, iniciativas, total_slots=None):
        """Substitui a coleção (refetch após mutação)"""
        self.iniciativas = list(iniciativas)
        ocupados = [i.slot for i in self.iniciativas if i.slot is not None]
        if total_slots is None:
            total_slots = self.total_slots
        self.total_slots = max([total_slots] + ocupados)
        self._cards = None

    @property
    def mapa_slots(self) -> Dict[int, IniciativaSlot]:
        """Projeção slot -> iniciativa, recalculada só quando a coleção muda"""
        chave = tuple((i.id, i.slot) for i in self.iniciativas)
        if chave != self._chave_mapa:
            self._mapa = {i.slot: i for i in self.iniciativas if i.slot is not None}
            self._chave_mapa = chave
        return self._mapa

    def slots(self):
        return range(1, self.total_slots + 1)

    def iniciativa_no_slot(self, numero_slot) -> Optional[IniciativaSlot]:
        return self.mapa_slots.get(numero_slot)

    def iniciativas_sem_slot(self, busca='') -> List[IniciativaSlot]:
        busca = (busca or '').strip().lower()
        return [
            iniciativa for iniciativa in self.iniciativas
            if iniciativa.slot is None and busca in iniciativa.titulo.lower()
        ]

    def buscar_iniciativa(self, iniciativa_id) -> Optional[IniciativaSlot]:
        iniciativa_id = str(iniciativa_id)
        for iniciativa in self.iniciativas:
            if iniciativa.id == iniciativa_id:
                return iniciativa
        return None

    # === Filtros ===

    @property
    def tem_filtros_ativos(self) -> bool:
        return self.filtros.tem_filtros_ativos

    def definir_filtros(self, filtros: FiltrosSlots):
        self.filtros = filtros or SEM_FILTROS
        self._cards = None

    def esta_filtrada(self, iniciativa: IniciativaSlot) -> bool:
        return not self.filtros.corresponde(iniciativa)

    # === Cards ===

    def cards(self):
        if self._cards is None:
            self._cards = [
                criar_card(numero, self, self.iniciativa_no_slot(numero))
                for numero in self.slots()
            ]
        return self._cards

    def card(self, numero_slot):
        if not 1 <= numero_slot <= self.total_slots:
            return None
        return self.cards()[numero_slot - 1]

    # === Sessão de drag ===

    def _limpar_sessao(self):
        self.estado = ESTADO_OCIOSO
        self.iniciativa_arrastada = None
        self.slot_alvo = None
        self.posicao_alvo = None

    def iniciar_arraste(self, iniciativa: IniciativaSlot):
        if self.tem_filtros_ativos or self.esta_filtrada(iniciativa):
            return

        self.estado = ESTADO_ARRASTANDO
        self.iniciativa_arrastada = iniciativa
        self.slot_alvo = None
        self.posicao_alvo = None

    def arrastar_sobre(self, posicao: PosicaoDrag):
        if self.tem_filtros_ativos or self.iniciativa_arrastada is None:
            return

        if posicao.numero_slot == self.iniciativa_arrastada.slot:
            # Sobre o próprio slot: sem alvo
            self.slot_alvo = None
            self.posicao_alvo = None
            return

        self.slot_alvo = posicao.numero_slot
        self.posicao_alvo = posicao

    def sair_do_alvo(self):
        if self.tem_filtros_ativos:
            return
        self.slot_alvo = None
        self.posicao_alvo = None

    def finalizar_arraste(self):
        """Drag-end sem drop (Esc ou fora de qualquer alvo)"""
        if self.tem_filtros_ativos:
            return
        self._limpar_sessao()

    async def soltar(self, numero_slot, iniciativa_alvo: Optional[IniciativaSlot] = None, modo=None):
        """
        Confirma o drop na loja

        Retorna True se a troca/movimentação foi confirmada.
        A sessão é limpa em qualquer desfecho.
        """
        if self.tem_filtros_ativos:
            return False

        arrastada = self.iniciativa_arrastada
        if arrastada is None:
            return False

        if arrastada.slot == numero_slot:
            self._limpar_sessao()
            return False

        if iniciativa_alvo is not None and iniciativa_alvo.id == arrastada.id:
            iniciativa_alvo = None

        self.estado = ESTADO_CONFIRMANDO
        logger.info(
            f"🔁 Drop de '{arrastada.titulo}' no slot {numero_slot} (modo={modo})"
        )

        try:
            await self.loja.trocar(
                arrastada.id,
                numero_slot,
                iniciativa_alvo.id if iniciativa_alvo else None,
            )
        except Exception as e:
            logger.warning(f"❌ Falha ao mover '{arrastada.titulo}' para o slot {numero_slot}: {e}")
            self.notificador.erro(mensagem_erro(e, FALHA_TROCAR))
            return False
        finally:
            self._limpar_sessao()

        if iniciativa_alvo is not None:
            self.notificador.sucesso(mensagem_troca(arrastada.titulo, iniciativa_alvo.titulo))
        else:
            self.notificador.sucesso(mensagem_movida(arrastada.titulo, numero_slot))
        return True

    # === Atribuição / remoção fora do drag ===

    def abrir_seletor(self, numero_slot, busca=''):
        """Abre o seletor limitado às iniciativas sem slot"""
        self.slot_seletor = numero_slot
        return self.iniciativas_sem_slot(busca)

    def fechar_seletor(self):
        self.slot_seletor = None

    async def atribuir(self, iniciativa_id, numero_slot):
        iniciativa = self.buscar_iniciativa(iniciativa_id)
        titulo = iniciativa.titulo if iniciativa else 'Iniciativa'

        try:
            await self.loja.atribuir(str(iniciativa_id), numero_slot)
        except Exception as e:
            logger.warning(f"❌ Falha ao atribuir iniciativa {iniciativa_id} ao slot {numero_slot}: {e}")
            self.notificador.erro(mensagem_erro(e, FALHA_ATRIBUIR))
            return False

        self.fechar_seletor()
        self.notificador.sucesso(mensagem_atribuida(titulo, numero_slot))
        return True

    async def remover(self, numero_slot):
        """Remove a iniciativa do slot através do card (flag de remoção fica no card)"""
        card = self.card(numero_slot)
        if card is None or card.iniciativa is None:
            return False
        return await card.remover()

    # === Serialização ===

    def estado_arraste(self) -> dict:
        return {
            'estado': self.estado,
            'iniciativa_id': self.iniciativa_arrastada.id if self.iniciativa_arrastada else None,
            'slot_alvo': self.slot_alvo,
            'posicao': self.posicao_alvo.to_dict() if self.posicao_alvo else None,
        }

    def to_dict(self) -> dict:
        return {
            'total_slots': self.total_slots,
            'tem_filtros_ativos': self.tem_filtros_ativos,
            'filtros': self.filtros.to_dict(),
            'arraste': self.estado_arraste(),
            'slots': [card.contexto() for card in self.cards()],
            'sem_slot': [iniciativa.to_dict() for iniciativa in self.iniciativas_sem_slot()],
        }
