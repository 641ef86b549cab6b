# apps/iniciativas/cards.py

"""
Cards do quadro de slots

Três variantes com a mesma interface de renderização:
- CardVazio: slot livre, clicável para atribuir e alvo de drop
- CardInterativo: slot ocupado, origem e alvo de drag-and-drop
- CardSomenteLeitura: slot ocupado por iniciativa fora dos filtros;
  não tem NENHUM handler de drag (os métodos não existem)

Os cards traduzem eventos de ponteiro em PosicaoDrag e repassam ao
quadro; a única mutação feita diretamente pelo card é "remover do slot".
"""

import logging

from django.template.loader import render_to_string
from django.urls import reverse

from .geometria import Retangulo, resolver_posicao_drag
from .notificacoes import FALHA_REMOVER, mensagem_erro, mensagem_removida

logger = logging.getLogger(__name__)

VARIANTE_VAZIO = 'vazio'
VARIANTE_INTERATIVO = 'interativo'
VARIANTE_SOMENTE_LEITURA = 'somente_leitura'


class CardSlot:
    """Base comum: renderização de uma célula do grid"""

    template_name = 'iniciativas/partials/slot_card.html'
    variante = None

    def __init__(self, numero_slot, quadro, iniciativa=None):
        self.numero_slot = numero_slot
        self.quadro = quadro
        self.iniciativa = iniciativa

    @property
    def draggable(self):
        return False

    def atributos_drag(self):
        """Atributos HTML que ligam o card aos eventos de drag no cliente"""
        return {}

    def _marcador(self):
        posicao = self.quadro.posicao_alvo
        if self.quadro.slot_alvo != self.numero_slot or posicao is None:
            return None
        if not posicao.is_insercao:
            return None
        # barra de 3px a 10px da borda (slots.css: .slot-card__marcador--<direcao>)
        return {'direcao': posicao.direcao_insercao}

    def contexto(self):
        arrastada = self.quadro.iniciativa_arrastada
        return {
            'numero_slot': self.numero_slot,
            'variante': self.variante,
            'vazio': self.iniciativa is None,
            'filtrado': False,
            'draggable': self.draggable,
            'atributos_drag': self.atributos_drag(),
            'iniciativa': self.iniciativa.to_dict() if self.iniciativa else None,
            'alvo': self.quadro.slot_alvo == self.numero_slot,
            'arrastando': bool(
                arrastada and self.iniciativa and arrastada.id == self.iniciativa.id
            ),
            'marcador': self._marcador(),
        }

    def render(self):
        return render_to_string(self.template_name, {'card': self.contexto()})

    def __repr__(self):
        return f"<{self.__class__.__name__} slot={self.numero_slot}>"


class AlvoDropMixin:
    """Handlers de alvo de drop (slot vazio ou ocupado interativo)"""

    def ao_arrastar_sobre(self, x, y, retangulo):
        if not isinstance(retangulo, Retangulo):
            retangulo = Retangulo.from_dict(retangulo)
        posicao = resolver_posicao_drag(x, y, retangulo, self.numero_slot)
        self.quadro.arrastar_sobre(posicao)
        return posicao

    def ao_sair(self):
        self.quadro.sair_do_alvo()

    async def ao_soltar(self, x, y, retangulo):
        if not isinstance(retangulo, Retangulo):
            retangulo = Retangulo.from_dict(retangulo)
        posicao = resolver_posicao_drag(x, y, retangulo, self.numero_slot)
        return await self.quadro.soltar(self.numero_slot, self.iniciativa, posicao.modo)


class CardVazio(AlvoDropMixin, CardSlot):
    variante = VARIANTE_VAZIO

    def atributos_drag(self):
        return {
            'data-slot': self.numero_slot,
            'data-drop-alvo': 'true',
        }

    def ao_clicar(self):
        """Abre o seletor de iniciativas sem slot"""
        return self.quadro.abrir_seletor(self.numero_slot)


class CardOcupado(CardSlot):
    """Slot com iniciativa: sempre pode ser removido do slot"""

    def __init__(self, numero_slot, quadro, iniciativa):
        super().__init__(numero_slot, quadro, iniciativa)
        self.removendo = False

    def contexto(self):
        contexto = super().contexto()
        contexto['removendo'] = self.removendo
        contexto['url_detalhe'] = reverse('admin:iniciativas_iniciativa_change', args=[self.iniciativa.id])
        return contexto

    async def remover(self):
        """
        Remove a iniciativa do slot direto na loja
        Retorna True em caso de sucesso
        """
        if self.removendo:
            return False

        self.removendo = True
        iniciativa = self.iniciativa
        notificador = self.quadro.notificador

        try:
            await self.quadro.loja.remover_do_slot(iniciativa.id)
        except Exception as e:
            logger.warning(f"❌ Falha ao remover '{iniciativa.titulo}' do slot {self.numero_slot}: {e}")
            notificador.erro(mensagem_erro(e, FALHA_REMOVER))
            return False
        finally:
            self.removendo = False

        notificador.sucesso(mensagem_removida(iniciativa.titulo, self.numero_slot))
        return True


class CardInterativo(AlvoDropMixin, CardOcupado):
    variante = VARIANTE_INTERATIVO

    @property
    def draggable(self):
        return True

    def atributos_drag(self):
        return {
            'draggable': 'true',
            'data-slot': self.numero_slot,
            'data-iniciativa-id': self.iniciativa.id,
            'data-drag-origem': 'true',
            'data-drop-alvo': 'true',
        }

    def ao_iniciar_arraste(self):
        self.quadro.iniciar_arraste(self.iniciativa)

    def ao_finalizar_arraste(self):
        self.quadro.finalizar_arraste()


class CardSomenteLeitura(CardOcupado):
    """Iniciativa fora dos filtros: visível, esmaecida e sem drag"""

    variante = VARIANTE_SOMENTE_LEITURA

    def contexto(self):
        contexto = super().contexto()
        contexto['filtrado'] = True
        return contexto


def criar_card(numero_slot, quadro, iniciativa=None):
    """Escolhe a variante do card conforme ocupação e filtros do quadro"""
    if iniciativa is None:
        return CardVazio(numero_slot, quadro)
    if quadro.esta_filtrada(iniciativa):
        return CardSomenteLeitura(numero_slot, quadro, iniciativa)
    return CardInterativo(numero_slot, quadro, iniciativa)
