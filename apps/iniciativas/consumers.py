# apps/iniciativas/consumers.py

import json
import logging

from channels.generic.websocket import AsyncWebsocketConsumer
from django.conf import settings
from django.utils import timezone

from .filtros import FiltrosSlots
from .notificacoes import NotificadorToasts
from .quadro import QuadroSlots
from .services import LojaSlotsRemota
from .views import grupo_slots

logger = logging.getLogger(__name__)


class QuadroSlotsConsumer(AsyncWebsocketConsumer):
    """
    Consumer WebSocket do quadro de slots

    Cada conexão mantém o próprio QuadroSlots (sessão de drag, filtros,
    seletor). Eventos de ponteiro chegam do cliente, são roteados para o
    card do slot e o resultado volta como marcador / board_sync / toast.

    Mutações confirmadas são anunciadas ao grupo da organização e todos
    os quadros abertos recarregam.
    """

    async def connect(self):
        """
        Aceita apenas usuários autenticados com organização
        """
        self.user = self.scope['user']

        if not self.user.is_authenticated:
            logger.warning("❌ Conexão WebSocket rejeitada - usuário não autenticado")
            await self.close()
            return

        self.organizacao_id = getattr(self.user, 'organizacao_id', None)
        if not self.organizacao_id:
            logger.warning(f"❌ Conexão WebSocket rejeitada - {self.user.username} sem organização")
            await self.close()
            return

        self.grupo = grupo_slots(self.organizacao_id)
        await self.channel_layer.group_add(self.grupo, self.channel_name)
        await self.accept()

        self.notificador = NotificadorToasts()
        self.loja = LojaSlotsRemota(self.user)
        dados = await self.loja.listar_quadro()
        self.quadro = QuadroSlots(
            dados['slotadas'] + dados['sem_slot'],
            dados['total_slots'],
            loja=self.loja,
            notificador=self.notificador,
        )

        await self.enviar_quadro(heartbeat=settings.ORBITA_WS_HEARTBEAT_INTERVAL)
        logger.info(f"✅ WebSocket conectado - {self.user.username} no quadro de slots da organização {self.organizacao_id}")

    async def disconnect(self, close_code):
        if hasattr(self, 'grupo'):
            await self.channel_layer.group_discard(self.grupo, self.channel_name)

        logger.info(f"🔌 WebSocket desconectado - {self.user.username} do quadro de slots")

    async def receive(self, text_data):
        """
        Recebe eventos do cliente e despacha pelo tipo
        """
        try:
            data = json.loads(text_data)
        except json.JSONDecodeError:
            logger.error(f"❌ JSON inválido recebido via WebSocket de {self.user.username}")
            return

        if not isinstance(data, dict):
            logger.error(f"❌ Mensagem WebSocket inválida de {self.user.username}")
            return

        message_type = data.get('type')
        handler = self.HANDLERS.get(message_type)
        if handler is None:
            logger.warning(f"⚠️ Tipo de mensagem desconhecido: {message_type}")
            return

        try:
            mutou = await handler(self, data)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"⚠️ Payload inválido em '{message_type}' de {self.user.username}: {e}")
            return

        await self.enviar_toasts()

        if mutou:
            await self.channel_layer.group_send(
                self.grupo,
                {
                    'type': 'slots_atualizados',
                    'message': {
                        'acao': message_type,
                        'usuario': self.user.get_full_name() or self.user.username,
                        'timestamp': self.get_timestamp()
                    }
                }
            )

    # === Handlers de mensagens do cliente ===

    async def handle_ping(self, data):
        await self.send_json({'type': 'pong', 'timestamp': self.get_timestamp()})

    async def handle_sync(self, data):
        await self.recarregar()
        await self.enviar_quadro()

    async def handle_definir_filtros(self, data):
        self.quadro.definir_filtros(FiltrosSlots.from_dict(data))
        await self.enviar_quadro()

    async def handle_drag_start(self, data):
        card = self._card(data)
        iniciar = getattr(card, 'ao_iniciar_arraste', None)
        if iniciar is None:
            return
        iniciar()
        await self.enviar_marcador()

    async def handle_drag_over(self, data):
        card = self._card(data)
        arrastar_sobre = getattr(card, 'ao_arrastar_sobre', None)
        if arrastar_sobre is None:
            return
        arrastar_sobre(float(data['x']), float(data['y']), data['retangulo'])
        await self.enviar_marcador()

    async def handle_drag_leave(self, data):
        if 'numero_slot' in data:
            sair = getattr(self._card(data), 'ao_sair', None)
            if sair is None:
                return
        else:
            sair = self.quadro.sair_do_alvo
        sair()
        await self.enviar_marcador()

    async def handle_drop(self, data):
        card = self._card(data)
        soltar = getattr(card, 'ao_soltar', None)
        if soltar is None:
            return False
        confirmado = await soltar(float(data['x']), float(data['y']), data['retangulo'])
        if not confirmado:
            await self.enviar_marcador()
        return confirmado

    async def handle_drag_end(self, data):
        self.quadro.finalizar_arraste()
        await self.enviar_marcador()

    async def handle_abrir_seletor(self, data):
        card = self._card(data)
        if getattr(card, 'ao_clicar', None) is None:
            return
        iniciativas = self.quadro.abrir_seletor(card.numero_slot, str(data.get('busca') or ''))
        await self.send_json({
            'type': 'seletor',
            'numero_slot': card.numero_slot,
            'iniciativas': [iniciativa.to_dict() for iniciativa in iniciativas],
        })

    async def handle_atribuir(self, data):
        return await self.quadro.atribuir(str(data['iniciativa_id']), int(data['numero_slot']))

    async def handle_remover(self, data):
        return await self.quadro.remover(int(data['numero_slot']))

    HANDLERS = {
        'ping': handle_ping,
        'sync_slots': handle_sync,
        'definir_filtros': handle_definir_filtros,
        'drag_start': handle_drag_start,
        'drag_over': handle_drag_over,
        'drag_leave': handle_drag_leave,
        'drop': handle_drop,
        'drag_end': handle_drag_end,
        'abrir_seletor': handle_abrir_seletor,
        'atribuir': handle_atribuir,
        'remover': handle_remover,
    }

    # === Eventos do grupo ===

    async def slots_atualizados(self, event):
        """
        Outra conexão (ou uma view) alterou os slots: refetch e reenvio
        """
        await self.recarregar()
        await self.enviar_quadro(motivo=event['message'])

    # === Métodos auxiliares ===

    def _card(self, data):
        return self.quadro.card(int(data['numero_slot']))

    async def recarregar(self):
        dados = await self.loja.listar_quadro()
        self.quadro.atualizar_iniciativas(
            dados['slotadas'] + dados['sem_slot'],
            dados['total_slots'],
        )

    async def send_json(self, content):
        await self.send(text_data=json.dumps(content))

    async def enviar_quadro(self, **extra):
        await self.send_json({
            'type': 'board_sync',
            'quadro': self.quadro.to_dict(),
            'timestamp': self.get_timestamp(),
            **extra,
        })

    async def enviar_marcador(self):
        posicao = self.quadro.posicao_alvo
        await self.send_json({
            'type': 'marcador',
            'numero_slot': self.quadro.slot_alvo,
            'modo': posicao.modo if posicao else None,
            'direcao': posicao.direcao_insercao if posicao else None,
            'arraste': self.quadro.estado_arraste(),
        })

    async def enviar_toasts(self):
        for toast in self.notificador.consumir():
            await self.send_json({'type': 'toast', **toast.to_dict()})

    def get_timestamp(self):
        return timezone.now().isoformat()
