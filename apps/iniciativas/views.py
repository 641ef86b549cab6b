# apps/iniciativas/views.py

import json
import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.shortcuts import render
from django.utils import timezone
from django.views.decorators.http import require_GET, require_POST

from apps.core.permissions import requer_organizacao, ajax_requer_organizacao
from .filtros import FiltrosSlots
from .forms import (
    AtribuirSlotForm,
    FiltrosSlotsForm,
    RemoverSlotForm,
    StatusIniciativaForm,
    TrocarSlotForm,
    primeiro_erro,
)
from .notificacoes import (
    FALHA_ATRIBUIR,
    FALHA_REMOVER,
    FALHA_STATUS,
    FALHA_TROCAR,
    mensagem_atribuida,
    mensagem_erro,
    mensagem_movida,
    mensagem_removida,
    mensagem_troca,
)
from .quadro import QuadroSlots
from .services import LojaSlotsRemota, SlotError, SlotService

logger = logging.getLogger(__name__)


def grupo_slots(organizacao_id):
    return f'slots_{organizacao_id}'


def notificar_quadro(request, acao):
    """Avisa todos os quadros abertos da organização para recarregar"""
    channel_layer = get_channel_layer()
    async_to_sync(channel_layer.group_send)(
        grupo_slots(request.organizacao_id),
        {
            'type': 'slots_atualizados',
            'message': {
                'acao': acao,
                'usuario': request.user.get_full_name() or request.user.username,
                'timestamp': timezone.now().isoformat()
            }
        }
    )


def _ler_json(request):
    """Corpo JSON da requisição; None se inválido"""
    try:
        data = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return data if isinstance(data, dict) else None


def _erro(mensagem, status=200):
    return JsonResponse({'success': False, 'error': mensagem}, status=status)


@login_required
@requer_organizacao
def quadro_slots_view(request):
    """
    Página principal do quadro de slots
    Renderiza os cards; o drag-and-drop conversa pelo WebSocket
    """
    service = SlotService(request.user)

    form_filtros = FiltrosSlotsForm(request.GET or None, organizacao_id=request.organizacao_id)
    filtros = FiltrosSlots()
    if form_filtros.is_bound:
        if form_filtros.is_valid():
            filtros = form_filtros.to_filtros()
        else:
            messages.warning(request, 'Filtros inválidos foram ignorados.')

    dados = service.listar_quadro()
    quadro = QuadroSlots(
        dados['slotadas'] + dados['sem_slot'],
        dados['total_slots'],
        loja=LojaSlotsRemota(request.user),
        filtros=filtros,
    )

    context = {
        'title': 'Slots de Iniciativas',
        'quadro': quadro,
        'cards_html': [card.render() for card in quadro.cards()],
        'sem_slot': quadro.iniciativas_sem_slot(),
        'form_filtros': form_filtros,
        'tem_filtros_ativos': quadro.tem_filtros_ativos,
        'filtros': filtros.to_dict(),
        'websocket_path': '/ws/iniciativas/slots/',
    }

    return render(request, 'iniciativas/slots.html', context)


@login_required
@require_GET
@requer_organizacao
def seletor_slot_modal(request, numero_slot):
    """
    Modal para atribuir uma iniciativa sem slot ao slot clicado
    """
    busca = request.GET.get('q', '').strip()
    iniciativas = SlotService(request.user).buscar_sem_slot(busca)

    context = {
        'numero_slot': numero_slot,
        'busca': busca,
        'iniciativas': [iniciativa.to_dict() for iniciativa in iniciativas],
    }

    return render(request, 'iniciativas/partials/seletor_modal.html', context)


@login_required
@require_GET
@ajax_requer_organizacao
def buscar_sem_slot(request):
    """
    Busca iniciativas sem slot (para o seletor)
    """
    busca = request.GET.get('q', '').strip()
    resultados = [i.to_dict() for i in SlotService(request.user).buscar_sem_slot(busca)]

    return JsonResponse({
        'resultados': resultados,
        'total': len(resultados)
    })


@login_required
@require_POST
@ajax_requer_organizacao
def atribuir_slot_ajax(request):
    """
    Atribui iniciativa sem slot a um slot vazio
    """
    data = _ler_json(request)
    if data is None:
        return _erro('JSON inválido', status=400)

    form = AtribuirSlotForm(data)
    if not form.is_valid():
        return _erro(primeiro_erro(form), status=400)

    numero_slot = form.cleaned_data['numero_slot']
    try:
        iniciativa = SlotService(request.user).atribuir(form.cleaned_data['iniciativa_id'], numero_slot)
    except SlotError as e:
        return _erro(mensagem_erro(e, FALHA_ATRIBUIR))
    except Exception:
        logger.exception("❌ Erro inesperado ao atribuir slot")
        return _erro(FALHA_ATRIBUIR)

    notificar_quadro(request, 'atribuir')

    return JsonResponse({
        'success': True,
        'message': mensagem_atribuida(iniciativa.titulo, numero_slot)
    })


@login_required
@require_POST
@ajax_requer_organizacao
def remover_slot_ajax(request):
    """
    Remove iniciativa do slot (volta para o pool)
    """
    data = _ler_json(request)
    if data is None:
        return _erro('JSON inválido', status=400)

    form = RemoverSlotForm(data)
    if not form.is_valid():
        return _erro(primeiro_erro(form), status=400)

    try:
        iniciativa, slot_anterior = SlotService(request.user).remover_do_slot(form.cleaned_data['iniciativa_id'])
    except SlotError as e:
        return _erro(mensagem_erro(e, FALHA_REMOVER))
    except Exception:
        logger.exception("❌ Erro inesperado ao remover do slot")
        return _erro(FALHA_REMOVER)

    notificar_quadro(request, 'remover')

    return JsonResponse({
        'success': True,
        'message': mensagem_removida(iniciativa.titulo, slot_anterior)
    })


@login_required
@require_POST
@ajax_requer_organizacao
def trocar_slots_ajax(request):
    """
    Troca/move iniciativa entre slots via AJAX
    Caminho alternativo ao WebSocket para o drag-and-drop
    """
    data = _ler_json(request)
    if data is None:
        return _erro('JSON inválido', status=400)

    form = TrocarSlotForm(data)
    if not form.is_valid():
        return _erro(primeiro_erro(form), status=400)

    numero_slot = form.cleaned_data['numero_slot']
    try:
        arrastada, alvo = SlotService(request.user).trocar(
            form.cleaned_data['iniciativa_id'],
            numero_slot,
            form.cleaned_data['iniciativa_alvo_id'],
        )
    except SlotError as e:
        return _erro(mensagem_erro(e, FALHA_TROCAR))
    except Exception:
        logger.exception("❌ Erro inesperado ao trocar slots")
        return _erro(FALHA_TROCAR)

    notificar_quadro(request, 'trocar')

    if alvo is not None:
        mensagem = mensagem_troca(arrastada.titulo, alvo.titulo)
    else:
        mensagem = mensagem_movida(arrastada.titulo, numero_slot)

    return JsonResponse({'success': True, 'message': mensagem})


@login_required
@require_POST
@ajax_requer_organizacao
def atualizar_status_ajax(request, iniciativa_id):
    """
    Atualiza o status; concluir/cancelar libera o slot
    """
    data = _ler_json(request)
    if data is None:
        return _erro('JSON inválido', status=400)

    form = StatusIniciativaForm(data)
    if not form.is_valid():
        return _erro(primeiro_erro(form), status=400)

    try:
        iniciativa = SlotService(request.user).atualizar_status(iniciativa_id, form.cleaned_data['status'])
    except SlotError as e:
        return _erro(mensagem_erro(e, FALHA_STATUS))
    except Exception:
        logger.exception("❌ Erro inesperado ao atualizar status")
        return _erro(FALHA_STATUS)

    notificar_quadro(request, 'status')

    return JsonResponse({
        'success': True,
        'message': f'Status de "{iniciativa.titulo}" atualizado para {iniciativa.get_status_display()}',
        'slot': iniciativa.slot,
    })
