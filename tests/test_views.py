# tests/test_views.py
"""
Testes das views HTTP do quadro de slots
"""
import json
import re

import pytest
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.urls import reverse

from apps.iniciativas.models import Iniciativa


def _post_json(client, url, dados):
    return client.post(url, data=json.dumps(dados), content_type='application/json')


@pytest.fixture
def quadro_abc(criar_iniciativa, equipe, outra_equipe):
    return (
        criar_iniciativa('Alfa', slot=1, equipe=equipe),
        criar_iniciativa('Beta', slot=2, equipe=outra_equipe),
        criar_iniciativa('Gama'),
    )


@pytest.fixture
def cliente_gerente(client, gerente):
    client.force_login(gerente)
    return client


@pytest.mark.django_db
class TestQuadroSlotsView:

    def test_exige_login(self, client):
        response = client.get(reverse('iniciativas:slots'))

        assert response.status_code == 302
        assert response.url.startswith('/admin/login/')

    def test_exige_organizacao(self, client, sem_organizacao):
        client.force_login(sem_organizacao)

        response = client.get(reverse('iniciativas:slots'))

        assert response.status_code == 302
        assert response.url == reverse('admin:index')

    def test_renderiza_cards(self, cliente_gerente, quadro_abc):
        response = cliente_gerente.get(reverse('iniciativas:slots'))

        assert response.status_code == 200
        html = response.content.decode()
        assert 'id="slot-1"' in html
        assert 'id="slot-3"' in html
        assert 'slot-card--vazio' in html
        assert len(response.context['cards_html']) == 3
        assert [i.titulo for i in response.context['sem_slot']] == ['Gama']
        assert response['X-Organizacao'] == str(quadro_abc[0].organizacao_id)

    def test_filtro_por_equipe_deixa_outras_somente_leitura(self, cliente_gerente, quadro_abc, equipe):
        response = cliente_gerente.get(reverse('iniciativas:slots'), {'equipes': [equipe.pk]})

        assert response.status_code == 200
        assert response.context['tem_filtros_ativos'] is True
        assert 'slot-card--somente_leitura' in response.content.decode()
        assert 'Com filtros ativos' in response.content.decode()

    def test_form_de_filtros_troca_apenas_o_quadro(self, cliente_gerente, quadro_abc, equipe):
        """Test: uma mudança de filtro gera um único GET e não reexecuta o script do socket."""
        response = cliente_gerente.get(reverse('iniciativas:slots'), {'equipes': [equipe.pk]})
        html = response.content.decode()

        selects = re.findall(r'<select[^>]*>', html)
        assert len(selects) == 2
        assert all('hx-get' not in select and 'hx-trigger' not in select for select in selects)

        form = re.search(r'<form[^>]*id="form-filtros"[^>]*>', html).group(0)
        assert 'hx-target="#quadro-slots"' in form
        assert 'hx-target="body"' not in form

        # o script fica fora da região trocada pelo htmx
        quadro = re.search(r'<main id="quadro-slots".*?</main>', html, re.S).group(0)
        assert 'slots.js' not in quadro
        assert 'slots.js' in html

    def test_aviso_de_filtros_oculto_sem_filtros(self, cliente_gerente, quadro_abc):
        html = cliente_gerente.get(reverse('iniciativas:slots')).content.decode()

        assert re.search(r'id="filtros-ativos" hidden', html)

    def test_filtro_de_outra_organizacao_e_ignorado(self, cliente_gerente, quadro_abc, outra_organizacao):
        from apps.core.models import Equipe
        estranha = Equipe.objects.create(organizacao=outra_organizacao, nome='Estranha')

        response = cliente_gerente.get(reverse('iniciativas:slots'), {'equipes': [estranha.pk]})

        assert response.status_code == 200
        assert response.context['tem_filtros_ativos'] is False


@pytest.mark.django_db
class TestSeletor:

    def test_modal(self, cliente_gerente, quadro_abc):
        response = cliente_gerente.get(reverse('iniciativas:seletor_slot', args=[3]))

        assert response.status_code == 200
        html = response.content.decode()
        assert 'Atribuir ao slot 3' in html
        assert 'Gama' in html
        assert 'Alfa' not in html

    def test_busca_json(self, cliente_gerente, quadro_abc, criar_iniciativa):
        criar_iniciativa('Delta')

        response = cliente_gerente.get(reverse('iniciativas:buscar_sem_slot'), {'q': 'del'})

        assert response.json()['total'] == 1
        assert response.json()['resultados'][0]['titulo'] == 'Delta'

    def test_busca_sem_organizacao(self, client, sem_organizacao):
        client.force_login(sem_organizacao)

        response = client.get(reverse('iniciativas:buscar_sem_slot'))

        assert response.status_code == 403
        assert response.json()['success'] is False


@pytest.mark.django_db
class TestMutacoesAjax:

    def test_atribuir(self, cliente_gerente, quadro_abc):
        _, _, gama = quadro_abc

        response = _post_json(cliente_gerente, reverse('iniciativas:atribuir_slot'), {
            'iniciativa_id': gama.pk,
            'numero_slot': 3,
        })

        assert response.json() == {'success': True, 'message': '"Gama" atribuída ao slot 3'}
        gama.refresh_from_db()
        assert gama.slot == 3

    def test_atribuir_slot_ocupado(self, cliente_gerente, quadro_abc):
        _, _, gama = quadro_abc

        response = _post_json(cliente_gerente, reverse('iniciativas:atribuir_slot'), {
            'iniciativa_id': gama.pk,
            'numero_slot': 1,
        })

        assert response.status_code == 200
        assert response.json() == {
            'success': False,
            'error': 'Este slot já está atribuído a outra iniciativa',
        }

    def test_json_invalido(self, cliente_gerente, quadro_abc):
        response = cliente_gerente.post(
            reverse('iniciativas:atribuir_slot'), data='{quebrado', content_type='application/json'
        )

        assert response.status_code == 400
        assert response.json()['error'] == 'JSON inválido'

    def test_payload_invalido(self, cliente_gerente, quadro_abc):
        response = _post_json(cliente_gerente, reverse('iniciativas:atribuir_slot'), {'iniciativa_id': 1})

        assert response.status_code == 400
        assert response.json()['error'].startswith('numero_slot:')

    def test_exige_post(self, cliente_gerente):
        assert cliente_gerente.get(reverse('iniciativas:trocar_slots')).status_code == 405

    def test_trocar(self, cliente_gerente, quadro_abc):
        alfa, beta, _ = quadro_abc

        response = _post_json(cliente_gerente, reverse('iniciativas:trocar_slots'), {
            'iniciativa_id': alfa.pk,
            'numero_slot': 2,
            'iniciativa_alvo_id': beta.pk,
        })

        assert response.json()['message'] == '"Alfa" e "Beta" trocaram de slot'
        assert list(Iniciativa.objects.order_by('titulo').values_list('slot', flat=True)) == [2, 1, None]

    def test_mover(self, cliente_gerente, quadro_abc):
        alfa, _, _ = quadro_abc

        response = _post_json(cliente_gerente, reverse('iniciativas:trocar_slots'), {
            'iniciativa_id': alfa.pk,
            'numero_slot': 3,
        })

        assert response.json()['message'] == '"Alfa" movida para o slot 3'

    def test_remover(self, cliente_gerente, quadro_abc):
        alfa, _, _ = quadro_abc

        response = _post_json(cliente_gerente, reverse('iniciativas:remover_slot'), {'iniciativa_id': alfa.pk})

        assert response.json() == {'success': True, 'message': '"Alfa" removida do slot 1'}

    def test_status_concluida_libera_slot(self, cliente_gerente, quadro_abc):
        alfa, _, _ = quadro_abc

        response = _post_json(
            cliente_gerente, reverse('iniciativas:atualizar_status', args=[alfa.pk]), {'status': 'concluida'}
        )

        assert response.json()['success'] is True
        assert response.json()['slot'] is None

    def test_status_com_erro_inesperado_devolve_envelope(self, cliente_gerente, quadro_abc, monkeypatch):
        """Test: falha inesperada no status vira JSON de erro, não 500."""
        from apps.iniciativas.services import SlotService

        def explodir(self, iniciativa_id, status):
            raise RuntimeError('banco indisponível')

        monkeypatch.setattr(SlotService, 'atualizar_status', explodir)

        response = _post_json(
            cliente_gerente, reverse('iniciativas:atualizar_status', args=[quadro_abc[0].pk]), {'status': 'pausada'}
        )

        assert response.status_code == 200
        assert response.json() == {'success': False, 'error': 'Falha ao atualizar status'}

    def test_status_de_outra_organizacao_e_404(self, client, intruso, quadro_abc):
        client.force_login(intruso)

        response = _post_json(
            client, reverse('iniciativas:atualizar_status', args=[quadro_abc[0].pk]), {'status': 'concluida'}
        )

        assert response.status_code == 404

    def test_funcionario_sem_permissao(self, client, funcionario, quadro_abc):
        client.force_login(funcionario)

        response = _post_json(client, reverse('iniciativas:remover_slot'), {'iniciativa_id': quadro_abc[0].pk})

        assert response.json() == {
            'success': False,
            'error': 'Você não tem permissão para editar esta iniciativa',
        }

    def test_mutacao_avisa_grupo_da_organizacao(self, cliente_gerente, quadro_abc, organizacao):
        _, _, gama = quadro_abc
        channel_layer = get_channel_layer()
        canal = async_to_sync(channel_layer.new_channel)()
        async_to_sync(channel_layer.group_add)(f'slots_{organizacao.pk}', canal)

        _post_json(cliente_gerente, reverse('iniciativas:atribuir_slot'), {
            'iniciativa_id': gama.pk,
            'numero_slot': 3,
        })

        mensagem = async_to_sync(channel_layer.receive)(canal)
        assert mensagem['type'] == 'slots_atualizados'
        assert mensagem['message']['acao'] == 'atribuir'
        async_to_sync(channel_layer.group_discard)(f'slots_{organizacao.pk}', canal)
