# tests/test_services.py
"""
Testes da loja de slots (SlotService) contra o banco
"""
import pytest
from asgiref.sync import async_to_sync

from apps.core.models import Pessoa
from apps.iniciativas.models import Iniciativa
from apps.iniciativas.services import (
    LojaSlotsRemota,
    SlotError,
    SlotPermissaoNegada,
    SlotService,
)


def _slots(*iniciativas):
    return [Iniciativa.objects.get(pk=i.pk).slot for i in iniciativas]


@pytest.fixture
def quadro_abc(criar_iniciativa):
    """A no slot 1, B no slot 2, C sem slot"""
    return (
        criar_iniciativa('Alfa', slot=1),
        criar_iniciativa('Beta', slot=2),
        criar_iniciativa('Gama'),
    )


@pytest.mark.django_db
class TestLeitura:

    def test_listar_quadro(self, gerente, quadro_abc, criar_iniciativa):
        criar_iniciativa('Encerrada', status='concluida')

        dados = SlotService(gerente).listar_quadro()

        assert [i.titulo for i in dados['slotadas']] == ['Alfa', 'Beta']
        assert [i.titulo for i in dados['sem_slot']] == ['Gama']
        assert dados['total_slots'] == 3

    def test_total_considera_maior_slot_ocupado(self, gerente, criar_iniciativa):
        criar_iniciativa('Alfa', slot=6)
        assert SlotService(gerente).total_slots() == 6

    def test_listar_isola_organizacao(self, intruso, quadro_abc):
        dados = SlotService(intruso).listar_quadro()
        assert dados == {'slotadas': [], 'sem_slot': [], 'total_slots': 0}

    def test_buscar_sem_slot(self, gerente, quadro_abc, criar_iniciativa):
        criar_iniciativa('Gamma Ray')

        assert [i.titulo for i in SlotService(gerente).buscar_sem_slot('gam')] == ['Gamma Ray', 'Gama']
        assert SlotService(gerente).buscar_sem_slot('alfa') == []

    def test_snapshot_com_equipe_e_responsaveis(self, gerente, criar_iniciativa, equipe, pessoa):
        criar_iniciativa('Alfa', slot=1, equipe=equipe, responsaveis=[pessoa])

        snapshot = SlotService(gerente).listar_quadro()['slotadas'][0]

        assert snapshot.equipe.nome == 'Plataforma'
        assert snapshot.ids_pessoas == (str(pessoa.pk),)
        assert snapshot.to_dict()['responsaveis'][0]['pessoa']['iniciais'] == 'AS'


@pytest.mark.django_db
class TestAtribuir:

    def test_atribuir_slot_vazio(self, gerente, quadro_abc):
        _, _, gama = quadro_abc

        SlotService(gerente).atribuir(gama.pk, 3)

        assert _slots(gama) == [3]

    def test_slot_fora_do_intervalo(self, gerente, quadro_abc):
        _, _, gama = quadro_abc

        with pytest.raises(SlotError, match='entre 1 e 3'):
            SlotService(gerente).atribuir(gama.pk, 4)

    def test_slot_ocupado(self, gerente, quadro_abc):
        _, _, gama = quadro_abc

        with pytest.raises(SlotError, match='já está atribuído'):
            SlotService(gerente).atribuir(gama.pk, 1)

    def test_iniciativa_ja_em_outro_slot(self, gerente, quadro_abc):
        alfa, _, _ = quadro_abc

        with pytest.raises(SlotError, match='já está no slot 1'):
            SlotService(gerente).atribuir(alfa.pk, 3)

    def test_iniciativa_inativa(self, gerente, quadro_abc, criar_iniciativa):
        encerrada = criar_iniciativa('Encerrada', status='cancelada')

        with pytest.raises(SlotError, match='inativa'):
            SlotService(gerente).atribuir(encerrada.pk, 3)


@pytest.mark.django_db
class TestTrocar:

    def test_mover_para_slot_vazio(self, gerente, quadro_abc):
        alfa, beta, _ = quadro_abc

        arrastada, alvo = SlotService(gerente).trocar(alfa.pk, 3)

        assert alvo is None
        assert arrastada.slot == 3
        assert _slots(alfa, beta) == [3, 2]

    def test_troca_entre_ocupados(self, gerente, quadro_abc):
        alfa, beta, _ = quadro_abc

        _, alvo = SlotService(gerente).trocar(alfa.pk, 2, beta.pk)

        assert alvo.pk == beta.pk
        assert _slots(alfa, beta) == [2, 1]

    def test_troca_ida_e_volta_restaura_slots(self, gerente, quadro_abc):
        alfa, beta, _ = quadro_abc
        service = SlotService(gerente)

        service.trocar(alfa.pk, 2, beta.pk)
        service.trocar(alfa.pk, 1, beta.pk)

        assert _slots(alfa, beta) == [1, 2]

    def test_arrastada_do_pool_manda_alvo_para_o_pool(self, gerente, quadro_abc):
        alfa, _, gama = quadro_abc

        SlotService(gerente).trocar(gama.pk, 1, alfa.pk)

        assert _slots(gama, alfa) == [1, None]

    def test_alvo_que_mudou_de_slot(self, gerente, quadro_abc):
        alfa, beta, _ = quadro_abc

        with pytest.raises(SlotError, match='não está mais no slot 3'):
            SlotService(gerente).trocar(alfa.pk, 3, beta.pk)

    def test_slot_ocupado_sem_alvo(self, gerente, quadro_abc):
        alfa, _, _ = quadro_abc

        with pytest.raises(SlotError, match='já está ocupado por "Beta"'):
            SlotService(gerente).trocar(alfa.pk, 2)

    def test_alvo_igual_a_arrastada_conta_como_sem_alvo(self, gerente, quadro_abc):
        alfa, _, _ = quadro_abc

        _, alvo = SlotService(gerente).trocar(alfa.pk, 3, alfa.pk)

        assert alvo is None
        assert _slots(alfa) == [3]

    def test_unicidade_apos_sequencia_de_operacoes(self, gerente, quadro_abc):
        alfa, beta, gama = quadro_abc
        service = SlotService(gerente)

        service.trocar(alfa.pk, 3)
        service.atribuir(gama.pk, 1)
        service.trocar(beta.pk, 3, alfa.pk)
        service.remover_do_slot(gama.pk)
        service.trocar(gama.pk, 2, alfa.pk)

        slots = [s for s in Iniciativa.objects.values_list('slot', flat=True) if s is not None]
        assert len(slots) == len(set(slots))
        assert _slots(alfa, beta, gama) == [None, 3, 2]


@pytest.mark.django_db
class TestRemoverEStatus:

    def test_remover_do_slot(self, gerente, quadro_abc):
        alfa, _, _ = quadro_abc

        iniciativa, slot_anterior = SlotService(gerente).remover_do_slot(alfa.pk)

        assert slot_anterior == 1
        assert iniciativa.slot is None
        assert _slots(alfa) == [None]

    def test_remover_sem_slot(self, gerente, quadro_abc):
        _, _, gama = quadro_abc

        with pytest.raises(SlotError, match='não está em nenhum slot'):
            SlotService(gerente).remover_do_slot(gama.pk)

    @pytest.mark.parametrize('status', ['concluida', 'cancelada'])
    def test_encerrar_libera_slot(self, gerente, quadro_abc, status):
        alfa, _, _ = quadro_abc

        SlotService(gerente).atualizar_status(alfa.pk, status)

        assert _slots(alfa) == [None]

    def test_pausar_mantem_slot(self, gerente, quadro_abc):
        alfa, _, _ = quadro_abc
        SlotService(gerente).atualizar_status(alfa.pk, 'pausada')
        assert _slots(alfa) == [1]

    def test_status_invalido(self, gerente, quadro_abc):
        with pytest.raises(SlotError, match='Status inválido'):
            SlotService(gerente).atualizar_status(quadro_abc[0].pk, 'arquivada')


@pytest.mark.django_db
class TestPermissoes:

    def test_outra_organizacao_nao_enxerga(self, intruso, quadro_abc):
        alfa, _, _ = quadro_abc

        with pytest.raises(SlotError, match='não encontrada'):
            SlotService(intruso).trocar(alfa.pk, 3)
        assert _slots(alfa) == [1]

    def test_funcionario_nao_move_iniciativa_alheia(self, funcionario, quadro_abc):
        alfa, _, _ = quadro_abc

        with pytest.raises(SlotPermissaoNegada):
            SlotService(funcionario).trocar(alfa.pk, 3)

    def test_funcionario_responsavel_pode_mover(self, funcionario, organizacao, criar_iniciativa, quadro_abc):
        pessoa = Pessoa.objects.create(organizacao=organizacao, nome='Func', usuario=funcionario)
        propria = criar_iniciativa('Própria', responsaveis=[pessoa])

        SlotService(funcionario).atribuir(propria.pk, 3)

        assert _slots(propria) == [3]

    def test_usuario_sem_organizacao(self, sem_organizacao):
        with pytest.raises(SlotError, match='organização'):
            SlotService(sem_organizacao).listar_quadro()

    def test_id_invalido(self, gerente, quadro_abc):
        with pytest.raises(SlotError):
            SlotService(gerente).remover_do_slot('abc')


@pytest.mark.django_db(transaction=True)
class TestLojaSlotsRemota:

    def test_operacoes_assincronas(self, gerente, quadro_abc):
        alfa, beta, gama = quadro_abc
        loja = LojaSlotsRemota(gerente)

        async_to_sync(loja.trocar)(str(alfa.pk), 2, str(beta.pk))
        async_to_sync(loja.atribuir)(str(gama.pk), 3)
        async_to_sync(loja.remover_do_slot)(str(beta.pk))
        dados = async_to_sync(loja.listar_quadro)()

        assert _slots(alfa, beta, gama) == [2, None, 3]
        assert [i.titulo for i in dados['slotadas']] == ['Alfa', 'Gama']

    def test_erro_propaga(self, gerente, quadro_abc):
        _, _, gama = quadro_abc

        with pytest.raises(SlotError):
            async_to_sync(LojaSlotsRemota(gerente).atribuir)(str(gama.pk), 1)
