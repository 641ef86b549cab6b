# tests/test_filtros.py
"""
Testes dos filtros do quadro (equipe / responsável)
"""
from apps.iniciativas.filtros import SEM_FILTROS, FiltrosSlots
from apps.iniciativas.tipos import IniciativaSlot


class TestFiltrosSlots:

    def test_sem_filtros_corresponde_a_tudo(self, iniciativas):
        assert not SEM_FILTROS.tem_filtros_ativos
        assert all(SEM_FILTROS.corresponde(i) for i in iniciativas)

    def test_filtro_por_equipe(self, iniciativas):
        """Test: iniciativa da equipe T2 não corresponde ao filtro {T1}."""
        alfa, beta, _ = iniciativas
        filtros = FiltrosSlots.criar(ids_equipes=['T1'])

        assert filtros.tem_filtros_ativos
        assert filtros.corresponde(alfa)
        assert not filtros.corresponde(beta)

    def test_iniciativa_sem_equipe_nao_corresponde_a_filtro_de_equipe(self):
        filtros = FiltrosSlots.criar(ids_equipes=['T1'])
        assert not filtros.corresponde(IniciativaSlot(id='X', titulo='Sem equipe'))

    def test_filtro_por_pessoa_e_ou_dentro_da_dimensao(self, iniciativas):
        alfa, beta, gama = iniciativas
        filtros = FiltrosSlots.criar(ids_pessoas=['P1', 'P2'])

        assert filtros.corresponde(alfa)
        assert filtros.corresponde(beta)
        assert not filtros.corresponde(gama)

    def test_dimensoes_combinadas_com_e(self, iniciativas):
        alfa, beta, _ = iniciativas
        filtros = FiltrosSlots.criar(ids_equipes=['T1'], ids_pessoas=['P2'])

        assert not filtros.corresponde(alfa)
        assert not filtros.corresponde(beta)

    def test_ids_normalizados_para_string(self):
        filtros = FiltrosSlots.criar(ids_equipes=[1, 2], ids_pessoas=[])
        assert filtros.ids_equipes == frozenset({'1', '2'})
        assert filtros.to_dict() == {'equipes': ['1', '2'], 'pessoas': []}

    def test_from_dict(self):
        filtros = FiltrosSlots.from_dict({'equipes': None, 'pessoas': ['P1']})
        assert filtros == FiltrosSlots.criar(ids_pessoas=['P1'])
