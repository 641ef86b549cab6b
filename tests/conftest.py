# tests/conftest.py

import pytest

from apps.core.models import Organizacao, Usuario, Equipe, Pessoa
from apps.iniciativas.models import Iniciativa, IniciativaResponsavel
from apps.iniciativas.tipos import EquipeResumo, IniciativaSlot, PessoaResumo


# === Snapshots (sem banco) ===

@pytest.fixture
def plataforma():
    return EquipeResumo(id='T1', nome='Plataforma')


@pytest.fixture
def produto():
    return EquipeResumo(id='T2', nome='Produto')


@pytest.fixture
def ana():
    return PessoaResumo(id='P1', nome='Ana Souza')


@pytest.fixture
def bruno():
    return PessoaResumo(id='P2', nome='Bruno Lima')


@pytest.fixture
def iniciativas(plataforma, produto, ana, bruno):
    """A no slot 1, B no slot 2, C sem slot (total de 3 slots)"""
    return [
        IniciativaSlot(id='A', titulo='Alfa', slot=1, equipe=plataforma, responsaveis=(ana,)),
        IniciativaSlot(id='B', titulo='Beta', slot=2, equipe=produto, responsaveis=(bruno,)),
        IniciativaSlot(id='C', titulo='Gama', equipe=plataforma),
    ]


# === Banco ===

@pytest.fixture
def organizacao(db):
    return Organizacao.objects.create(nome='Acme', slug='acme')


@pytest.fixture
def outra_organizacao(db):
    return Organizacao.objects.create(nome='Globex', slug='globex')


def _criar_usuario(username, tipo, organizacao):
    return Usuario.objects.create_user(
        username=username,
        password='senha-teste',
        first_name=username.capitalize(),
        tipo=tipo,
        organizacao=organizacao,
    )


@pytest.fixture
def gerente(organizacao):
    return _criar_usuario('gerente', 'gerente', organizacao)


@pytest.fixture
def funcionario(organizacao):
    return _criar_usuario('funcionario', 'funcionario', organizacao)


@pytest.fixture
def intruso(outra_organizacao):
    return _criar_usuario('intruso', 'admin', outra_organizacao)


@pytest.fixture
def sem_organizacao(db):
    return _criar_usuario('avulso', 'funcionario', None)


@pytest.fixture
def equipe(organizacao):
    return Equipe.objects.create(organizacao=organizacao, nome='Plataforma')


@pytest.fixture
def outra_equipe(organizacao):
    return Equipe.objects.create(organizacao=organizacao, nome='Produto')


@pytest.fixture
def pessoa(organizacao, equipe):
    return Pessoa.objects.create(organizacao=organizacao, nome='Ana Souza', equipe=equipe)


@pytest.fixture
def criar_iniciativa(organizacao, gerente):
    """Factory de iniciativas da organização padrão"""

    def _criar(titulo, slot=None, status='planejada', equipe=None, responsaveis=(), org=None):
        iniciativa = Iniciativa.objects.create(
            organizacao=org or organizacao,
            titulo=titulo,
            slot=slot,
            status=status,
            equipe=equipe,
            criado_por=gerente,
        )
        for pessoa in responsaveis:
            IniciativaResponsavel.objects.create(iniciativa=iniciativa, pessoa=pessoa)
        return iniciativa

    return _criar
