# apps/iniciativas/geometria.py

"""
Resolução geométrica do drag-and-drop do quadro de slots

Dada a posição do ponteiro dentro do card alvo, decide se o drop
significa INSERIR ao lado do card (faixas de borda) ou TROCAR com ele
(região central). Função pura, chamada a cada evento de drag-over.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

# Valores trafegados para o cliente (CSS/JS) - não traduzir
MODO_INSERIR = 'insert'
MODO_TROCAR = 'swap'

DIRECAO_ESQUERDA = 'left'
DIRECAO_DIREITA = 'right'
DIRECAO_TOPO = 'top'
DIRECAO_BASE = 'bottom'

# Ordem fixa de preferência para desempate (cantos)
ORDEM_DIRECOES = (DIRECAO_ESQUERDA, DIRECAO_DIREITA, DIRECAO_TOPO, DIRECAO_BASE)

# Fração da largura/altura que conta como faixa de borda
LIMIAR_BORDA = 0.25


@dataclass(frozen=True)
class Retangulo:
    """Bounding box do card em coordenadas de cliente"""

    left: float
    top: float
    width: float
    height: float

    @classmethod
    def from_dict(cls, dados: dict) -> 'Retangulo':
        if not isinstance(dados, dict):
            raise TypeError(f'Retângulo inválido: {dados!r}')
        return cls(
            left=float(dados.get('left', 0)),
            top=float(dados.get('top', 0)),
            width=float(dados.get('width', 0)),
            height=float(dados.get('height', 0)),
        )


@dataclass(frozen=True)
class PosicaoDrag:
    """Intenção de drop sobre um slot"""

    numero_slot: int
    modo: str
    direcao_insercao: Optional[str] = None

    @property
    def is_insercao(self) -> bool:
        return self.modo == MODO_INSERIR

    def to_dict(self) -> dict:
        return {
            'numero_slot': self.numero_slot,
            'modo': self.modo,
            'direcao': self.direcao_insercao,
        }


def _relativo(valor: float, inicio: float, tamanho: float) -> float:
    # Card degenerado: trata como centro do eixo
    if tamanho <= 0:
        return 0.5
    return min(1.0, max(0.0, (valor - inicio) / tamanho))


def resolver_posicao_relativa(rel_x: float, rel_y: float) -> Tuple[str, Optional[str]]:
    """
    Resolve (modo, direção) para uma posição relativa em [0, 1] x [0, 1]

    Exemplos:
        (0.1, 0.5) -> ('insert', 'left')
        (0.5, 0.5) -> ('swap', None)
        (0.1, 0.1) -> ('insert', 'left')   # canto: esquerda vence o topo
    """
    zonas = {
        DIRECAO_ESQUERDA: rel_x < LIMIAR_BORDA,
        DIRECAO_DIREITA: rel_x > 1 - LIMIAR_BORDA,
        DIRECAO_TOPO: rel_y < LIMIAR_BORDA,
        DIRECAO_BASE: rel_y > 1 - LIMIAR_BORDA,
    }

    if any(zonas.values()):
        distancias = {
            DIRECAO_ESQUERDA: rel_x,
            DIRECAO_DIREITA: 1 - rel_x,
            DIRECAO_TOPO: rel_y,
            DIRECAO_BASE: 1 - rel_y,
        }
        menor = min(distancias.values())

        for direcao in ORDEM_DIRECOES:
            if zonas[direcao] and distancias[direcao] == menor:
                return MODO_INSERIR, direcao

    return MODO_TROCAR, None


def resolver_posicao_drag(x: float, y: float, retangulo: Retangulo, numero_slot: int) -> PosicaoDrag:
    """Converte coordenadas de cliente do ponteiro em PosicaoDrag para o slot"""
    rel_x = _relativo(x, retangulo.left, retangulo.width)
    rel_y = _relativo(y, retangulo.top, retangulo.height)

    modo, direcao = resolver_posicao_relativa(rel_x, rel_y)
    return PosicaoDrag(numero_slot=numero_slot, modo=modo, direcao_insercao=direcao)
