# apps/iniciativas/tipos.py

"""
Snapshot das iniciativas usado pelo quadro de slots

O quadro e os cards trabalham com cópias imutáveis (e serializáveis)
das iniciativas, nunca com instâncias do ORM: o quadro vive dentro do
consumer WebSocket e não pode disparar queries ao acessar relações.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from apps.core.utils import gerar_cor_avatar, gerar_iniciais


@dataclass(frozen=True)
class EquipeResumo:
    id: str
    nome: str

    def to_dict(self) -> dict:
        return {'id': self.id, 'nome': self.nome}


@dataclass(frozen=True)
class PessoaResumo:
    id: str
    nome: str
    avatar: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'nome': self.nome,
            'avatar': self.avatar,
            'cor_avatar': gerar_cor_avatar(self.nome),
            'iniciais': gerar_iniciais(self.nome),
        }


@dataclass(frozen=True)
class IniciativaSlot:
    id: str
    titulo: str
    status: str = 'planejada'
    rag: str = 'verde'
    slot: Optional[int] = None
    equipe: Optional[EquipeResumo] = None
    responsaveis: Tuple[PessoaResumo, ...] = field(default_factory=tuple)

    @classmethod
    def from_model(cls, iniciativa) -> 'IniciativaSlot':
        """Cria snapshot a partir do model (espera queryset com para_quadro())"""
        equipe = None
        if iniciativa.equipe_id:
            equipe = EquipeResumo(id=str(iniciativa.equipe.id), nome=iniciativa.equipe.nome)

        responsaveis = tuple(
            PessoaResumo(
                id=str(responsavel.pessoa.id),
                nome=responsavel.pessoa.nome,
                avatar=responsavel.pessoa.avatar,
            )
            for responsavel in iniciativa.responsaveis.all()
        )

        return cls(
            id=str(iniciativa.id),
            titulo=iniciativa.titulo,
            status=iniciativa.status,
            rag=iniciativa.rag,
            slot=iniciativa.slot,
            equipe=equipe,
            responsaveis=responsaveis,
        )

    @property
    def ids_pessoas(self) -> Tuple[str, ...]:
        return tuple(pessoa.id for pessoa in self.responsaveis)

    def com_slot(self, slot: Optional[int]) -> 'IniciativaSlot':
        return replace(self, slot=slot)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'titulo': self.titulo,
            'status': self.status,
            'rag': self.rag,
            'slot': self.slot,
            'equipe': self.equipe.to_dict() if self.equipe else None,
            'responsaveis': [{'pessoa': pessoa.to_dict()} for pessoa in self.responsaveis],
        }
