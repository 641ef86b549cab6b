# apps/iniciativas/filtros.py

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable

from .tipos import IniciativaSlot


def _normalizar_ids(valores) -> FrozenSet[str]:
    if not valores:
        return frozenset()
    return frozenset(str(valor) for valor in valores if str(valor).strip())


@dataclass(frozen=True)
class FiltrosSlots:
    """
    Filtros declarativos do quadro (equipe / pessoa responsável)

    AND entre as dimensões, OR dentro de cada dimensão.
    Com qualquer filtro ativo o quadro desliga o drag-and-drop.
    """

    ids_equipes: FrozenSet[str] = field(default_factory=frozenset)
    ids_pessoas: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def criar(cls, ids_equipes: Iterable = (), ids_pessoas: Iterable = ()) -> 'FiltrosSlots':
        return cls(ids_equipes=_normalizar_ids(ids_equipes), ids_pessoas=_normalizar_ids(ids_pessoas))

    @classmethod
    def from_dict(cls, dados: dict) -> 'FiltrosSlots':
        """Formato do WebSocket: {'equipes': [...], 'pessoas': [...]}"""
        return cls.criar(dados.get('equipes') or (), dados.get('pessoas') or ())

    @property
    def tem_filtros_ativos(self) -> bool:
        return bool(self.ids_equipes or self.ids_pessoas)

    def corresponde(self, iniciativa: IniciativaSlot) -> bool:
        if not self.tem_filtros_ativos:
            return True

        if self.ids_equipes:
            if iniciativa.equipe is None or iniciativa.equipe.id not in self.ids_equipes:
                return False

        if self.ids_pessoas:
            if not any(id_pessoa in self.ids_pessoas for id_pessoa in iniciativa.ids_pessoas):
                return False

        return True

    def to_dict(self) -> dict:
        return {
            'equipes': sorted(self.ids_equipes),
            'pessoas': sorted(self.ids_pessoas),
        }


SEM_FILTROS = FiltrosSlots()
