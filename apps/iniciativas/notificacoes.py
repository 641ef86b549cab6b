# apps/iniciativas/notificacoes.py

"""
Toasts do quadro de slots

Toda mutação confirmada (atribuir / remover / trocar) gera exatamente
um toast de sucesso ou de erro. As mensagens ficam centralizadas aqui
para que quadro, cards e views AJAX falem igual.
"""

from dataclasses import dataclass
from typing import List

NIVEL_SUCESSO = 'success'
NIVEL_ERRO = 'error'

FALHA_TROCAR = 'Falha ao mover iniciativa'
FALHA_ATRIBUIR = 'Falha ao atribuir iniciativa'
FALHA_REMOVER = 'Falha ao remover do slot'
FALHA_STATUS = 'Falha ao atualizar status'


@dataclass(frozen=True)
class Toast:
    nivel: str
    mensagem: str

    def to_dict(self) -> dict:
        return {'nivel': self.nivel, 'mensagem': self.mensagem}


class NotificadorToasts:
    """
    Acumula toasts até o transporte (consumer / view) consumi-los
    """

    def __init__(self):
        self._pendentes: List[Toast] = []

    def sucesso(self, mensagem: str):
        self._pendentes.append(Toast(NIVEL_SUCESSO, mensagem))

    def erro(self, mensagem: str):
        self._pendentes.append(Toast(NIVEL_ERRO, mensagem))

    @property
    def pendentes(self) -> List[Toast]:
        return list(self._pendentes)

    def consumir(self) -> List[Toast]:
        """Retorna e limpa os toasts pendentes"""
        toasts, self._pendentes = self._pendentes, []
        return toasts


# === Mensagens ===

def mensagem_troca(titulo_arrastada: str, titulo_alvo: str) -> str:
    return f'"{titulo_arrastada}" e "{titulo_alvo}" trocaram de slot'


def mensagem_movida(titulo: str, numero_slot: int) -> str:
    return f'"{titulo}" movida para o slot {numero_slot}'


def mensagem_atribuida(titulo: str, numero_slot: int) -> str:
    return f'"{titulo}" atribuída ao slot {numero_slot}'


def mensagem_removida(titulo: str, numero_slot) -> str:
    return f'"{titulo}" removida do slot {numero_slot}'


def mensagem_erro(erro, fallback: str) -> str:
    """Mensagem da exceção quando houver, senão o texto genérico"""
    if isinstance(erro, Exception) and str(erro):
        return str(erro)
    return fallback
