# tests/fakes.py

from apps.iniciativas.services import SlotError


class LojaFake:
    """
    Loja de slots em memória com a mesma interface assíncrona da LojaSlotsRemota

    `falha` (exceção) faz toda chamada de mutação falhar.
    """

    def __init__(self, iniciativas=(), falha=None):
        self.slots = {iniciativa.id: iniciativa.slot for iniciativa in iniciativas}
        self.falha = falha
        self.chamadas = []

    def _registrar(self, *chamada):
        self.chamadas.append(chamada)
        if self.falha is not None:
            raise self.falha

    async def trocar(self, id_arrastada, numero_slot, id_alvo=None):
        self._registrar('trocar', id_arrastada, numero_slot, id_alvo)
        origem = self.slots.get(id_arrastada)
        if id_alvo is not None:
            self.slots[id_alvo] = origem
        self.slots[id_arrastada] = numero_slot

    async def atribuir(self, iniciativa_id, numero_slot):
        self._registrar('atribuir', iniciativa_id, numero_slot)
        if numero_slot in self.slots.values():
            raise SlotError('Este slot já está atribuído a outra iniciativa')
        self.slots[iniciativa_id] = numero_slot

    async def remover_do_slot(self, iniciativa_id):
        self._registrar('remover_do_slot', iniciativa_id)
        self.slots[iniciativa_id] = None
