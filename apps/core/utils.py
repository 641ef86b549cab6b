# apps/core/utils.py

import hashlib


def gerar_cor_avatar(nome: str) -> str:
    """
    Gera uma cor consistente baseada no nome
    Útil para avatares quando não há foto
    """
    hash_hex = hashlib.md5(nome.encode()).hexdigest()

    # Usar primeiros 6 caracteres como cor hex
    return f"#{hash_hex[:6]}"


def gerar_iniciais(nome: str) -> str:
    """
    Iniciais para o avatar
    Ex: "Ana Maria Souza" -> "AS"
    """
    partes = nome.split()
    if not partes:
        return '?'
    if len(partes) == 1:
        return partes[0][:2].upper()
    return (partes[0][0] + partes[-1][0]).upper()
