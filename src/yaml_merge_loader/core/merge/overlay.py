# src/yaml_merge_loader/core/merge/overlay.py
"""
Seleção de overlays condicionados a ambiente (`when@<env>`).

Um documento pode declarar conteúdo que só se aplica a um ambiente:

    parameters:
      debug: false
    when@dev:
      parameters:
        debug: true

Este módulo apenas detecta e extrai o overlay do ambiente ativo. A
aplicação (merge na cadeia ou segundo passo de registro) é orquestrada
pelo `MergeLoader`.

Invariantes:
    - A chave consumida nunca permanece no documento retornado
    - Overlays de outros ambientes são preservados (e ignorados pelo registro)
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from ..errors import MalformedInputError
from .keys import overlay_key


def split_overlay(
    document: Dict[str, Any],
    environment: Optional[str],
    *,
    file: str = "<document>",
) -> Tuple[Dict[str, Any], Optional[Dict[str, Any]]]:
    """
    Separa o overlay do ambiente ativo do restante do documento.

    Returns:
        (documento sem a chave `when@<env>`, conteúdo do overlay ou None)

    Raises:
        MalformedInputError: Se o overlay existir mas não for um mapeamento.
    """
    if not environment:
        return document, None

    key = overlay_key(environment)
    overlay = document.get(key)
    if overlay is None:
        return document, None

    if not isinstance(overlay, dict):
        raise MalformedInputError(
            f'A chave "{key}" deve conter um mapeamento em "{file}", '
            f"recebido: {type(overlay).__name__}"
        )

    remaining = {ns: value for ns, value in document.items() if ns != key}
    return remaining, overlay
