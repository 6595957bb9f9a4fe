# src/yaml_merge_loader/core/merge/tree.py
"""
Merge canônico de documentos de configuração (TreeMerger).

Este módulo implementa a política de merge usada para dobrar o conteúdo
de um documento importado em modo merge (`overlay`) por baixo do
documento acumulado (`base`).

Política de merge por namespace (v1):
    - valor vazio/falsy no overlay   → ignorado (base preservada)
    - namespace ausente na base      → adotado integralmente do overlay
    - namespace "when@..."           → nunca combinado aqui
    - namespace "services"           → algoritmo dedicado (ver `merge_services`)
    - demais namespaces:
        - lista + lista → itens do overlay seguidos dos itens da base
          (duplicatas preservadas)
        - dict + dict   → união; em colisão de chave a base vence
        - tipos distintos ou escalares → a base vence

Princípios fundamentais:
    - O merge é puramente funcional: nenhum input é mutado
    - A base (documento externo / mais recente) tem precedência sobre
      o conteúdo importado em colisões diretas
    - Definições de serviço do tipo alias (string) ou `None` são atômicas

Limites explícitos:
    - Não carrega arquivos
    - Não resolve imports nem overlays de ambiente
    - Não valida semântica de serviços ou parâmetros
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict

from .keys import ARGUMENTS_KEY, DEFAULTS_KEY, INSTANCEOF_KEY, SERVICES_KEY, is_overlay_key


def _is_atomic(definition: Any) -> bool:
    # alias ("@id" ou "id") e remoção explícita (None)
    return definition is None or isinstance(definition, str)


def combine_values(overlay_value: Any, base_value: Any) -> Any:
    """
    Combina dois valores de um mesmo namespace.

    Listas são concatenadas (overlay primeiro); dicionários são unidos com
    precedência da base. Qualquer outra combinação preserva a base.
    """
    if isinstance(overlay_value, list) and isinstance(base_value, list):
        return deepcopy(overlay_value) + deepcopy(base_value)

    if isinstance(overlay_value, dict) and isinstance(base_value, dict):
        result = deepcopy(overlay_value)
        result.update(deepcopy(base_value))
        return result

    return deepcopy(base_value)


def apply_service_defaults(definition: Dict[str, Any], defaults: Dict[str, Any]) -> Dict[str, Any]:
    """
    Preenche em `definition` as opções presentes em `defaults` e ausentes
    na definição. Opções já declaradas nunca são sobrescritas.

    Exemplo:
        defaults   = {"a": 1, "b": 2}
        definition = {"a": 9}
        resultado  = {"a": 9, "b": 2}
    """
    result = deepcopy(definition)
    for option, default in defaults.items():
        if option not in result:
            result[option] = deepcopy(default)
    return result


def _combine_definitions(definition: Any, existing: Any) -> Any:
    """Combina duas definições de serviço não atômicas (base vence, listas concatenam)."""
    if isinstance(definition, dict) and isinstance(existing, dict):
        result = deepcopy(definition)
        for option, value in existing.items():
            current = result.get(option)
            if isinstance(current, list) and isinstance(value, list):
                result[option] = current + deepcopy(value)
            else:
                result[option] = deepcopy(value)
        return result

    return combine_values(definition, existing)


def merge_services(base_services: Any, overlay_services: Any) -> Any:
    """
    Dobra o mapa "services" do overlay por baixo do mapa da base.

    Algoritmo:
        1. `defaults` = `overlay["_defaults"]` (ou vazio); `_defaults` do
           overlay nunca é copiado para a base
        2. Para cada `(service_id, definition)` do overlay:
            - definições do tipo mapeamento (exceto `_instanceof`) recebem
              as opções de `defaults` que não declaram; a forma curta
              (lista) vira `{"arguments": [...]}` antes, se houver defaults
            - service_id ausente na base → adotado
            - alias/None em qualquer dos lados → base preservada
            - caso contrário → combinação das opções, base vence em
              colisão, opções do tipo lista concatenam (overlay primeiro)

    Returns:
        Novo mapa de serviços; os inputs não são mutados.
    """
    if not isinstance(overlay_services, dict):
        return combine_values(overlay_services, base_services)

    result: Dict[str, Any] = deepcopy(base_services) if isinstance(base_services, dict) else {}

    defaults = overlay_services.get(DEFAULTS_KEY)
    if not isinstance(defaults, dict):
        defaults = {}

    incoming = {sid: d for sid, d in overlay_services.items() if sid != DEFAULTS_KEY}

    for service_id, definition in incoming.items():
        # forma curta (lista de argumentos) só é expandida quando há defaults
        if isinstance(definition, list) and defaults and service_id != INSTANCEOF_KEY:
            definition = {ARGUMENTS_KEY: definition}

        if isinstance(definition, dict) and service_id != INSTANCEOF_KEY:
            definition = apply_service_defaults(definition, defaults)

        if service_id not in result:
            result[service_id] = deepcopy(definition)
            continue

        existing = result[service_id]
        if _is_atomic(existing) or _is_atomic(definition):
            continue

        result[service_id] = _combine_definitions(definition, existing)

    return result


def merge_documents(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """
    Realiza o merge de um documento `overlay` por baixo do documento `base`.

    Args:
        base (Dict[str, Any]): Documento acumulado (externo, tem precedência).
        overlay (Dict[str, Any]): Documento recém-produzido a ser dobrado.

    Returns:
        Dict[str, Any]: Novo documento resultante do merge.

    Invariantes:
        - `merge_documents(d, {}) == d`
        - Nenhum input é mutado
    """
    result: Dict[str, Any] = deepcopy(base)

    for namespace, data in overlay.items():
        if not data:
            continue

        if namespace not in result:
            result[namespace] = deepcopy(data)
            continue

        if is_overlay_key(namespace):
            continue

        if namespace == SERVICES_KEY:
            result[namespace] = merge_services(result[namespace], data)
            continue

        result[namespace] = combine_values(data, result[namespace])

    return result
