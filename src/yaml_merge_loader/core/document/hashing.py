# src/yaml_merge_loader/core/document/hashing.py
"""
Hashing canônico de documentos de configuração.

O hash representa a identidade estrutural de um documento final no
momento em que ele é entregue ao Registrar, e é anexado ao evento
`document.registered` do LoadContext para rastreabilidade.

Documentos YAML admitem chaves que o JSON não aceita (datas, inteiros
misturados com strings, `null`). Antes da serialização, a árvore é
normalizada:
    - chaves de mapeamentos viram `str` (`2024-01-01`, `404`, `None`)
    - sequências (listas/tuplas) são percorridas recursivamente
    - escalares não nativos de JSON são serializados via `str`

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - SHA-256, hexadecimal

Invariantes:
    - Documentos estruturalmente equivalentes produzem o mesmo hash
    - O hash independe da ordem original das chaves
    - Qualquer documento produzido pelo parser pode ser hasheado
    - Nenhuma mutação ocorre sobre o input

Limites explícitos:
    - Chaves distintas com a mesma representação textual (ex.: `1` e `"1"`)
      colapsam; o hash é um identificador de rastreio, não uma assinatura
"""

import hashlib
import json
from typing import Any, Dict


def _normalize(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(key): _normalize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(item) for item in value]
    return value


def compute_document_hash(document: Dict[str, Any]) -> str:
    """
    Gera um hash SHA-256 determinístico de um documento.

    Args:
        document (Dict[str, Any]): Documento (já mesclado) a identificar.

    Returns:
        str: Hash hexadecimal de 64 caracteres.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """
    if not isinstance(document, dict):
        raise TypeError(
            f"Documento para hashing deve ser dict, recebido: {type(document).__name__}"
        )

    canonical_json = json.dumps(
        _normalize(document),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
