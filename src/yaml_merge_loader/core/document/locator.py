# src/yaml_merge_loader/core/document/locator.py
"""
Localização de recursos e expansão de padrões (glob).

O `FileLocator` transforma uma especificação de recurso (caminho relativo,
absoluto ou padrão glob) em caminhos concretos de arquivos.

Regras de resolução:
    - Caminhos absolutos são usados como estão
    - Caminhos relativos são buscados primeiro no diretório corrente
      (diretório do arquivo importador), depois em `search_paths`
    - Padrões glob (`*`, `?`, `[...]`, `**`) são expandidos relativos ao
      diretório corrente; `**` é recursivo

Invariantes:
    - Caminhos retornados são absolutos, normalizados e com separador `/`
    - A expansão é determinística (ordem lexicográfica)
"""

from __future__ import annotations

import glob
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from ..errors import ResourceNotFoundError

_GLOB_MAGIC = re.compile(r"[*?\[]")


def has_glob_magic(pattern: str) -> bool:
    return _GLOB_MAGIC.search(pattern) is not None


def normalize_path(path: str) -> str:
    """Normaliza um caminho para forma absoluta com separador `/`."""
    return os.path.realpath(path).replace("\\", "/")


def _fixed_prefix(pattern: str) -> str:
    """Retorna o diretório do padrão anterior ao primeiro componente com glob."""
    parts = pattern.replace("\\", "/").split("/")
    fixed: List[str] = []
    for part in parts[:-1]:
        if has_glob_magic(part):
            break
        fixed.append(part)
    return "/".join(fixed) or "/"


@dataclass(frozen=True)
class FileLocator:
    """Localizador de arquivos com diretórios de busca opcionais."""

    search_paths: Sequence[str] = ()

    def locate(self, resource: str, current_dir: Optional[str] = None) -> str:
        """
        Resolve um recurso para um caminho de arquivo existente.

        Raises:
            ResourceNotFoundError: Se o recurso não existir em nenhum candidato.
        """
        if not resource:
            raise ResourceNotFoundError("Recurso vazio não pode ser localizado")

        if os.path.isabs(resource):
            candidates = [resource]
        else:
            bases = ([current_dir] if current_dir else []) + list(self.search_paths)
            candidates = [os.path.join(base, resource) for base in bases] or [resource]

        for candidate in candidates:
            if Path(candidate).is_file():
                return normalize_path(candidate)

        raise ResourceNotFoundError(
            f'O arquivo "{resource}" não existe (em: {", ".join(candidates)})'
        )

    def expand(self, pattern: str, current_dir: Optional[str] = None) -> List[str]:
        """
        Expande um padrão em arquivos concretos.

        Um padrão sem caracteres glob é localizado como recurso único.
        Um padrão glob pode não casar nenhum arquivo (lista vazia), mas o
        seu diretório fixo deve existir.

        Raises:
            ResourceNotFoundError: Se o recurso (ou o diretório fixo do padrão)
                não existir.
        """
        if not has_glob_magic(pattern):
            return [self.locate(pattern, current_dir)]

        anchored = pattern
        if not os.path.isabs(pattern) and current_dir:
            anchored = os.path.join(current_dir, pattern)

        prefix = _fixed_prefix(anchored)
        if not Path(prefix).is_dir():
            raise ResourceNotFoundError(
                f'O diretório "{prefix}" do padrão "{pattern}" não existe'
            )

        matches = [m for m in glob.glob(anchored, recursive=True) if Path(m).is_file()]
        return sorted(normalize_path(m) for m in matches)
