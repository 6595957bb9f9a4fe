# src/yaml_merge_loader/core/settings.py
"""
Configuração do próprio loader.

As opções do loader podem ser declaradas em código (`LoaderSettings`) ou
lidas da seção `loader:` de um arquivo YAML/JSON:

    loader:
      environment: prod
      detect_cycles: true
      search_paths:
        - /etc/app/config

Decisões arquiteturais:
    - Chaves desconhecidas são rejeitadas (sem heurísticas implícitas)
    - Ausência da seção `loader:` produz as opções padrão
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from .document.parser import parse_file
from .errors import ConfigError

SETTINGS_SECTION = "loader"


@dataclass(frozen=True)
class LoaderSettings:
    """Opções do MergeLoader."""

    environment: Optional[str] = None
    detect_cycles: bool = True
    search_paths: Tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, mapping: Dict[str, Any]) -> "LoaderSettings":
        if not isinstance(mapping, dict):
            raise ConfigError(
                f'Seção "{SETTINGS_SECTION}" deve ser um mapeamento, recebido: {type(mapping).__name__}'
            )

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise ConfigError(f"Opções desconhecidas do loader: {', '.join(unknown)}")

        environment = mapping.get("environment")
        if environment is not None and not isinstance(environment, str):
            raise ConfigError("loader.environment deve ser string ou null")

        detect_cycles = mapping.get("detect_cycles", True)
        if not isinstance(detect_cycles, bool):
            raise ConfigError("loader.detect_cycles deve ser booleano")

        search_paths = mapping.get("search_paths") or []
        if not isinstance(search_paths, list) or not all(isinstance(p, str) for p in search_paths):
            raise ConfigError("loader.search_paths deve ser uma lista de strings")

        return cls(
            environment=environment or None,
            detect_cycles=detect_cycles,
            search_paths=tuple(search_paths),
        )


def load_settings(path: Union[str, Path]) -> LoaderSettings:
    """
    Lê as opções do loader a partir da seção `loader:` de um arquivo.

    Raises:
        ResourceNotFoundError: Se o arquivo não existir.
        LoadFailureError: Se o arquivo não puder ser parseado.
        ConfigError: Se a seção `loader:` for inválida.
    """
    data = parse_file(path) or {}
    section = data.get(SETTINGS_SECTION)
    if section is None:
        return LoaderSettings()
    return LoaderSettings.from_mapping(section)
