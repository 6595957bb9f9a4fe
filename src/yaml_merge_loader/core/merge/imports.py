# src/yaml_merge_loader/core/merge/imports.py
"""
Diretivas de import e utilitários de resolução.

Uma entrada da lista "imports" pode ser:
    - uma string: `"other.yaml"` → `{"resource": "other.yaml"}`
    - um mapeamento: `{"resource": ..., "merge": bool, "ignore_errors": ...}`

Imports ordinários (sem `merge: true`) permanecem no documento, com o
caminho reancorado ao diretório base da cadeia. Imports em modo merge
são consumidos pelo loader e removidos do documento.
"""

from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Union

from ..errors import ConfigError, MalformedInputError, ResourceNotFoundError

IGNORE_NOT_FOUND = "not_found"


class IgnorePolicy(str, Enum):
    """Política de supressão de falhas de um merge-import."""

    NONE = "none"
    NOT_FOUND = "not_found"
    ALL = "all"

    @classmethod
    def from_value(cls, value: Any) -> "IgnorePolicy":
        # apenas o literal "not_found" tem significado entre strings
        if isinstance(value, str):
            return cls.NOT_FOUND if value == IGNORE_NOT_FOUND else cls.NONE
        return cls.ALL if value is True else cls.NONE

    def allows(self, error: ConfigError) -> bool:
        # entrada malformada é sempre fatal
        if isinstance(error, MalformedInputError):
            return False
        if self is IgnorePolicy.ALL:
            return True
        if self is IgnorePolicy.NOT_FOUND:
            return isinstance(error, ResourceNotFoundError)
        return False


@dataclass(frozen=True)
class ImportDirective:
    """Forma normalizada de uma entrada de "imports"."""

    resource: str
    merge: bool = False
    ignore_errors: Union[bool, str] = False
    entry: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_entry(cls, entry: Dict[str, Any]) -> "ImportDirective":
        return cls(
            resource=entry["resource"],
            merge=entry.get("merge") is True,
            ignore_errors=entry.get("ignore_errors", False),
            entry=dict(entry),
        )

    @property
    def policy(self) -> IgnorePolicy:
        return IgnorePolicy.from_value(self.ignore_errors)

    def with_resource(self, resource: str) -> "ImportDirective":
        return replace(self, resource=resource)

    def to_entry(self) -> Dict[str, Any]:
        """Serializa a diretiva de volta para a forma de mapeamento original."""
        entry = dict(self.entry)
        entry["resource"] = self.resource
        return entry


def normalize_imports(value: Any, file: str) -> List[ImportDirective]:
    """
    Normaliza o valor de "imports" em uma lista de diretivas.

    Raises:
        MalformedInputError: Se "imports" não for lista, ou se alguma entrada
            não for string/mapeamento, ou não declarar `resource`.
    """
    if not isinstance(value, list):
        raise MalformedInputError(
            f'A chave "imports" deve conter uma lista em "{file}". Verifique a sintaxe YAML.'
        )

    directives: List[ImportDirective] = []
    for entry in value:
        if isinstance(entry, str):
            entry = {"resource": entry}
        elif not isinstance(entry, dict):
            raise MalformedInputError(
                f'Entrada de import inválida em "{file}": {entry!r}. Verifique a sintaxe YAML.'
            )

        if entry.get("resource") is None:
            raise MalformedInputError(
                f'Um import deve declarar "resource" em "{file}". Verifique a sintaxe YAML.'
            )

        directives.append(ImportDirective.from_entry(entry))

    return directives


def reanchor_resource(resource: str, file_dir: str, base_dir: str) -> str:
    """
    Reescreve `resource` (relativo a `file_dir`) para ser relativo a `base_dir`.

    Exemplo:
        reanchor_resource("b.yml", "/app/config/sub", "/app/config") == "sub/b.yml"
    """
    if file_dir == base_dir or os.path.isabs(resource):
        return resource

    prefix = posixpath.relpath(file_dir, base_dir)
    return posixpath.join(prefix, resource)
