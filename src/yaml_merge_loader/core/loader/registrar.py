# src/yaml_merge_loader/core/loader/registrar.py
"""
Registrars — passo final que converte um documento mesclado em estado.

O `MergeLoader` não conhece o significado de "parameters", "services" ou
de imports ordinários: ele apenas entrega o documento final, junto com o
caminho do arquivo de origem, a um `Registrar`.

Implementações disponíveis:
    - RecordingRegistrar → apenas registra os pares (documento, origem)
    - ContainerRegistrar → materializa parâmetros, definições de serviço,
      aliases e configurações de extensões em um `ContainerState`, e
      processa imports ordinários através do loader anexado

Invariantes:
    - Chaves `when@*` nunca são interpretadas pelo registro
    - Registros posteriores sobrescrevem parâmetros e serviços anteriores
"""

from __future__ import annotations

import posixpath
from copy import deepcopy
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol, Tuple, runtime_checkable

from ..errors import ConfigError, CycleDetectedError, RegistrationError
from ..merge.imports import normalize_imports
from ..document.locator import has_glob_magic
from ..merge.keys import (
    ARGUMENTS_KEY,
    DEFAULTS_KEY,
    IMPORTS_KEY,
    INSTANCEOF_KEY,
    PARAMETERS_KEY,
    SERVICES_KEY,
    is_overlay_key,
)
from ..merge.tree import apply_service_defaults

if TYPE_CHECKING:  # pragma: no cover
    from .loader import MergeLoader


@runtime_checkable
class Registrar(Protocol):
    """Contrato do passo externo de registro."""

    def register(self, document: Dict[str, Any], source: str) -> None:
        """Converte um documento final em estado de configuração."""
        ...


@dataclass
class RecordingRegistrar:
    """Registrar que apenas guarda cópias dos documentos recebidos."""

    registrations: List[Tuple[Dict[str, Any], str]] = field(default_factory=list)

    def register(self, document: Dict[str, Any], source: str) -> None:
        self.registrations.append((deepcopy(document), source))

    @property
    def documents(self) -> List[Dict[str, Any]]:
        return [doc for doc, _ in self.registrations]


@dataclass
class ContainerState:
    """
    Estado materializado de configuração.

    Campos canônicos:
    - parameters: parâmetros (último registro vence)
    - definitions: definições de serviço por id
    - aliases: alias id -> id alvo
    - instanceof: configuração condicional por tipo (`_instanceof`)
    - extensions: demais namespaces, na ordem de registro
    - sources: arquivos registrados, na ordem de registro
    """

    parameters: Dict[str, Any] = field(default_factory=dict)
    definitions: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    aliases: Dict[str, str] = field(default_factory=dict)
    instanceof: Dict[str, Any] = field(default_factory=dict)
    extensions: Dict[str, List[Any]] = field(default_factory=dict)
    sources: List[str] = field(default_factory=list)

    def has_service(self, service_id: str) -> bool:
        return service_id in self.definitions or service_id in self.aliases


class ContainerRegistrar:
    """Registrar de referência sobre um `ContainerState`."""

    def __init__(self, state: Optional[ContainerState] = None, loader: Optional["MergeLoader"] = None):
        self.state = state if state is not None else ContainerState()
        self.loader = loader
        self._registering: List[str] = []

    def attach(self, loader: "MergeLoader") -> None:
        self.loader = loader

    def register(self, document: Dict[str, Any], source: str) -> None:
        if source in self._registering:
            raise CycleDetectedError([*self._registering, source])

        self._registering.append(source)
        try:
            self._register_imports(document.get(IMPORTS_KEY), source)
            self._register_parameters(document.get(PARAMETERS_KEY), source)
            self._register_services(document.get(SERVICES_KEY), source)
            self._register_extensions(document)
        finally:
            self._registering.pop()

        self.state.sources.append(source)

    # -----------------------------
    # imports ordinários
    # -----------------------------
    def _register_imports(self, imports: Any, source: str) -> None:
        if imports is None:
            return

        directives = normalize_imports(imports, source)
        if directives and self.loader is None:
            raise RegistrationError(f'Nenhum loader anexado para resolver imports de "{source}"')

        current_dir = posixpath.dirname(source)
        for directive in directives:
            globbed = has_glob_magic(directive.resource)
            try:
                for match in self.loader.locator.expand(directive.resource, current_dir):
                    # um glob pode casar arquivos de outros formatos (ex.: README)
                    if globbed and not self.loader.supports(match):
                        self.loader.context.log(
                            event="import.skipped",
                            level="INFO",
                            message="Arquivo casado por glob em formato não suportado",
                            file=source,
                            resource=match,
                        )
                        continue
                    self.loader.load(match)
            except ConfigError as e:
                if not directive.policy.allows(e):
                    raise

    # -----------------------------
    # parameters
    # -----------------------------
    def _register_parameters(self, parameters: Any, source: str) -> None:
        if parameters is None:
            return
        if not isinstance(parameters, dict):
            raise RegistrationError(f'A chave "parameters" deve ser um mapeamento em "{source}"')
        self.state.parameters.update(deepcopy(parameters))

    # -----------------------------
    # services
    # -----------------------------
    def _register_services(self, services: Any, source: str) -> None:
        if services is None:
            return
        if not isinstance(services, dict):
            raise RegistrationError(f'A chave "services" deve ser um mapeamento em "{source}"')

        defaults = services.get(DEFAULTS_KEY) or {}
        if not isinstance(defaults, dict):
            raise RegistrationError(f'"services._defaults" deve ser um mapeamento em "{source}"')

        for service_id, definition in services.items():
            if service_id == DEFAULTS_KEY:
                continue

            if service_id == INSTANCEOF_KEY:
                if definition is None:
                    continue
                if not isinstance(definition, dict):
                    raise RegistrationError(f'"services._instanceof" deve ser um mapeamento em "{source}"')
                self.state.instanceof.update(deepcopy(definition))
                continue

            # None remove o serviço
            if definition is None:
                self.state.definitions.pop(service_id, None)
                self.state.aliases.pop(service_id, None)
                continue

            if isinstance(definition, str):
                self.state.aliases[service_id] = definition[1:] if definition.startswith("@") else definition
                self.state.definitions.pop(service_id, None)
                continue

            if isinstance(definition, list):
                definition = {ARGUMENTS_KEY: definition}

            if not isinstance(definition, dict):
                raise RegistrationError(
                    f'Definição inválida para o serviço "{service_id}" em "{source}": '
                    f"{type(definition).__name__}"
                )

            self.state.definitions[service_id] = apply_service_defaults(definition, defaults)
            self.state.aliases.pop(service_id, None)

    # -----------------------------
    # extensões
    # -----------------------------
    def _register_extensions(self, document: Dict[str, Any]) -> None:
        reserved = {IMPORTS_KEY, PARAMETERS_KEY, SERVICES_KEY}
        for namespace, value in document.items():
            if namespace in reserved or is_overlay_key(namespace):
                continue
            self.state.extensions.setdefault(namespace, []).append(deepcopy(value))
