# src/yaml_merge_loader/__init__.py
"""
YAML Merge Loader — carregamento de documentos de configuração com
imports recursivos, imports em modo merge e overlays por ambiente.

Um documento pode importar outros arquivos de duas formas:

    imports:
      - other.yaml                           # import ordinário
      - { resource: "parts/*.yaml", merge: true, ignore_errors: not_found }

Imports ordinários são entregues ao Registrar (com caminhos reancorados
ao diretório do primeiro documento da cadeia); imports em modo merge têm
seu conteúdo dobrado por baixo do documento importador. Chaves
`when@<env>` são aplicadas somente quando `<env>` é o ambiente ativo.
"""

from .core.context import LoadContext
from .core.errors import (
    ConfigError,
    ConfigParseError,
    CycleDetectedError,
    InvalidConfigRootTypeError,
    LoadFailureError,
    MalformedInputError,
    RegistrationError,
    ResourceNotFoundError,
    UnsupportedConfigFormatError,
)
from .core.loader import (
    ContainerRegistrar,
    ContainerState,
    MergeLoader,
    RecordingRegistrar,
    Registrar,
    create_loader,
)
from .core.merge import merge_documents
from .core.settings import LoaderSettings, load_settings

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "ConfigParseError",
    "ContainerRegistrar",
    "ContainerState",
    "CycleDetectedError",
    "InvalidConfigRootTypeError",
    "LoadContext",
    "LoadFailureError",
    "LoaderSettings",
    "MalformedInputError",
    "MergeLoader",
    "RecordingRegistrar",
    "RegistrationError",
    "Registrar",
    "ResourceNotFoundError",
    "UnsupportedConfigFormatError",
    "create_loader",
    "load_settings",
    "merge_documents",
]
