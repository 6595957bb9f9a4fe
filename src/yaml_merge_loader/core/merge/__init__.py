# src/yaml_merge_loader/core/merge/__init__.py
"""
Camada de merge do YAML Merge Loader.

Componentes:
    - keys    → chaves reservadas ("imports", "services", "when@<env>")
    - tree    → merge de documentos (TreeMerger), incluindo "services"
    - imports → normalização de diretivas de import e reancoragem de caminhos
    - overlay → extração do overlay do ambiente ativo

Princípios fundamentais:
    - Funções puras: nenhum documento de entrada é mutado
    - Nenhum I/O: arquivos são responsabilidade do loader
"""

from .imports import (  # noqa: F401
    IgnorePolicy,
    ImportDirective,
    normalize_imports,
    reanchor_resource,
)
from .keys import (  # noqa: F401
    ARGUMENTS_KEY,
    DEFAULTS_KEY,
    IMPORTS_KEY,
    INSTANCEOF_KEY,
    OVERLAY_PREFIX,
    PARAMETERS_KEY,
    SERVICES_KEY,
    is_overlay_key,
    overlay_key,
)
from .overlay import split_overlay  # noqa: F401
from .tree import (  # noqa: F401
    apply_service_defaults,
    combine_values,
    merge_documents,
    merge_services,
)
