"""YAML Merge Loader — Document (core).

Colaboradores de I/O do loader:
 - parsing (YAML/JSON) de um arquivo em documento
 - localização de recursos e expansão de globs
 - hashing canônico (rastreabilidade)
"""

from .hashing import compute_document_hash  # noqa: F401
from .locator import FileLocator, has_glob_magic, normalize_path  # noqa: F401
from .parser import parse_file, supports  # noqa: F401
