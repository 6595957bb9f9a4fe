# src/yaml_merge_loader/core/loader/__init__.py
"""
Loader do YAML Merge Loader.

Componentes:
    - loader    → `MergeLoader` (carregamento, merge-imports, overlays)
    - registrar → `Registrar` (Protocol), `RecordingRegistrar`,
                  `ContainerRegistrar`, `ContainerState`

`create_loader` monta um MergeLoader pronto para uso a partir de
`LoaderSettings`, anexando o loader ao Registrar quando este processa
imports ordinários.
"""

from __future__ import annotations

from typing import Optional

from ..context import LoadContext
from ..document.locator import FileLocator
from ..settings import LoaderSettings
from .loader import MergeLoader
from .registrar import ContainerRegistrar, ContainerState, RecordingRegistrar, Registrar


def create_loader(
    settings: Optional[LoaderSettings] = None,
    *,
    registrar: Optional[Registrar] = None,
    context: Optional[LoadContext] = None,
) -> MergeLoader:
    """Cria um MergeLoader; o Registrar padrão é um ContainerRegistrar novo."""
    settings = settings or LoaderSettings()
    if registrar is None:
        registrar = ContainerRegistrar()

    loader = MergeLoader(
        registrar=registrar,
        locator=FileLocator(search_paths=tuple(settings.search_paths)),
        environment=settings.environment,
        context=context,
        detect_cycles=settings.detect_cycles,
    )

    attach = getattr(registrar, "attach", None)
    if callable(attach):
        attach(loader)

    return loader


__all__ = [
    "ContainerRegistrar",
    "ContainerState",
    "MergeLoader",
    "RecordingRegistrar",
    "Registrar",
    "create_loader",
]
