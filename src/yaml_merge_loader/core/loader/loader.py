# src/yaml_merge_loader/core/loader/loader.py
"""
MergeLoader — ponto de entrada do carregamento com imports em modo merge.

Fluxo de uma chamada `load(resource, merging)`:
    1. Localiza e parseia o arquivo; registra sua existência no LoadContext
    2. Documento vazio → retorna `merging` inalterado
    3. Se `merging` é None, esta é a chamada mais externa da cadeia e o
       diretório do arquivo passa a ser o diretório base da cadeia
    4. Resolve "imports":
        - ordinários → reancorados ao diretório base e mantidos
        - merge      → removidos; cada arquivo casado pelo glob é
                       carregado recursivamente com o documento atual
                       como acumulador
    5. Dentro de uma cadeia, aplica o overlay `when@<env>` e dobra o
       documento por baixo do acumulador (TreeMerger)
    6. Chamada aninhada → retorna o documento (novo acumulador)
       Chamada externa  → entrega ao Registrar e, em seguida, entrega o
                          overlay do ambiente como segundo passo; retorna None

Decisões arquiteturais:
    - Diretório base, cadeia ativa e "match de ambiente" são argumentos
      explícitos da recursão, nunca estado mutável compartilhado
    - O Registrar é um colaborador injetado (Protocol)
    - Falhas de merge-import são tratadas por entrada de import, segundo
      a política `ignore_errors`

Limites explícitos:
    - Não processa imports ordinários (responsabilidade do Registrar)
    - Não interpreta "parameters" ou outros namespaces
"""

from __future__ import annotations

import posixpath
from typing import Any, Dict, Optional, Tuple

from ..context import LoadContext
from ..document.hashing import compute_document_hash
from ..document.locator import FileLocator
from ..document.parser import parse_file, supports
from ..errors import ConfigError, CycleDetectedError
from ..merge.imports import ImportDirective, normalize_imports, reanchor_resource
from ..merge.keys import IMPORTS_KEY
from ..merge.overlay import split_overlay
from ..merge.tree import merge_documents
from .registrar import Registrar

Document = Dict[str, Any]


class MergeLoader:
    """Loader de documentos com suporte a merge-imports e overlays de ambiente."""

    def __init__(
        self,
        *,
        registrar: Registrar,
        locator: Optional[FileLocator] = None,
        environment: Optional[str] = None,
        context: Optional[LoadContext] = None,
        detect_cycles: bool = True,
    ):
        self.registrar = registrar
        self.locator = locator or FileLocator()
        self.environment = environment
        self.context = context if context is not None else LoadContext()
        self.detect_cycles = detect_cycles

    def supports(self, resource: Any) -> bool:
        return isinstance(resource, str) and supports(resource)

    def load(
        self,
        resource: str,
        merging: Optional[Document] = None,
        *,
        current_dir: Optional[str] = None,
    ) -> Optional[Document]:
        """
        Carrega `resource`.

        Args:
            resource: caminho (absoluto ou relativo a `current_dir`/search paths).
            merging: acumulador da cadeia de merge; None na chamada externa.
            current_dir: diretório usado para resolver caminhos relativos.

        Returns:
            O novo acumulador (chamada aninhada) ou None (chamada externa,
            documento entregue ao Registrar).
        """
        return self._load(
            resource,
            merging,
            current_dir=current_dir,
            base_dir=None,
            match_environment=True,
            chain=(),
        )

    # ------------------------------------------------------------------
    # Recursão
    # ------------------------------------------------------------------

    def _load(
        self,
        resource: str,
        merging: Optional[Document],
        *,
        current_dir: Optional[str],
        base_dir: Optional[str],
        match_environment: bool,
        chain: Tuple[str, ...],
    ) -> Optional[Document]:
        path = self.locator.locate(resource, current_dir)

        if self.detect_cycles and path in chain:
            raise CycleDetectedError([*chain, path])

        content = parse_file(path)
        self.context.track_resource(path)

        if content is None:
            self.context.log(event="document.empty", level="INFO", message="Documento vazio", file=path)
            return merging

        file_dir = posixpath.dirname(path)
        outermost = merging is None
        if outermost or base_dir is None:
            base_dir = file_dir

        self.context.log(
            event="document.loaded",
            level="INFO",
            message="Documento carregado",
            file=path,
            merging=not outermost,
        )

        chain = (*chain, path)
        content = self._process(
            content,
            path,
            merging,
            base_dir=base_dir,
            match_environment=match_environment,
            chain=chain,
        )

        if not outermost:
            return content

        self._register(content, path, base_dir=base_dir, match_environment=match_environment, chain=chain)
        return None

    def _process(
        self,
        document: Document,
        file: str,
        merging: Optional[Document],
        *,
        base_dir: str,
        match_environment: bool,
        chain: Tuple[str, ...],
    ) -> Document:
        document = self._resolve_imports(
            document, file, base_dir=base_dir, match_environment=match_environment, chain=chain
        )

        if merging is None:
            return document

        if match_environment:
            document, fragment = split_overlay(document, self.environment, file=file)
            if fragment is not None:
                # o overlay vence em colisões; o seu próprio conteúdo não
                # volta a passar pelo match de ambiente
                fragment = self._resolve_imports(
                    fragment, file, base_dir=base_dir, match_environment=False, chain=chain
                )
                document = merge_documents(fragment, document)
                self.context.log(
                    event="overlay.applied",
                    level="INFO",
                    message="Overlay de ambiente aplicado na cadeia de merge",
                    file=file,
                    environment=self.environment,
                )

        return merge_documents(merging, document)

    def _resolve_imports(
        self,
        document: Document,
        file: str,
        *,
        base_dir: str,
        match_environment: bool,
        chain: Tuple[str, ...],
    ) -> Document:
        if IMPORTS_KEY not in document:
            return document

        directives = normalize_imports(document[IMPORTS_KEY], file)
        file_dir = posixpath.dirname(file)

        result = dict(document)
        result[IMPORTS_KEY] = []

        for directive in directives:
            if directive.merge:
                result = self._merge_import(
                    result,
                    directive,
                    file,
                    base_dir=base_dir,
                    match_environment=match_environment,
                    chain=chain,
                )
                continue

            resource = reanchor_resource(directive.resource, file_dir, base_dir)
            if resource != directive.resource:
                self.context.log(
                    event="import.reanchored",
                    level="DEBUG",
                    message="Import ordinário reancorado ao diretório base",
                    file=file,
                    resource=directive.resource,
                    reanchored=resource,
                )
            result.setdefault(IMPORTS_KEY, []).append(directive.with_resource(resource).to_entry())

        if not result.get(IMPORTS_KEY):
            result.pop(IMPORTS_KEY, None)

        return result

    def _merge_import(
        self,
        document: Document,
        directive: ImportDirective,
        file: str,
        *,
        base_dir: str,
        match_environment: bool,
        chain: Tuple[str, ...],
    ) -> Document:
        file_dir = posixpath.dirname(file)
        policy = directive.policy

        try:
            for match in self.locator.expand(directive.resource, file_dir):
                document = self._load(
                    match,
                    document,
                    current_dir=file_dir,
                    base_dir=base_dir,
                    match_environment=match_environment,
                    chain=chain,
                )
                self.context.log(
                    event="import.merged",
                    level="INFO",
                    message="Merge-import aplicado",
                    file=file,
                    resource=match,
                )
        except ConfigError as e:
            if not policy.allows(e):
                raise

            self.context.log(
                event="import.ignored",
                level="WARNING",
                message=str(e),
                file=file,
                resource=directive.resource,
                policy=policy.value,
                error=e.__class__.__name__,
            )
            self.context.add_warning(
                source=file,
                message=f'Merge-import "{directive.resource}" ignorado: {e}',
            )

        return document

    # ------------------------------------------------------------------
    # Registro (chamada externa)
    # ------------------------------------------------------------------

    def _register(
        self,
        document: Document,
        path: str,
        *,
        base_dir: str,
        match_environment: bool,
        chain: Tuple[str, ...],
    ) -> None:
        environment = self.environment if match_environment else None
        document, fragment = split_overlay(document, environment, file=path)
        if fragment is not None:
            fragment = self._resolve_imports(
                fragment, path, base_dir=base_dir, match_environment=False, chain=chain
            )

        self._hand_off(document, path)

        if fragment is not None:
            self._hand_off(fragment, path)
            self.context.log(
                event="overlay.applied",
                level="INFO",
                message="Overlay de ambiente registrado como segundo passo",
                file=path,
                environment=environment,
            )

    def _hand_off(self, document: Document, path: str) -> None:
        self.context.log(
            event="document.registered",
            level="INFO",
            message="Documento entregue ao Registrar",
            file=path,
            document_hash=compute_document_hash(document),
        )
        self.registrar.register(document, path)
