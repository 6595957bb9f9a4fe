"""
Fixtures compartilhados para testes do YAML Merge Loader.

Este módulo define fixtures reutilizáveis que fornecem:
- escrita de arquivos de configuração em uma árvore temporária
- loaders pré-configurados com um Registrar que apenas grava documentos

Decisões arquiteturais:
    - Arquivos são escritos sob `tmp_path`, nunca no repositório
    - O conteúdo YAML é dedentado, permitindo strings indentadas nos testes
    - Imports do pacote são feitos de forma lazy dentro das fixtures

Invariantes:
    - Cada teste recebe uma árvore de diretórios isolada
    - Nenhuma fixture registra documentos por conta própria
"""

import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Diretório base (`<tmp>/config`) da árvore de configuração de teste."""
    d = tmp_path / "config"
    d.mkdir()
    return d


@pytest.fixture
def write_config(config_dir: Path):
    """
    Fixture que retorna uma função para escrever arquivos de configuração.

    Uso:
        path = write_config("sub/a.yaml", '''
            parameters:
              x: 1
        ''')

    Returns:
        Callable[[str, str], str]: escreve o arquivo relativo a `config_dir`
        e retorna o caminho absoluto com separador `/`.
    """

    def _write(relative: str, content: str) -> str:
        target = config_dir / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return str(target.resolve()).replace("\\", "/")

    return _write


@pytest.fixture
def make_recording_loader():
    """
    Fixture que cria um MergeLoader com `RecordingRegistrar`.

    Returns:
        Callable[..., Tuple[MergeLoader, RecordingRegistrar]]
    """
    from yaml_merge_loader.core.loader import MergeLoader, RecordingRegistrar

    def _make(environment=None, **kwargs):
        registrar = RecordingRegistrar()
        loader = MergeLoader(registrar=registrar, environment=environment, **kwargs)
        return loader, registrar

    return _make
