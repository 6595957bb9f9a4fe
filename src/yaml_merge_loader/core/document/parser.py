# src/yaml_merge_loader/core/document/parser.py
"""
Parser canônico de documentos de configuração.

Este módulo é responsável por ler um arquivo do disco e convertê-lo em
uma árvore de mapeamentos, sequências e escalares (ConfigurationDocument).

Formatos suportados (v1):
    - YAML (.yaml, .yml) — preferencial
    - JSON (.json)       — alternativo

Decisões arquiteturais:
    - O formato é inferido exclusivamente pela extensão do arquivo
    - Arquivos vazios são representados por `None` (não por `{}`),
      permitindo ao loader distinguir "vazio" de "mapa vazio"
    - O conteúdo raiz, quando presente, deve ser um dicionário

Limites explícitos:
    - Não resolve imports
    - Não realiza merge
    - Não interpreta chaves reservadas ("imports", "services", "when@...")
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml  # PyYAML

from ..errors import (
    ConfigParseError,
    InvalidConfigRootTypeError,
    ResourceNotFoundError,
    UnsupportedConfigFormatError,
)

YAML_SUFFIXES = frozenset({".yaml", ".yml"})
JSON_SUFFIXES = frozenset({".json"})
SUPPORTED_SUFFIXES = YAML_SUFFIXES | JSON_SUFFIXES


def supports(path: Union[str, Path]) -> bool:
    """Indica se a extensão do arquivo é suportada pelo parser."""
    return Path(path).suffix.lower() in SUPPORTED_SUFFIXES


def parse_file(path: Union[str, Path]) -> Optional[Dict[str, Any]]:
    """
    Carrega um arquivo de configuração e valida sua estrutura básica.

    Decisões arquiteturais:
        - O arquivo deve existir no momento do carregamento
        - O conteúdo raiz deve ser um dicionário (`dict`)
        - Arquivos vazios retornam `None`
        - Formatos não suportados geram erro explícito

    Args:
        path (str | Path): Caminho para o arquivo de configuração.

    Returns:
        Optional[Dict[str, Any]]: Conteúdo do arquivo, ou None se vazio.

    Raises:
        ResourceNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato não for suportado.
        ConfigParseError: Se o conteúdo não for YAML/JSON válido.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    p = Path(path)
    if not p.is_file():
        raise ResourceNotFoundError(f"Arquivo não encontrado: {p}")

    suffix = p.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {p.suffix} ({p})")

    try:
        raw = p.read_text(encoding="utf-8")
    except (UnicodeDecodeError, OSError) as e:
        raise ConfigParseError(f"Falha ao ler {p}: {e}") from e

    try:
        if suffix in YAML_SUFFIXES:
            data = yaml.safe_load(raw)
        elif raw.strip():
            data = json.loads(raw)
        else:
            data = None
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigParseError(f"Falha ao parsear {p}: {e}") from e

    if data is None:
        return None

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Documento raiz deve ser dict em {p}, recebido: {type(data).__name__}"
        )

    return data
