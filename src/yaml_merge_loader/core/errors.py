# src/yaml_merge_loader/core/errors.py
"""
Exceções canônicas do YAML Merge Loader.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento, a resolução de imports, o merge de documentos e o
registro final de configuração.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais de entrada são tratados como falhas fatais
    - Mensagens são curtas e sempre nomeiam o arquivo envolvido

Taxonomia:
    - MalformedInputError   → "imports" inválido ou entrada sem `resource`
    - ResourceNotFoundError → arquivo referenciado inexistente
    - LoadFailureError      → qualquer outra falha de carregamento
    - RegistrationError     → falha do passo externo de registro

Invariantes:
    - Todas as exceções herdam de `ConfigError`
    - Apenas `ConfigError` participa da política `ignore_errors`

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não decide políticas de ignore (responsabilidade do loader)
"""

from __future__ import annotations

from typing import Sequence


class ConfigError(Exception):
    """
    Exceção base para erros do YAML Merge Loader.

    Todas as exceções levantadas durante parsing, resolução de imports,
    merge e registro devem herdar desta classe, permitindo captura
    genérica no ponto de import (`ignore_errors: true`).
    """


class MalformedInputError(ConfigError):
    """
    Exceção levantada quando a estrutura de "imports" é inválida.

    Casos cobertos:
        - "imports" presente mas não é uma lista
        - entrada de import sem o campo `resource`
        - entrada de import que não é string nem mapeamento

    Decisões arquiteturais:
        - Erro fatal, nunca recuperado pela política `ignore_errors`,
          nem mesmo quando propaga de um arquivo importado
    """


class ResourceNotFoundError(ConfigError):
    """
    Exceção levantada quando um recurso referenciado não existe.

    Recuperável no ponto de import apenas quando a política é
    `ignore_errors: not_found` ou `ignore_errors: true`.
    """


class LoadFailureError(ConfigError):
    """Falha de carregamento que não é ausência de arquivo."""


class UnsupportedConfigFormatError(LoadFailureError):
    """
    Exceção levantada quando o formato do arquivo não é suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)

    Limites explícitos:
        - Não tenta inferir formato por conteúdo
    """


class ConfigParseError(LoadFailureError):
    """Falha ao parsear YAML/JSON."""


class InvalidConfigRootTypeError(LoadFailureError):
    """
    Exceção levantada quando o conteúdo raiz do documento não é um
    mapeamento (`dict`).

    Listas ou escalares na raiz são inválidos; o loader não tenta
    encapsular estruturas inválidas.
    """


class CycleDetectedError(LoadFailureError):
    """
    Exceção levantada quando um arquivo reaparece na cadeia ativa de
    merge-imports (A importa B que importa A).

    O atributo `chain` preserva a cadeia de arquivos, na ordem em que
    foram abertos, terminando no arquivo repetido.
    """

    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = list(chain)
        super().__init__("Import cíclico detectado: " + " -> ".join(self.chain))


class RegistrationError(ConfigError):
    """
    Exceção levantada pelo Registrar ao converter um documento final
    em estado de configuração (ex.: "services" que não é mapeamento).

    Não é suprimida pelo loader, exceto quando propaga por um
    merge-import cuja política a ignora.
    """
