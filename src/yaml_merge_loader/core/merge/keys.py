# src/yaml_merge_loader/core/merge/keys.py
"""Chaves reservadas de um ConfigurationDocument."""

IMPORTS_KEY = "imports"
SERVICES_KEY = "services"
PARAMETERS_KEY = "parameters"

# Chaves reservadas dentro de "services"
DEFAULTS_KEY = "_defaults"
INSTANCEOF_KEY = "_instanceof"

# Forma curta de uma definição: lista de argumentos
ARGUMENTS_KEY = "arguments"

# Overlay condicionado a ambiente: "when@<env>"
OVERLAY_PREFIX = "when@"


def is_overlay_key(namespace: str) -> bool:
    return isinstance(namespace, str) and namespace.startswith(OVERLAY_PREFIX)


def overlay_key(environment: str) -> str:
    return OVERLAY_PREFIX + environment
