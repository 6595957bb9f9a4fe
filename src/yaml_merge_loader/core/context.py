# src/yaml_merge_loader/core/context.py
"""
LoadContext — contexto de rastreabilidade de uma sessão de carregamento.

O LoadContext é o ponto central de observabilidade do loader:
- registro de eventos estruturados (em vez de strings livres)
- coleta de warnings não fatais agrupados por arquivo
- rastreamento dos arquivos efetivamente localizados (existence tracking)

Princípios fundamentais:
- Eventos são dicts serializáveis com timestamp UTC
- A ordem de `events` e `resources` reflete a ordem real de carregamento
- O contexto não influencia a semântica do merge
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


@dataclass
class LoadContext:
    """
    Contexto compartilhado de uma sessão de carregamento.

    Campos canônicos:
    - resources: arquivos localizados, em ordem, sem duplicatas
    - events: log estruturado de eventos
    - warnings: warnings por arquivo de origem
    """

    resources: List[str] = field(default_factory=list)
    events: List[Dict[str, Any]] = field(default_factory=list)
    warnings: Dict[str, List[str]] = field(default_factory=dict)

    # -----------------------------
    # Existence tracking
    # -----------------------------
    def track_resource(self, path: str) -> None:
        if path not in self.resources:
            self.resources.append(path)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, event: str, level: str, message: str, **extra: Any) -> None:
        entry = {
            "event": event,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        entry.update(extra)
        self.events.append(entry)

    def add_warning(self, *, source: str, message: str) -> None:
        if source not in self.warnings:
            self.warnings[source] = []
        self.warnings[source].append(message)

    def events_named(self, event: str) -> List[Dict[str, Any]]:
        """Retorna os eventos com o nome informado, na ordem de registro."""
        return [e for e in self.events if e["event"] == event]
