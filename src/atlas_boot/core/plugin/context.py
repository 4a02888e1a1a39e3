# src/atlas_boot/core/plugin/context.py
"""
Contexto compartilhado de um boot da aplicação.

Este módulo define o `BootContext`, a estrutura passada a todos os
plugins durante o boot. É o mapa de resultados compartilhado onde:

    - `configurations[<plugin>]` recebe a configuração mesclada (load)
    - `instructions[<plugin>]` recebe as instruções compiladas (compile)
    - `app` expõe o acessor de runtime usado na interpolação

Princípios fundamentais:
    - Isolamento por boot (cada boot possui seu próprio contexto)
    - Logs são eventos estruturados, não texto livre
    - Warnings são agrupados por plugin

Invariantes:
    - `instructions` é None até o primeiro compile
    - Eventos sempre incluem `plugin`, `level`, `message` e `timestamp`

Limites explícitos:
    - Escritas não são sincronizadas: plugins não devem compilar o mesmo
      artefato concorrentemente
    - Não decide ordem de execução de plugins
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from atlas_boot.core.runtime import RuntimeAccessor


@dataclass
class BootContext:
    app: Optional[RuntimeAccessor] = None
    configurations: Dict[str, Any] = field(default_factory=dict)
    instructions: Optional[Dict[str, Any]] = None

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, plugin: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "plugin": plugin,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, plugin: str, message: str) -> None:
        if plugin not in self.warnings:
            self.warnings[plugin] = []
        self.warnings[plugin].append(message)
