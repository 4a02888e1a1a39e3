# src/atlas_boot/core/runtime.py
"""
Acesso a valores de runtime da aplicação hospedeira.

O interpolador resolve placeholders `${nome}` consultando, como segunda
fonte (depois das variáveis de ambiente), um acessor chave-valor da
aplicação. O acessor é consultado apenas por nome: nunca é enumerado.

Componentes:
    - RuntimeAccessor → protocolo mínimo (`get(name)`)
    - AppState        → implementação em memória com `get`/`set`

Valores `None` são tratados como "não definido".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Protocol, runtime_checkable


@runtime_checkable
class RuntimeAccessor(Protocol):
    def get(self, name: str) -> Any:
        ...


@dataclass
class AppState:
    """Estado de aplicação em memória (ex.: `port`, `restApiRoot`)."""

    _values: Dict[str, Any] = field(default_factory=dict, repr=False)

    def set(self, name: str, value: Any) -> None:
        self._values[name] = value

    def get(self, name: str) -> Any:
        return self._values.get(name)
