# src/atlas_boot/core/config/source.py
"""
Objeto de configuração carregado de um arquivo, com proveniência.

A proveniência (`filename`) é apenas metadado para mensagens de erro:
nunca participa de comparações durante o merge.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class ConfigSource:
    data: Dict[str, Any]
    filename: Optional[str] = field(default=None, compare=False)
