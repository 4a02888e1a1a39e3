# src/atlas_boot/core/plugin/__init__.py
"""
Contrato de plugins de boot.

- options  → `PluginOptions` (root_dir, env, app_id, extensões, inline)
- context  → `BootContext` (configurations, instructions, eventos, warnings)
- compiler → `compile_instructions` (transformação ou identidade)
- base     → `PluginBase` (load, configure, compile, get_updated_config)
"""

from .base import PluginBase
from .compiler import compile_instructions
from .context import BootContext
from .options import PluginOptions

__all__ = ["BootContext", "PluginBase", "PluginOptions", "compile_instructions"]
