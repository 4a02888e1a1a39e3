# src/atlas_boot/__init__.py
"""
Atlas Boot — resolução de configuração em camadas para boot de aplicações.

Cada artefato de configuração (ex.: datasources, models, middleware) é
configurado por zero ou mais arquivos descobertos por convenção de nomes,
mesclados em um único objeto, opcionalmente compilados em instruções para
a aplicação hospedeira e, sob demanda, interpolados contra valores de
runtime.

Arquitetura em alto nível:
    - core.config      → descoberta, carregamento, merge, interpolação e hashing
    - core.plugin      → opções, contexto de boot e classe base de plugins
    - core.runtime     → acessor de valores de runtime da aplicação
    - core.diagnostics → sinks de warnings não fatais

Limites explícitos:
    - Não valida schema de configuração
    - Não decide ordem de execução de plugins
    - Não realiza I/O assíncrono
"""

from .core.config.errors import ConfigError, ConfigMergeError, InvalidNamedItemsError
from .core.config.interpolation import interpolate
from .core.config.loader import load_named
from .core.config.merge import merge_all, merge_named_items
from .core.plugin import BootContext, PluginBase, PluginOptions
from .core.runtime import AppState

__all__ = [
    "AppState",
    "BootContext",
    "ConfigError",
    "ConfigMergeError",
    "InvalidNamedItemsError",
    "PluginBase",
    "PluginOptions",
    "interpolate",
    "load_named",
    "merge_all",
    "merge_named_items",
]
