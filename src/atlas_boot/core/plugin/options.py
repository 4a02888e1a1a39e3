# src/atlas_boot/core/plugin/options.py
"""
Opções de boot compartilhadas pelos plugins.

As opções concentram tudo o que a resolução de configuração precisa
saber sobre o ambiente de execução:

    - root_dir     → diretório onde os arquivos do artefato são procurados
    - env          → ambiente usado no override `<artefato>.<env>.*`
    - name         → nome do plugin (chave em configurations/instructions)
    - artifact     → nome do artefato (base da convenção de arquivos)
    - app_id       → identificador da aplicação semeado em instructions
    - extensions   → extensões aceitas para overrides, em ordem
    - inline       → configurações fornecidas diretamente, por plugin
    - use_env_vars → padrão de interpolação com variáveis de ambiente

`from_environ` lê as opções de um mapeamento de ambiente injetado:
    - ATLAS_BOOT_ROOT_DIR (padrão ".")
    - ATLAS_BOOT_ENV      (padrão "development")
    - ATLAS_BOOT_APP_ID   (opcional)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from atlas_boot.core.config.discovery import DEFAULT_EXTENSIONS


ENV_ROOT_DIR = "ATLAS_BOOT_ROOT_DIR"
ENV_ENVIRONMENT = "ATLAS_BOOT_ENV"
ENV_APP_ID = "ATLAS_BOOT_APP_ID"

DEFAULT_ENVIRONMENT = "development"


@dataclass(frozen=True)
class PluginOptions:
    root_dir: str = "."
    env: Optional[str] = DEFAULT_ENVIRONMENT
    name: Optional[str] = None
    artifact: Optional[str] = None
    app_id: Optional[str] = None
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    inline: Dict[str, Any] = field(default_factory=dict)
    use_env_vars: bool = False

    def has_inline_config(self, name: str) -> bool:
        # {} e [] inline contam como configuração; só None é ausência
        return self.inline.get(name) is not None

    def inline_config(self, name: str) -> Optional[Any]:
        return self.inline.get(name)

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> "PluginOptions":
        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {
            "root_dir": env.get(ENV_ROOT_DIR, "."),
            "env": env.get(ENV_ENVIRONMENT, DEFAULT_ENVIRONMENT),
            "app_id": env.get(ENV_APP_ID) or None,
        }
        values.update(overrides)
        return cls(**values)
