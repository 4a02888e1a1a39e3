# src/atlas_boot/core/plugin/base.py
"""
Classe base de plugins de boot.

Um plugin é responsável por um artefato de configuração (ex.:
"datasources", "middleware") e participa do boot em duas fases
invocadas pelo orquestrador:

    - load(ctx)    → descobre, carrega e mescla a configuração do
                     artefato e a registra em `ctx.configurations`
    - compile(ctx) → deriva instruções da configuração registrada e as
                     grava em `ctx.instructions`

Sob demanda, `get_updated_config` interpola placeholders `${nome}` na
configuração usando `ctx.app` e, opcionalmente, variáveis de ambiente.

Subclasses podem definir `build_instructions(ctx, root_dir, config)`
para transformar a configuração em instruções específicas.

Limites explícitos:
    - Não decide ordem de execução entre plugins
    - Não valida schema de configuração
"""

from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Dict, List, Mapping, Optional

from atlas_boot.core.config.discovery import find_config_files
from atlas_boot.core.config.hashing import compute_config_hash
from atlas_boot.core.config.interpolation import interpolate
from atlas_boot.core.config.loader import ConfigLoader, load_named
from atlas_boot.core.config.merge import merge_into
from atlas_boot.core.diagnostics import ContextSink, DiagnosticSink, LoggingSink

from .compiler import compile_instructions
from .context import BootContext
from .options import PluginOptions


logger = logging.getLogger(__name__)


class PluginBase:
    """
    Plugin de boot associado a um artefato de configuração.

    Args:
        options (PluginOptions): Opções de boot (root_dir, env, app_id, ...).
        name (Optional[str]): Nome do plugin; padrão `options.name`.
        artifact (Optional[str]): Artefato; padrão `options.artifact`.
        loader (Optional[ConfigLoader]): Loader de arquivos (padrão JSON/YAML).
        environ (Optional[Mapping[str, str]]): Provedor de variáveis de
            ambiente para a interpolação (padrão `os.environ`).
    """

    build_instructions = None

    def __init__(
        self,
        options: Optional[PluginOptions] = None,
        name: Optional[str] = None,
        artifact: Optional[str] = None,
        *,
        loader: Optional[ConfigLoader] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.options = options or PluginOptions()
        self.name = name or self.options.name
        self.artifact = artifact or self.options.artifact
        self.loader = loader
        self.environ = environ

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, artifact={self.artifact!r})"

    def get_root_dir(self) -> str:
        return self.options.root_dir

    def _sink(self, ctx: Optional[BootContext]) -> DiagnosticSink:
        if ctx is None:
            return LoggingSink(logger)
        return ContextSink(ctx, plugin=self.name or "<unnamed>")

    # -----------------------------
    # load
    # -----------------------------
    def load(self, ctx: BootContext) -> Dict[str, Any]:
        """
        Resolve a configuração do plugin e a registra no contexto de boot.

        Ordem de resolução:
            - configuração inline em `options.inline[<plugin>]` (copiada),
              que substitui os arquivos mesmo quando vazia
            - arquivos do artefato (master + local + env), mesclados
            - `{}` quando o plugin não declara artefato

        Ao final, um evento INFO é registrado com a origem ("inline" ou
        "files") e o hash canônico da configuração.

        Args:
            ctx (BootContext): Contexto de boot compartilhado.

        Returns:
            Dict[str, Any]: A configuração registrada em
            `ctx.configurations[<plugin>]`.

        Raises:
            ValueError: Se o plugin não tiver nome.
            ConfigMergeError: Se os arquivos tiverem tipos incompatíveis.
            ConfigError: Em falhas de carregamento dos arquivos.
        """
        if not self.name:
            raise ValueError("Plugin name must be set")

        root_dir = self.get_root_dir()
        env = self.options.env
        logger.debug("Root dir: %s, env: %s, artifact: %s", root_dir, env, self.artifact)

        use_inline = self.options.has_inline_config(self.name)
        if use_inline:
            logger.debug("Artifact %s is using provided config object instead of config file", self.name)
            config = deepcopy(self.options.inline_config(self.name))
        elif self.artifact:
            config = self.load_named(root_dir, env, self.artifact, ctx=ctx)
        else:
            config = {}

        config = self.configure(ctx, config)
        ctx.log(
            plugin=self.name,
            level="INFO",
            message="configuration loaded",
            source="inline" if use_inline else "files",
            config_hash=compute_config_hash(config),
        )
        return config

    def configure(self, ctx: BootContext, config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Registra `config` em `ctx.configurations[<plugin>]`.

        Ponto de extensão: subclasses podem ajustar a configuração antes
        do registro. Valores vazios são normalizados para `{}`.
        """
        config = config or {}
        ctx.configurations[self.name] = config
        return config

    def merge(self, target: Dict[str, Any], config: Any, key_prefix: Optional[str] = None) -> Dict[str, Any]:
        """
        Mescla `config` em `target` com as regras de `merge_into`.

        `key_prefix` aparece apenas no caminho das mensagens de conflito.

        Raises:
            ConfigMergeError: Se houver tipos incompatíveis.
        """
        return merge_into(target, config, key_prefix)

    def find_config_files(
        self,
        root_dir: str,
        env: Optional[str],
        name: str,
        *,
        ctx: Optional[BootContext] = None,
    ) -> List[str]:
        """
        Descobre os arquivos do artefato `name` com as extensões das opções.

        Warnings de master ausente vão para `ctx` quando informado; caso
        contrário, para o logger do módulo.
        """
        return find_config_files(
            root_dir, env, name, self.options.extensions, sink=self._sink(ctx)
        )

    def load_named(
        self,
        root_dir: str,
        env: Optional[str],
        name: str,
        *,
        ctx: Optional[BootContext] = None,
    ) -> Dict[str, Any]:
        """Descobre, carrega e mescla o artefato `name` (ver `load_named`)."""
        return load_named(
            root_dir,
            env,
            name,
            extensions=self.options.extensions,
            loader=self.loader,
            sink=self._sink(ctx),
        )

    # -----------------------------
    # compile
    # -----------------------------
    def _transform_for(self, ctx: BootContext):
        if not callable(self.build_instructions):
            return None

        def transform(config: Any, root_dir: Optional[str]) -> Any:
            return self.build_instructions(ctx, root_dir, config or {})

        return transform

    def compile(self, ctx: BootContext) -> None:
        """
        Deriva as instruções do plugin e as grava em `ctx.instructions`.

        Usa `build_instructions` quando a subclasse o define; caso
        contrário a configuração registrada é a própria instrução.

        Invariantes:
            - `ctx.instructions` é criado na primeira compilação e semeado
              com `appId` quando `options.app_id` está definido
            - Cada plugin escreve apenas `ctx.instructions[<plugin>]`
        """
        if ctx.instructions is None:
            ctx.instructions = {}

        compile_instructions(
            self.name,
            ctx.configurations.get(self.name),
            self.options.root_dir,
            ctx.instructions,
            transform=self._transform_for(ctx),
            app_id=self.options.app_id,
        )

    # -----------------------------
    # interpolation
    # -----------------------------
    def get_updated_config(
        self,
        ctx: BootContext,
        config: Any,
        *,
        use_env_vars: Optional[bool] = None,
    ) -> Any:
        """
        Interpola placeholders `${nome}` em `config`.

        Args:
            ctx (BootContext): Contexto; `ctx.app` fornece os valores de runtime.
            config (Any): Configuração a interpolar (não é mutada).
            use_env_vars (Optional[bool]): Consulta variáveis de ambiente
                antes do runtime. Padrão: `options.use_env_vars`.

        Returns:
            Any: Nova estrutura com placeholders resolvidos; placeholders
            sem valor viram `None` e geram warning no contexto.
        """
        if use_env_vars is None:
            use_env_vars = self.options.use_env_vars
        return interpolate(
            config,
            ctx.app,
            use_env_vars=use_env_vars,
            environ=self.environ,
            sink=self._sink(ctx),
        )
