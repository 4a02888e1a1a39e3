# src/atlas_boot/core/config/loader.py
"""
Loader de configuração nomeada de artefatos.

Este módulo liga as três etapas da resolução de um artefato:

    descoberta (convenção de nomes) → carregamento → merge

Responsabilidades do módulo:
    - Carregar arquivos de configuração em JSON ou YAML
    - Validar requisitos estruturais mínimos (raiz deve ser dict)
    - Anexar proveniência (`filename`) a cada objeto carregado
    - Copiar profundamente cada objeto antes do merge, de modo que
      loaders com cache nunca tenham seus resultados mutados

Decisões arquiteturais:
    - O loader é um colaborador substituível (`ConfigLoader.load(path)`)
    - Arquivos YAML vazios são interpretados como dicionários vazios
    - Extensões não suportadas (incluindo `.js`) geram erro explícito

Invariantes:
    - O resultado de `load_named` é sempre um dicionário
    - Precedência: master < override local < override de ambiente

Limites explícitos:
    - Não valida schema da configuração
    - Não realiza I/O assíncrono
"""

from __future__ import annotations

import json
import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence

import yaml  # PyYAML

from atlas_boot.core.diagnostics import DiagnosticSink

from .discovery import ExistsProbe, find_config_files
from .errors import (
    ConfigFileNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import merge_all
from .source import ConfigSource


logger = logging.getLogger(__name__)


class ConfigLoader(Protocol):
    def load(self, path: str) -> Any:
        ...


class FileConfigLoader:
    """
    Loader padrão baseado em extensão de arquivo.

    Formatos suportados:
        - JSON (.json)
        - YAML (.yaml, .yml)

    Raises:
        ConfigFileNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigRootTypeError: Se a raiz do conteúdo não for um dict.
    """

    def load(self, path: str) -> Dict[str, Any]:
        file_path = Path(path)
        if not file_path.exists():
            raise ConfigFileNotFoundError(
                f"Arquivo de configuração não encontrado: {file_path}",
                details={"path": str(file_path)},
            )

        suffix = file_path.suffix.lower()

        if suffix in {".yaml", ".yml"}:
            with file_path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)

        elif suffix == ".json":
            with file_path.open("r", encoding="utf-8") as f:
                data = json.load(f)

        else:
            raise UnsupportedConfigFormatError(
                f"Formato não suportado: {file_path.suffix} ({file_path})",
                details={"path": str(file_path), "suffix": file_path.suffix},
            )

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise InvalidConfigRootTypeError(
                f"Config root deve ser dict, recebido: {type(data).__name__} ({file_path})",
                details={"path": str(file_path), "root_type": type(data).__name__},
            )

        return data


def load_config_files(files: Iterable[str], loader: Optional[ConfigLoader] = None) -> List[ConfigSource]:
    """
    Carrega cada arquivo como `ConfigSource`.

    Cada objeto carregado é copiado em profundidade antes de ser
    associado ao caminho de origem, de modo que loaders com cache nunca
    compartilham estrutura com o merge.

    Args:
        files (Iterable[str]): Caminhos em ordem de precedência crescente.
        loader (Optional[ConfigLoader]): Loader de arquivos (padrão: JSON/YAML).

    Returns:
        List[ConfigSource]: Fontes na mesma ordem de `files`.

    Raises:
        ConfigFileNotFoundError: Se um arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigRootTypeError: Se a raiz do arquivo não for um mapa.

    Invariantes:
        - `filename` de cada fonte é exatamente o caminho recebido
    """
    active = loader or FileConfigLoader()
    return [ConfigSource(data=deepcopy(active.load(f)), filename=f) for f in files]


def load_named(
    root_dir: str,
    env: Optional[str],
    name: str,
    *,
    extensions: Optional[Sequence[str]] = None,
    loader: Optional[ConfigLoader] = None,
    exists: Optional[ExistsProbe] = None,
    sink: Optional[DiagnosticSink] = None,
) -> Dict[str, Any]:
    """
    Resolve a configuração mesclada de um artefato.

    Args:
        root_dir (str): Diretório onde procurar os arquivos.
        env (Optional[str]): Ambiente usado no override de ambiente.
        name (str): Nome do artefato (ex.: "datasources").
        extensions (Optional[Sequence[str]]): Extensões aceitas para overrides.
        loader (Optional[ConfigLoader]): Loader de arquivos (padrão: JSON/YAML).
        exists (Optional[Callable]): Sonda de filesystem.
        sink (Optional[DiagnosticSink]): Destino de warnings da descoberta.

    Returns:
        Dict[str, Any]: Configuração mesclada; `{}` quando não há master.

    Raises:
        ConfigMergeError: Se as fontes tiverem tipos incompatíveis.
        ConfigError: Em falhas de carregamento do loader padrão.
    """
    files = find_config_files(root_dir, env, name, extensions, exists=exists, sink=sink)
    logger.debug("Looking in dir %s for %s configs", root_dir, name)
    for f in files:
        logger.debug("  %s", f)

    merged = merge_all(load_config_files(files, loader))
    logger.debug("merged %s %s configuration %s", env, name, merged)
    return merged
