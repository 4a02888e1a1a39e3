# src/atlas_boot/core/config/discovery.py
"""
Descoberta de arquivos de configuração por convenção de nomes.

Dado um diretório raiz `R`, um ambiente `E` e um artefato `N`, os
candidatos são, em ordem de precedência crescente:

    - master:              R/N.json
    - override local:      R/N.local.js  | R/N.local.json
    - override de ambiente: R/N.E.js     | R/N.E.json

Para os overrides, a primeira extensão existente (na ordem da lista
de extensões) vence.

Decisões arquiteturais:
    - O master é obrigatório e controla os demais: sem master nenhum
      override é considerado
    - Overrides sem master indicam configuração incompleta e geram
      um warning (não fatal)
    - Ausência de arquivos é expressa como ausência na lista retornada,
      nunca como exceção

Invariantes:
    - A lista retornada preserva a ordem [master, local, env]
    - Apenas caminhos existentes são retornados
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from atlas_boot.core.diagnostics import DiagnosticSink, MISSING_MASTER_CONFIG, default_sink


logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = ("js", "json")

ExistsProbe = Callable[[str], bool]


def _path_exists(path: str) -> bool:
    return Path(path).exists()


def find_config_files(
    root_dir: str,
    env: Optional[str],
    name: str,
    exts: Optional[Sequence[str]] = None,
    *,
    exists: Optional[ExistsProbe] = None,
    sink: Optional[DiagnosticSink] = None,
) -> List[str]:
    """
    Procura em `root_dir` todos os arquivos com configuração do artefato `name`.

    Args:
        root_dir (str): Diretório onde os arquivos são procurados.
        env (Optional[str]): Ambiente (ex.: "production"). `None` desativa
            o override de ambiente.
        name (str): Nome do artefato (ex.: "datasources").
        exts (Optional[Sequence[str]]): Extensões aceitas para overrides,
            em ordem de preferência. Padrão: ("js", "json"). Uma
            sequência vazia desativa os overrides.
        exists (Optional[Callable]): Sonda de filesystem `exists(path)`.
        sink (Optional[DiagnosticSink]): Destino do warning de master ausente.

    Returns:
        List[str]: Caminhos absolutos normalizados (sem segmentos `..`)
        existentes, na ordem [master, local, env].
    """
    probe = exists or _path_exists
    extensions = tuple(exts) if exts is not None else DEFAULT_EXTENSIONS

    def if_exists(file_name: str) -> Optional[str]:
        file_path = os.path.abspath(os.path.join(root_dir, file_name))
        return file_path if probe(file_path) else None

    def if_exists_with_any_ext(file_name: str) -> Optional[str]:
        for ext in extensions:
            found = if_exists(f"{file_name}.{ext}")
            if found:
                return found
        return None

    def env_override() -> Optional[str]:
        if env is None:
            return None
        return if_exists_with_any_ext(f"{name}.{env}")

    master = if_exists(f"{name}.json")
    if master is None:
        if if_exists_with_any_ext(f"{name}.local") or env_override():
            default_sink(sink).warn(
                'Arquivo de configuração principal "%s.json" ausente; '
                "overrides encontrados serão ignorados",
                name,
                code=MISSING_MASTER_CONFIG,
            )
        return []

    candidates = [master, if_exists_with_any_ext(f"{name}.local"), env_override()]
    found = [c for c in candidates if c is not None]
    logger.debug("found %s %s files: %s", env, name, found)
    return found
