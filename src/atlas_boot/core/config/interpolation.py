# src/atlas_boot/core/config/interpolation.py
"""
Interpolação de placeholders dinâmicos em configuração resolvida.

Uma string é um placeholder quando **termina** em `${identificador}`
(identificador = um ou mais caracteres de palavra ASCII). Qualquer
outra string é devolvida sem alteração: não há substituição parcial
nem templating de strings.

Ordem de resolução de `${nome}`:
    1. variável de ambiente `nome` (apenas com `use_env_vars=True`)
    2. `runtime.get(nome)`, quando definido (não-None)
    3. `None`, com um warning UNRESOLVED_PLACEHOLDER no sink

Recursão:
    - listas/tuplas → cada elemento é interpolado (resultado: lista)
    - dicts → cada valor string é resolvido, listas e dicts não vazios
      são percorridos, demais valores passam inalterados
    - objetos não "plain" (datas, regex compilados, ...) → devolvidos
      intactos, sem inspeção interna

Decisões arquiteturais:
    - O provedor de variáveis de ambiente é injetado (`environ`);
      `os.environ` é apenas o padrão quando nenhum é fornecido
    - A função é pura: a entrada nunca é mutada e o único efeito
      colateral são warnings de diagnóstico

Invariantes:
    - Reinterpolar um valor já resolvido produz um valor igual
"""

from __future__ import annotations

import logging
import os
import re
from typing import Any, Mapping, Optional

from atlas_boot.core.diagnostics import DiagnosticSink, UNRESOLVED_PLACEHOLDER, default_sink
from atlas_boot.core.runtime import RuntimeAccessor


logger = logging.getLogger(__name__)

DYNAMIC_CONFIG_PARAM = re.compile(r"\$\{(\w+)\}\Z", re.ASCII)


def resolve_placeholder(
    param: str,
    runtime: Optional[RuntimeAccessor],
    *,
    use_env_vars: bool = False,
    environ: Optional[Mapping[str, str]] = None,
    sink: Optional[DiagnosticSink] = None,
) -> Any:
    """Resolve uma única string; strings sem placeholder são devolvidas como estão."""
    match = DYNAMIC_CONFIG_PARAM.search(param)
    if not match:
        return param

    var_name = match.group(1)
    env = os.environ if environ is None else environ

    if use_env_vars and env.get(var_name) is not None:
        logger.debug("Dynamic Configuration: resolved via environment: %s as %s", param, var_name)
        return env[var_name]

    app_value = runtime.get(var_name) if runtime is not None else None
    if app_value is not None:
        logger.debug("Dynamic Configuration: resolved via runtime.get(): %s as %s", param, var_name)
        return app_value

    default_sink(sink).warn(
        '%s não resolve para um valor válido, retornado como None. '
        '"%s" deve ser resolvível por variável de ambiente ou por runtime.get().',
        param,
        var_name,
        code=UNRESOLVED_PLACEHOLDER,
    )
    return None


def interpolate(
    value: Any,
    runtime: Optional[RuntimeAccessor],
    *,
    use_env_vars: bool = False,
    environ: Optional[Mapping[str, str]] = None,
    sink: Optional[DiagnosticSink] = None,
) -> Any:
    """
    Interpola recursivamente placeholders `${nome}` em `value`.

    Args:
        value (Any): Configuração (ou fragmento) a interpolar.
        runtime (Optional[RuntimeAccessor]): Acessor `get(nome)` da aplicação.
        use_env_vars (bool): Consulta variáveis de ambiente antes do runtime.
        environ (Optional[Mapping[str, str]]): Provedor de variáveis de ambiente.
        sink (Optional[DiagnosticSink]): Destino dos warnings de placeholders
            não resolvidos.

    Returns:
        Any: Nova estrutura com placeholders resolvidos.
    """

    def resolve(param: str) -> Any:
        return resolve_placeholder(
            param, runtime, use_env_vars=use_env_vars, environ=environ, sink=sink
        )

    def walk(node: Any) -> Any:
        if isinstance(node, str):
            return resolve(node)

        if isinstance(node, (list, tuple)):
            return [walk(item) for item in node]

        # escalares, None e objetos não "plain"
        if not isinstance(node, dict):
            return node

        interpolated = {}
        for key, item in node.items():
            if isinstance(item, (list, tuple)):
                interpolated[key] = [walk(element) for element in item]
            elif isinstance(item, str):
                interpolated[key] = resolve(item)
            elif isinstance(item, dict) and item:
                interpolated[key] = walk(item)
            else:
                interpolated[key] = item
        return interpolated

    return walk(value)
