# src/atlas_boot/core/plugin/compiler.py
"""
Compilação de instruções a partir da configuração mesclada.

Instruções são a estrutura específica de cada artefato consumida pela
aplicação hospedeira. Quando o artefato define uma transformação, ela
recebe a configuração mesclada e o diretório raiz; caso contrário a
própria configuração é a instrução (transformação identidade).

Invariantes:
    - Exatamente um valor é armazenado por artefato: a saída da
      transformação ou a configuração original
    - Na primeira escrita, o mapa de resultados é semeado com `appId`
      quando um identificador de aplicação é informado
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional


Transform = Callable[[Any, Optional[str]], Any]

APP_ID_KEY = "appId"


def compile_instructions(
    name: str,
    config: Any,
    root_dir: Optional[str],
    results: Dict[str, Any],
    *,
    transform: Optional[Transform] = None,
    app_id: Optional[str] = None,
) -> Any:
    """
    Compila as instruções de um artefato e as grava em `results[name]`.

    Args:
        name (str): Nome do plugin/artefato; chave em `results`.
        config (Any): Configuração mesclada do artefato.
        root_dir (Optional[str]): Diretório raiz repassado à transformação.
        results (Dict[str, Any]): Mapa compartilhado de instruções (mutado).
        transform (Optional[Callable]): `transform(config, root_dir)`; quando
            ausente, a configuração é usada como instrução.
        app_id (Optional[str]): Identificador semeado em `results["appId"]`
            na primeira escrita.

    Returns:
        Any: As instruções gravadas.

    Decisões arquiteturais:
        - A semeadura de `appId` ocorre apenas com `results` vazio, para
          não sobrescrever um valor já compilado
        - Erros da transformação propagam sem tratamento

    Limites explícitos:
        - Não valida o formato das instruções
        - Não interpola placeholders
    """
    instructions = transform(config, root_dir) if transform is not None else config

    if not results and app_id:
        results[APP_ID_KEY] = app_id
    results[name] = instructions
    return instructions
