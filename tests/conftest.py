# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas Boot.

Este módulo define fixtures reutilizáveis que fornecem:
- escrita controlada de arquivos de configuração em diretório temporário
- sink de diagnóstico em memória (coleta de warnings)
- estado de aplicação (runtime) determinístico
- contexto de boot isolado

Decisões arquiteturais:
    - Arquivos só são escritos sob `tmp_path`
    - Variáveis de ambiente são sempre injetadas como dicionários,
      nunca lidas do processo
    - Imports do core são realizados de forma lazy

Invariantes:
    - Nenhuma fixture depende de estado global
    - Todas as fixtures são seguras para execução em paralelo
"""

import json
from pathlib import Path

import pytest


@pytest.fixture
def write_config(tmp_path: Path):
    """
    Fixture factory que escreve um arquivo de configuração em `tmp_path`.

    Objetos são serializados como JSON; strings são gravadas como estão
    (útil para YAML ou arquivos `.js`).

    Returns:
        Callable[[str, object], Path]: função `(file_name, content) -> path`.
    """

    def _write(file_name: str, content) -> Path:
        path = tmp_path / file_name
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def RecordingSink():
    """
    Fixture que fornece uma *classe* de sink de diagnóstico em memória.

    Cada chamada a `warn` é registrada como tupla
    `(mensagem_formatada, code)` em `records`.
    """

    class _RecordingSink:
        def __init__(self):
            self.records = []

        def warn(self, message, *args, code=None):
            self.records.append((message % args if args else message, code))

        @property
        def codes(self):
            return [code for _, code in self.records]

    return _RecordingSink


@pytest.fixture
def sink(RecordingSink):
    return RecordingSink()


@pytest.fixture
def app_state():
    """Estado de aplicação com valores típicos de um boot (`port`, `restApiRoot`)."""
    from atlas_boot.core.runtime import AppState

    state = AppState()
    state.set("port", 8080)
    state.set("restApiRoot", "/api")
    return state


@pytest.fixture
def boot_ctx(app_state):
    """Contexto de boot isolado, ligado ao `app_state`."""
    from atlas_boot.core.plugin.context import BootContext

    return BootContext(app=app_state)
