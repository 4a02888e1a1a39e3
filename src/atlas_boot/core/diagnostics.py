# src/atlas_boot/core/diagnostics.py
"""
Sinks de diagnóstico do Atlas Boot.

Warnings do pipeline de configuração (master ausente, placeholder não
resolvido) são sinais **não fatais**: nunca interrompem o fluxo e nunca
são convertidos em exceção. Este módulo define o contrato mínimo do
sink que recebe esses sinais e duas implementações:

    - LoggingSink → encaminha para um `logging.Logger` (nível WARNING)
    - ContextSink → registra no `BootContext` (evento estruturado +
      lista de warnings por plugin)

Catálogo de códigos estáveis:
    - MISSING_MASTER_CONFIG
    - UNRESOLVED_PLACEHOLDER
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, runtime_checkable


MISSING_MASTER_CONFIG = "MISSING_MASTER_CONFIG"
UNRESOLVED_PLACEHOLDER = "UNRESOLVED_PLACEHOLDER"


@runtime_checkable
class DiagnosticSink(Protocol):
    """
    Contrato de um sink de diagnóstico.

    A mensagem segue a convenção de formatação do `logging`
    (`message % args`). `code` identifica o tipo de warning de forma
    estável, independente do texto.
    """

    def warn(self, message: str, *args: Any, code: Optional[str] = None) -> None:
        ...


def format_message(message: str, *args: Any) -> str:
    return message % args if args else message


class LoggingSink:
    """Sink padrão: warnings vão para o logger informado."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("atlas_boot")

    def warn(self, message: str, *args: Any, code: Optional[str] = None) -> None:
        self.logger.warning(message, *args, extra={"code": code})


class ContextSink:
    """
    Sink que registra warnings no contexto de boot.

    Cada warning gera:
        - uma entrada em `ctx.warnings[plugin]`
        - um evento estruturado com nível WARNING e o `code`

    O contexto é acessado por duck typing (`log` + `add_warning`).
    """

    def __init__(self, ctx: Any, *, plugin: str):
        self.ctx = ctx
        self.plugin = plugin

    def warn(self, message: str, *args: Any, code: Optional[str] = None) -> None:
        text = format_message(message, *args)
        self.ctx.add_warning(plugin=self.plugin, message=text)
        self.ctx.log(plugin=self.plugin, level="WARNING", message=text, code=code)


def default_sink(sink: Optional[DiagnosticSink] = None) -> DiagnosticSink:
    return sink if sink is not None else LoggingSink()
