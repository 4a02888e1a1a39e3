# src/atlas_boot/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Atlas Boot.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a descoberta, o carregamento e o merge de arquivos de configuração
de artefatos.

As exceções aqui definidas representam **falhas fatais de configuração**.
Situações não fatais (master ausente, placeholder não resolvido) não
são exceções: são emitidas como warnings pelo sink de diagnóstico.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais interrompem a resolução imediatamente
    - Mensagens identificam o caminho da opção e a origem do valor

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Toda exceção carrega `details` serializável para diagnóstico

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não existe política de retry (a resolução é determinística)
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ConfigError(Exception):
    """
    Exceção base para erros de configuração do Atlas Boot.

    Todas as exceções levantadas durante carregamento e merge de
    configuração devem herdar desta classe, permitindo captura
    genérica pelo orquestrador de plugins.
    """

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})


class ConfigMergeError(ConfigError):
    """
    Exceção levantada quando dois valores de tipos incompatíveis
    são mesclados na mesma opção.

    Exemplo de conflito:
        - master:   {"port": 3000}
        - override: {"port": {"http": 3000}}

    Decisões arquiteturais:
        - O shape da configuração é herdado do primeiro arquivo (master)
        - Um conflito aborta toda a sequência de merge (fail-fast)

    Invariantes:
        - `key_path` identifica a opção em notação pontuada/indexada
          (ex.: `foo.bar[2]`)
        - Nenhum merge parcial é devolvido ao chamador
    """

    def __init__(
        self,
        key_path: str,
        target_type: str,
        source_type: str,
        *,
        source: Optional[str] = None,
    ):
        message = (
            f"Não é possível mesclar valores de tipos incompatíveis na opção "
            f"`{key_path}`: {target_type} vs {source_type}"
        )
        if source:
            message += f" (origem: {source})"
        super().__init__(
            message,
            details={
                "key_path": key_path,
                "target_type": target_type,
                "source_type": source_type,
                "source": source,
            },
        )
        self.key_path = key_path
        self.target_type = target_type
        self.source_type = source_type
        self.source = source


class InvalidNamedItemsError(ConfigError, TypeError):
    """Merge de itens nomeados recebeu argumento que não é uma lista."""


class ConfigFileNotFoundError(ConfigError):
    """Arquivo de configuração solicitado ao loader não existe."""


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando a extensão do arquivo não é suportada
    pelo loader.

    Formatos suportados:
        - JSON (.json)
        - YAML (.yaml, .yml)

    Overrides `.js` continuam fazendo parte da convenção de nomes e
    são descobertos normalmente, mas não podem ser avaliados por um
    loader Python; carregá-los resulta neste erro.
    """


class InvalidConfigRootTypeError(ConfigError):
    """Conteúdo raiz de um arquivo de configuração não é um mapa chave-valor."""
