# src/atlas_boot/core/config/__init__.py
"""
Pipeline de resolução de configuração do Atlas Boot.

Fluxo por artefato:

    discovery → loader → merge → (compile) → interpolation

Responsabilidades do pacote:
    - Descoberta de arquivos por convenção (master, local, ambiente)
    - Carregamento de JSON/YAML com proveniência
    - Merge determinístico com regras estritas de compatibilidade de tipos
    - Merge de coleções nomeadas por chave (upsert)
    - Interpolação de placeholders `${nome}` contra ambiente e runtime
    - Hash canônico da configuração resolvida

Invariantes:
    - O shape da configuração final é herdado do master
    - Conflitos de tipo abortam a resolução sem merge parcial
"""
