# src/atlas_boot/core/__init__.py
"""
Core do Atlas Boot.

Componentes principais:
    - config      → pipeline de resolução de configuração por artefato
    - plugin      → contrato de plugin (load / compile / interpolação)
    - runtime     → acessor `get(nome)` da aplicação hospedeira
    - diagnostics → warnings não fatais (logging ou contexto de boot)

Princípios fundamentais:
    - Resolução síncrona e determinística
    - Erros estruturais são fatais; ausências são warnings
    - Nenhum estado global compartilhado entre boots
"""
