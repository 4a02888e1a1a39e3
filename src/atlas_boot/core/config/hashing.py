# src/atlas_boot/core/config/hashing.py
"""
Hash canônico de configuração resolvida.

O hash identifica estruturalmente a configuração mesclada de um artefato
e acompanha o evento de carregamento registrado no `BootContext`,
permitindo comparar boots distintos sem armazenar a configuração.

Política de hashing:
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - SHA-256 (64 caracteres hexadecimais)
    - Valores não serializáveis em JSON (ex.: datas vindas de YAML)
      entram pela sua representação `str`
"""

import hashlib
import json
from typing import Any


def compute_config_hash(config: Any) -> str:
    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )
    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
