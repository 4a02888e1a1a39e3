# src/atlas_boot/core/config/merge.py
"""
Merge determinístico de múltiplas fontes de configuração.

Este módulo implementa a política de merge usada para combinar o master
de um artefato com seus overrides (local e de ambiente).

Modelo de valores (variante etiquetada):
    - NULL     → None
    - SCALAR   → str, int, float, bool e demais valores atômicos
    - SEQUENCE → list / tuple
    - MAPPING  → dict e demais Mappings

Compatibilidade (alvo ← fonte):
    - NULL     ← qualquer variante
    - SEQUENCE ← SEQUENCE
    - MAPPING  ← MAPPING, SEQUENCE ou NULL
    - SCALAR   ← SCALAR

Política de merge:
    - chaves da fonte dirigem a iteração; chaves só do alvo são preservadas
    - MAPPING ← não-NULL → merge recursivo por chave
    - SEQUENCE ← SEQUENCE → merge posicional por índice; o alvo é
      redimensionado para o tamanho da fonte (truncado ou estendido)
    - demais casos compatíveis → sobrescrita direta
    - conflito de variantes → `ConfigMergeError` (fail-fast)

Atenção: o merge posicional de listas descarta, sem aviso, elementos
finais do alvo quando a fonte é menor. Para coleções nomeadas use
`merge_named_items`.

Invariantes:
    - O shape do resultado é herdado do primeiro objeto da sequência
    - As fontes nunca são mutadas; valores atribuídos ao alvo são cópias
"""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .errors import ConfigMergeError, InvalidNamedItemsError
from .source import ConfigSource


class ValueKind(str, Enum):
    NULL = "null"
    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


_COMPATIBLE: Dict[ValueKind, FrozenSet[ValueKind]] = {
    ValueKind.NULL: frozenset(ValueKind),
    ValueKind.SEQUENCE: frozenset({ValueKind.SEQUENCE}),
    ValueKind.MAPPING: frozenset({ValueKind.MAPPING, ValueKind.SEQUENCE, ValueKind.NULL}),
    ValueKind.SCALAR: frozenset({ValueKind.SCALAR}),
}


def kind_of(value: Any) -> ValueKind:
    """
    Classifica um valor JSON-like em sua variante etiquetada.

    A classificação é a base de toda decisão de merge: compatibilidade,
    recursão e sobrescrita dependem apenas da variante, nunca do tipo
    concreto.

    Regras:
        - `None`            → NULL
        - `list` / `tuple`  → SEQUENCE
        - qualquer Mapping  → MAPPING
        - demais valores    → SCALAR (str, números, bool, objetos atômicos)

    Args:
        value (Any): Valor a classificar.

    Returns:
        ValueKind: Variante do valor.

    Limites explícitos:
        - `str` e `bytes` são SCALAR, embora sejam sequências em Python
        - Não inspeciona o conteúdo de coleções
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    return ValueKind.SCALAR


def has_compatible_type(target: Any, source: Any) -> bool:
    """
    Indica se `source` pode ser mesclado sobre `target`.

    A decisão consulta a tabela de compatibilidade entre variantes
    (alvo ← fonte):

        - NULL     ← qualquer variante
        - SEQUENCE ← SEQUENCE
        - MAPPING  ← MAPPING, SEQUENCE ou NULL
        - SCALAR   ← SCALAR

    Decisões arquiteturais:
        - Um mapa aceita `None` (que o substitui) e listas (mescladas
          por índice, com chaves "0", "1", ...)
        - Escalares e listas rejeitam `None`

    Args:
        target (Any): Valor atual no acumulador.
        source (Any): Valor vindo da fonte de maior precedência.

    Returns:
        bool: True se o merge é permitido.
    """
    return kind_of(source) in _COMPATIBLE[kind_of(target)]


def _type_name(value: Any) -> str:
    return type(value).__name__


def _iter_entries(source: Any) -> Iterator[Tuple[Any, Any]]:
    # listas mescladas sobre um mapa contribuem com chaves "0", "1", ...
    if kind_of(source) is ValueKind.SEQUENCE:
        return ((str(ix), item) for ix, item in enumerate(source))
    return iter(source.items())


def _merge_single(container: Any, source_value: Any, key: Any, full_key: str) -> None:
    if isinstance(container, Mapping):
        orig_value = container.get(key)
    else:
        orig_value = container[key]

    if not has_compatible_type(orig_value, source_value):
        raise ConfigMergeError(full_key, _type_name(orig_value), _type_name(source_value))

    orig_kind = kind_of(orig_value)

    if orig_kind is ValueKind.SEQUENCE:
        if isinstance(orig_value, tuple):
            orig_value = list(orig_value)
            container[key] = orig_value
        merge_array(orig_value, source_value, full_key)
        return

    if orig_kind is ValueKind.MAPPING and source_value is not None:
        merge_into(orig_value, source_value, full_key)
        return

    container[key] = deepcopy(source_value)


def merge_into(target: Any, source: Any, key_prefix: Optional[str] = None) -> Any:
    """
    Mescla as propriedades de `source` em `target` (mutação in-place).

    Combinações aceitas na raiz:
        - mapa  ← mapa  → merge recursivo por chave
        - mapa  ← lista → merge por chaves "0", "1", ...
        - lista ← lista → merge posicional (`merge_array`)

    Qualquer outra combinação é um conflito de tipos.

    Args:
        target (Any): Acumulador (mapa ou lista) que recebe o merge.
        source (Any): Mapa ou lista a ser mesclado.
        key_prefix (Optional[str]): Caminho do alvo, usado apenas em diagnósticos.

    Returns:
        Any: O próprio `target`; uma lista nova quando `target` é tupla.

    Raises:
        ConfigMergeError: Se a raiz ou alguma opção tiver tipos incompatíveis.
    """
    target_kind = kind_of(target)
    source_kind = kind_of(source)

    if target_kind is ValueKind.SEQUENCE and source_kind is ValueKind.SEQUENCE:
        if isinstance(target, tuple):
            target = list(target)
        return merge_array(target, source, key_prefix)

    if target_kind is not ValueKind.MAPPING or source_kind not in (ValueKind.MAPPING, ValueKind.SEQUENCE):
        raise ConfigMergeError(key_prefix or "<raiz>", _type_name(target), _type_name(source))

    for key, value in _iter_entries(source):
        full_key = f"{key_prefix}.{key}" if key_prefix else str(key)
        _merge_single(target, value, key, full_key)
    return target


def merge_array(target: List[Any], source: Sequence[Any], key_prefix: Optional[str] = None) -> List[Any]:
    """
    Merge posicional de listas, índice a índice.

    `target` assume o tamanho de `source`: elementos finais excedentes
    são descartados e posições faltantes são preenchidas com `None`
    antes do merge. Cada índice segue as mesmas regras de `merge_into`
    (recursão em mapas e listas, sobrescrita nos demais casos).

    Args:
        target (List[Any]): Lista mutável que recebe o merge.
        source (Sequence[Any]): Lista de maior precedência.
        key_prefix (Optional[str]): Caminho da lista, usado em diagnósticos
            como `prefixo[ix]`.

    Returns:
        List[Any]: O próprio `target`.

    Raises:
        ConfigMergeError: Se algum índice tiver tipos incompatíveis.

    Limites explícitos:
        - Não casa elementos por identidade; use `merge_named_items`
    """
    size = len(source)
    del target[size:]
    target.extend([None] * (size - len(target)))

    for ix in range(size):
        _merge_single(target, source[ix], ix, f"{key_prefix or ''}[{ix}]")
    return target


SourceLike = Union[ConfigSource, Dict[str, Any]]


def _unpack(source: SourceLike) -> Tuple[Any, Optional[str]]:
    if isinstance(source, ConfigSource):
        return source.data, source.filename
    return source, None


def merge_all(sources: Iterable[SourceLike], *, initial: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Combina uma sequência ordenada de configurações em um único objeto.

    A combinação é um fold da esquerda para a direita: cada fonte tem
    precedência sobre as anteriores.

    Política de acumulador:
        - `initial=None`: o acumulador é uma cópia profunda da primeira
          fonte, que portanto nunca é mutada
        - `initial` informado: todas as fontes são mescladas nele, e o
          próprio `initial` é devolvido

    Args:
        sources (Iterable[ConfigSource | dict]): Fontes em ordem de
            precedência crescente (master, local, env).
        initial (Optional[dict]): Acumulador de propriedade do chamador.

    Returns:
        Dict[str, Any]: Configuração mesclada (`{}` para sequência vazia
        sem `initial`).

    Raises:
        ConfigMergeError: No primeiro conflito de tipos; a mensagem
        inclui o caminho da opção e o arquivo de origem.
    """
    pending = list(sources)

    if initial is not None:
        result = initial
    elif pending:
        result = deepcopy(_unpack(pending.pop(0))[0])
    else:
        return {}

    for source in pending:
        data, origin = _unpack(source)
        try:
            result = merge_into(result, data)
        except ConfigMergeError as exc:
            if origin is None or exc.source is not None:
                raise
            raise ConfigMergeError(
                exc.key_path, exc.target_type, exc.source_type, source=origin
            ) from exc

    return result


def _same_name(a: Any, b: Any) -> bool:
    # 1, 1.0 e True não são o mesmo nome
    return type(a) is type(b) and a == b


def merge_named_items(
    items_a: Sequence[Any],
    items_b: Sequence[Any],
    key: str = "name",
) -> List[Any]:
    """
    Merge de coleções nomeadas com semântica de upsert por chave.

    Cada item de `items_b` cujo `key` já exista no resultado acumulado é
    mesclado (regras de mapa) sobre o item correspondente; os demais são
    anexados ao final, na ordem em que aparecem.

    Exemplo:
        merge_named_items([{"name": "x", "v": 1}],
                          [{"name": "x", "v": 2}, {"name": "y", "v": 3}])
        → [{"name": "x", "v": 2}, {"name": "y", "v": 3}]

    Itens sem valor para `key` (ausente ou vazio) são sempre anexados.
    Nomes só casam quando têm o mesmo tipo (`1` não casa com `"1"`,
    `1.0` ou `True`).
    Nenhuma das listas de entrada é mutada.

    Raises:
        InvalidNamedItemsError: Se algum argumento não for list/tuple.
        ConfigMergeError: Se itens de mesmo nome tiverem opções incompatíveis.
    """
    for arg in (items_a, items_b):
        if not isinstance(arg, (list, tuple)):
            raise InvalidNamedItemsError(f"Lista inválida: {arg!r}")

    result = deepcopy(list(items_a))
    for item in items_b:
        item_key = item.get(key) if isinstance(item, Mapping) else None
        match = None
        if item_key:
            match = next(
                (r for r in result if isinstance(r, Mapping) and _same_name(r.get(key), item_key)),
                None,
            )
        if match is not None:
            merge_into(match, item)
        else:
            result.append(deepcopy(item))
    return result
