# tests/core/config/test_interpolation.py
"""
Testes da interpolação de placeholders `${nome}`.

Os testes asseguram que:
- variáveis de ambiente têm prioridade quando habilitadas
- o runtime é consultado como segunda fonte
- placeholders não resolvidos viram None com exatamente um warning
- strings sem placeholder (ou com placeholder no meio) não mudam
- a recursão respeita listas, dicts e objetos não "plain"
- a interpolação é pura e idempotente

Decisões arquiteturais:
    - O ambiente é sempre injetado como dicionário (`environ`)
"""

import re
from datetime import datetime

from atlas_boot.core.config.interpolation import DYNAMIC_CONFIG_PARAM, interpolate, resolve_placeholder
from atlas_boot.core.diagnostics import UNRESOLVED_PLACEHOLDER
from atlas_boot.core.runtime import AppState


def test_env_var_wins_when_enabled(sink):
    state = AppState()
    state.set("PORT", 8080)
    out = interpolate("${PORT}", state, use_env_vars=True, environ={"PORT": "3000"}, sink=sink)
    assert out == "3000"
    assert sink.records == []


def test_runtime_fallback_without_env_var(sink):
    state = AppState()
    state.set("PORT", 8080)
    out = interpolate("${PORT}", state, use_env_vars=True, environ={}, sink=sink)
    assert out == 8080
    assert sink.records == []


def test_env_ignored_when_disabled(sink):
    state = AppState()
    state.set("PORT", 8080)
    out = interpolate("${PORT}", state, use_env_vars=False, environ={"PORT": "3000"}, sink=sink)
    assert out == 8080


def test_unresolved_yields_none_and_one_warning(sink):
    out = interpolate("${PORT}", AppState(), use_env_vars=True, environ={}, sink=sink)
    assert out is None
    assert sink.codes == [UNRESOLVED_PLACEHOLDER]
    message = sink.records[0][0]
    assert "${PORT}" in message
    assert '"PORT"' in message


def test_missing_runtime_is_tolerated(sink):
    assert interpolate("${x}", None, environ={}, sink=sink) is None
    assert sink.codes == [UNRESOLVED_PLACEHOLDER]


def test_plain_string_unchanged(sink):
    assert interpolate("plain-string", AppState(), environ={}, sink=sink) == "plain-string"
    assert sink.records == []


def test_placeholder_must_end_the_string(sink, app_state):
    assert interpolate("${port}/suffix", app_state, environ={}, sink=sink) == "${port}/suffix"
    assert interpolate("http://host:${port}", app_state, environ={}, sink=sink) == 8080
    assert sink.records == []


def test_pattern_is_anchored_at_true_end():
    assert DYNAMIC_CONFIG_PARAM.search("${port}\n") is None
    assert DYNAMIC_CONFIG_PARAM.search("${port}").group(1) == "port"
    assert DYNAMIC_CONFIG_PARAM.search("${pórt}") is None


def test_recurses_into_nested_structures(app_state, sink):
    config = {
        "rest": {"root": "${restApiRoot}", "port": "${port}"},
        "hosts": ["${port}", "static", {"api": "${restApiRoot}"}],
        "flags": {"debug": False, "retries": 3, "nothing": None, "empty": {}},
    }
    out = interpolate(config, app_state, environ={}, sink=sink)
    assert out == {
        "rest": {"root": "/api", "port": 8080},
        "hosts": [8080, "static", {"api": "/api"}],
        "flags": {"debug": False, "retries": 3, "nothing": None, "empty": {}},
    }
    assert sink.records == []


def test_top_level_list(app_state, sink):
    assert interpolate(["${port}", 1, None], app_state, environ={}, sink=sink) == [8080, 1, None]


def test_non_plain_objects_untouched(app_state, sink):
    when = datetime(2026, 1, 1)
    pattern = re.compile(r"${port}")
    out = interpolate({"when": when, "pattern": pattern}, app_state, environ={}, sink=sink)
    assert out["when"] is when
    assert out["pattern"] is pattern
    assert interpolate(when, app_state, environ={}, sink=sink) is when


def test_input_not_mutated(app_state, sink):
    config = {"a": {"b": "${port}"}, "c": ["${port}"]}
    interpolate(config, app_state, environ={}, sink=sink)
    assert config == {"a": {"b": "${port}"}, "c": ["${port}"]}


def test_idempotent_on_resolved_value(app_state, sink):
    config = {"a": {"b": "${port}"}, "c": ["${restApiRoot}", 2]}
    once = interpolate(config, app_state, environ={}, sink=sink)
    twice = interpolate(once, app_state, environ={}, sink=sink)
    assert twice == once
    assert sink.records == []


def test_unresolved_fields_do_not_stop_others(app_state, sink):
    out = interpolate({"a": "${missing}", "b": "${port}"}, app_state, environ={}, sink=sink)
    assert out == {"a": None, "b": 8080}
    assert len(sink.records) == 1


def test_resolve_placeholder_reads_process_env_by_default(monkeypatch, sink):
    monkeypatch.setenv("ATLAS_BOOT_TEST_VAR", "from-env")
    assert resolve_placeholder("${ATLAS_BOOT_TEST_VAR}", None, use_env_vars=True, sink=sink) == "from-env"
