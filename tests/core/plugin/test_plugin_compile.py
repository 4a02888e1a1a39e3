# tests/core/plugin/test_plugin_compile.py
"""
Testes da fase `compile` de plugins e de `compile_instructions`.

Os testes asseguram que:
- sem transformação, a configuração registrada é a instrução
- `build_instructions` recebe contexto, root_dir e configuração
- `appId` é semeado apenas na criação do mapa de instruções
- exatamente um valor é armazenado por artefato
"""

from atlas_boot.core.plugin import BootContext, PluginBase, PluginOptions, compile_instructions


class _ModelsPlugin(PluginBase):
    def build_instructions(self, ctx, root_dir, config):
        return [
            {"name": name, "definition": definition, "sourceDir": root_dir}
            for name, definition in sorted(config.items())
        ]


def test_identity_when_no_transform():
    ctx = BootContext(configurations={"datasources": {"db": {"connector": "memory"}}})
    PluginBase(PluginOptions(), "datasources").compile(ctx)
    assert ctx.instructions == {"datasources": {"db": {"connector": "memory"}}}


def test_build_instructions_transform():
    ctx = BootContext(configurations={"models": {"User": {"public": True}}})
    _ModelsPlugin(PluginOptions(root_dir="/srv/app"), "models").compile(ctx)
    assert ctx.instructions["models"] == [
        {"name": "User", "definition": {"public": True}, "sourceDir": "/srv/app"}
    ]


def test_transform_receives_empty_dict_when_unloaded():
    received = {}

    class _Plugin(PluginBase):
        def build_instructions(self, ctx, root_dir, config):
            received["config"] = config
            return "built"

    ctx = BootContext()
    _Plugin(PluginOptions(), "components").compile(ctx)
    assert received["config"] == {}
    assert ctx.instructions["components"] == "built"


def test_app_id_seeded_on_first_compile():
    ctx = BootContext(configurations={"a": {"x": 1}, "b": {"y": 2}})
    PluginBase(PluginOptions(app_id="my-app"), "a").compile(ctx)
    PluginBase(PluginOptions(app_id="other"), "b").compile(ctx)
    assert ctx.instructions == {"appId": "my-app", "a": {"x": 1}, "b": {"y": 2}}


def test_no_app_id_when_not_configured():
    ctx = BootContext(configurations={"a": {}})
    PluginBase(PluginOptions(), "a").compile(ctx)
    assert "appId" not in ctx.instructions


def test_compile_instructions_function():
    results = {}
    out = compile_instructions(
        "middleware",
        {"routes": {}},
        "/srv",
        results,
        transform=lambda config, root_dir: {"phases": list(config), "root": root_dir},
        app_id="svc",
    )
    assert out == {"phases": ["routes"], "root": "/srv"}
    assert results == {"appId": "svc", "middleware": out}
