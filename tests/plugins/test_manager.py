"""Tests for PluginManager — registration, rule collection, and hook relay."""

from __future__ import annotations

from instrctl.domain.rules import SEVERITY_ERROR, SEVERITY_WARNING, Rule
from instrctl.plugins import PluginManager, hookimpl


def _noop(document, context):  # type: ignore[no-untyped-def]
    return []


class _DummyPlugin:
    """Minimal plugin for registration tests."""

    @hookimpl
    def post_check(self, files_checked: int, issues_found: int, error_count: int) -> None:
        pass


class _RulePlugin:
    @hookimpl
    def register_rules(self) -> list[Rule]:
        return [Rule("ACME001", "acme-heading", SEVERITY_WARNING, "content", _noop)]


class _BadRulesPlugin:
    @hookimpl
    def register_rules(self) -> list[object]:
        return [
            "not a rule",
            Rule("IN001", "shadow-builtin", SEVERITY_ERROR, "structure", _noop),
            Rule("ACME002", "loud-rule", "fatal", "content", _noop),
        ]


class _FailingRulesPlugin:
    @hookimpl
    def register_rules(self) -> list[Rule]:
        raise RuntimeError("boom")


class TestPluginManager:
    def test_hook_relay_accessible(self) -> None:
        pm = PluginManager()
        assert hasattr(pm.hook, "register_rules")
        assert hasattr(pm.hook, "post_check")

    def test_register_plugin(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_DummyPlugin(), name="dummy")
        assert "dummy" in pm.list_plugin_names()

    def test_register_plugin_default_name(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_DummyPlugin())
        assert "_DummyPlugin" in pm.list_plugin_names()

    def test_unregister_plugin(self) -> None:
        pm = PluginManager()
        plugin = _DummyPlugin()
        pm.register_plugin(plugin, name="dummy")
        pm.unregister(plugin)
        assert "dummy" not in pm.list_plugin_names()

    def test_discover_without_entry_points(self) -> None:
        assert PluginManager().discover_and_load() == []

    def test_post_check_relay(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_DummyPlugin())
        pm.hook.post_check(files_checked=1, issues_found=0, error_count=0)


class TestCollectRules:
    def test_collects_plugin_rules(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_RulePlugin())
        rules, warnings = pm.collect_rules()
        assert [r.code for r in rules] == ["ACME001"]
        assert warnings == []

    def test_rejects_invalid_rules(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_BadRulesPlugin(), name="bad")
        rules, warnings = pm.collect_rules()
        assert rules == []
        assert warnings == [
            "Plugin bad returned a non-Rule object",
            "Plugin bad rule IN001 duplicates an existing code",
            "Plugin bad rule ACME002 has unknown severity 'fatal'",
        ]

    def test_duplicate_between_plugins(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_RulePlugin(), name="first")
        pm.register_plugin(_RulePlugin(), name="second")
        rules, warnings = pm.collect_rules()
        assert len(rules) == 1
        assert len(warnings) == 1

    def test_failing_plugin_is_warning(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_FailingRulesPlugin(), name="failing")
        rules, warnings = pm.collect_rules()
        assert rules == []
        assert warnings == ["Plugin failing failed to register rules"]
