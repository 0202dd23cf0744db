"""Plugin discovery, rule collection, and hook dispatch.

Discovery: setuptools entry points in the ``instrctl.plugins`` group via
pluggy, plus direct registration (tests, embedding applications).
"""

from __future__ import annotations

import inspect
import logging

import pluggy

from instrctl.domain.rules import RULE_REGISTRY, SEVERITY_RANK, Rule
from instrctl.plugins.hookspecs import PROJECT_NAME, InstrctlHookSpec

ENTRY_POINT_GROUP = "instrctl.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(InstrctlHookSpec)

    def discover_and_load(self) -> list[str]:
        """Load entry-point plugins and return the names of all registered plugins.

        A plugin that fails to import is logged and skipped.
        """
        try:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        except Exception:
            logger.warning("Failed to load %s entry points", ENTRY_POINT_GROUP, exc_info=True)
        self._normalize_plugin_instances()
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay for dispatching events."""
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def collect_rules(self) -> tuple[list[Rule], list[str]]:
        """Gather plugin-provided rules.

        Returns ``(rules, warnings)``.  Rules that are not :class:`Rule`
        instances, or whose code collides with a built-in or an earlier
        plugin rule, are skipped with a warning.
        """
        rules: list[Rule] = []
        warnings: list[str] = []
        seen: set[str] = set(RULE_REGISTRY)

        for plugin in self._pm.get_plugins():
            hook = getattr(plugin, "register_rules", None)
            if hook is None:
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            try:
                provided = hook()
            except Exception:
                logger.warning("Plugin %s failed in register_rules", plugin_name, exc_info=True)
                warnings.append(f"Plugin {plugin_name} failed to register rules")
                continue

            for candidate in provided or []:
                if not isinstance(candidate, Rule):
                    warnings.append(f"Plugin {plugin_name} returned a non-Rule object")
                    continue
                if candidate.severity not in SEVERITY_RANK:
                    warnings.append(
                        f"Plugin {plugin_name} rule {candidate.code} has unknown severity"
                        f" {candidate.severity!r}"
                    )
                    continue
                if candidate.code in seen:
                    warnings.append(
                        f"Plugin {plugin_name} rule {candidate.code} duplicates an existing code"
                    )
                    continue
                seen.add(candidate.code)
                rules.append(candidate)
                logger.debug("Plugin %s contributed rule %s", plugin_name, candidate.code)

        return rules, warnings

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly, which
        leaves ``self`` unbound when hooks are called.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s", plugin_name, exc_info=True
                )
                continue
            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)
