"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) in the ``instrctl.plugins`` group.
INVARIANT: Plugin failures are warnings, never errors.
"""

from instrctl.plugins.hookspecs import hookimpl
from instrctl.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
