"""Plugin system: base classes, configuration, registration, and built-in processors."""

from csvline.plugins.base import BaseProcessor
from csvline.plugins.config_base import PluginConfig, PluginConfigError
from csvline.plugins.hookspecs import hookimpl, hookspec
from csvline.plugins.manager import PluginManager, PluginSpec

__all__ = [
    "BaseProcessor",
    "PluginConfig",
    "PluginConfigError",
    "PluginManager",
    "PluginSpec",
    "hookimpl",
    "hookspec",
]
