# src/csvline/plugins/manager.py
"""Plugin manager for discovery, registration, and construction.

Uses pluggy for hook-based plugin registration.
"""

from dataclasses import dataclass
from typing import Any

import pluggy

from csvline.contracts.enums import Determinism
from csvline.plugins.base import BaseProcessor
from csvline.plugins.hookspecs import PROJECT_NAME, CsvlineProcessorSpec
from csvline.telemetry.protocols import DiagnosticObserver


@dataclass(frozen=True)
class PluginSpec:
    """Registration record for a processor plugin."""

    name: str
    version: str
    determinism: Determinism
    description: str

    @classmethod
    def from_plugin(cls, plugin_cls: type[BaseProcessor]) -> "PluginSpec":
        from csvline.plugins.discovery import get_plugin_description

        return cls(
            name=plugin_cls.name,
            version=plugin_cls.plugin_version,
            determinism=plugin_cls.determinism,
            description=get_plugin_description(plugin_cls),
        )


class PluginManager:
    """Manages plugin discovery, registration, and lookup.

    Usage:
        manager = PluginManager()
        manager.register_builtin_plugins()

        processor = manager.create_processor("csv", {"source": "message"})
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(CsvlineProcessorSpec)

        # Map name to plugin class for duplicate detection
        self._processors: dict[str, type[BaseProcessor]] = {}

    def register_builtin_plugins(self) -> None:
        """Discover and register all built-in processors.

        Call this once at startup to make built-in plugins discoverable.
        """
        from csvline.plugins.discovery import create_dynamic_hookimpl, discover_all_processors

        self.register(create_dynamic_hookimpl(discover_all_processors(), "csvline_get_processors"))

    def register(self, plugin: Any) -> None:
        """Register a plugin.

        Args:
            plugin: Plugin instance implementing hook methods

        Raises:
            ValueError: If a processor with the same name is already registered
        """
        self._pm.register(plugin)
        try:
            self._refresh_caches()
        except ValueError:
            self._pm.unregister(plugin)
            raise

    def _refresh_caches(self) -> None:
        new_processors: dict[str, type[BaseProcessor]] = {}

        for processors in self._pm.hook.csvline_get_processors():
            for cls in processors:
                name = cls.name
                if name in new_processors:
                    raise ValueError(f"Duplicate processor plugin name: '{name}'. Already registered by {new_processors[name].__name__}")
                new_processors[name] = cls

        self._processors = new_processors

    # === Getters ===

    def get_processors(self) -> list[type[BaseProcessor]]:
        """Get all registered processor plugins."""
        return list(self._processors.values())

    def get_processor_by_name(self, name: str) -> type[BaseProcessor] | None:
        """Get processor plugin by name."""
        return self._processors.get(name)

    def get_plugin_specs(self) -> list[PluginSpec]:
        """Get registration metadata for every registered processor."""
        return [PluginSpec.from_plugin(cls) for cls in self._processors.values()]

    def create_processor(
        self,
        name: str,
        config: dict[str, Any],
        *,
        observer: DiagnosticObserver | None = None,
    ) -> BaseProcessor:
        """Instantiate a registered processor.

        Raises:
            ValueError: If no processor with that name is registered
            PluginConfigError: If the processor rejects the configuration
        """
        plugin_cls = self._processors.get(name)
        if plugin_cls is None:
            available = ", ".join(sorted(self._processors)) or "none"
            raise ValueError(f"Unknown processor plugin: '{name}'. Available: {available}")
        return plugin_cls(config, observer=observer)
