"""Dynamic plugin discovery by package scanning.

Scans plugin packages for classes that:
1. Inherit from BaseProcessor
2. Have a non-empty `name` class attribute
3. Are not abstract
"""

import importlib
import inspect
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# Files that should never be scanned for plugins
EXCLUDED_FILES: frozenset[str] = frozenset(
    {
        "__init__.py",
        "hookimpl.py",
    }
)

# Packages (relative to csvline.plugins) scanned for processors.
# Non-recursive: subpackages must be listed explicitly.
PLUGIN_PACKAGES: tuple[str, ...] = ("processors",)


def discover_plugins_in_package(package: str, base_class: type) -> list[type]:
    """Discover plugin classes in a package.

    Imports every .py module of the package (non-recursive) and returns the
    classes defined there that inherit from base_class and have a `name`.

    Args:
        package: Dotted package name, e.g. "csvline.plugins.processors"
        base_class: Base class that plugins must inherit from

    Returns:
        List of discovered plugin classes, in file-name order
    """
    pkg = importlib.import_module(package)
    directory = Path(pkg.__file__).parent if pkg.__file__ else None
    discovered: list[type] = []

    if directory is None or not directory.exists():
        logger.warning("Plugin package has no directory: %s", package)
        return discovered

    for py_file in sorted(directory.glob("*.py")):
        if py_file.name in EXCLUDED_FILES:
            continue
        # Plugin code is system-owned: import errors are bugs and propagate.
        module = importlib.import_module(f"{package}.{py_file.stem}")
        discovered.extend(_plugin_classes_in_module(module, base_class))

    return discovered


def _plugin_classes_in_module(module: Any, base_class: type) -> list[type]:
    discovered: list[type] = []
    for name, obj in inspect.getmembers(module, inspect.isclass):
        # Must be defined in this module (not imported)
        if obj.__module__ != module.__name__:
            continue

        if not issubclass(obj, base_class) or obj is base_class:
            continue

        if inspect.isabstract(obj):
            continue

        plugin_name = getattr(obj, "name", None)
        if not plugin_name:
            logger.warning(
                "Class %s in %s inherits from %s but has no/empty 'name' attribute - skipping",
                name,
                module.__name__,
                base_class.__name__,
            )
            continue

        discovered.append(obj)

    return discovered


def discover_all_processors() -> list[type]:
    """Discover all built-in processors.

    Raises:
        ValueError: If two built-in processors share a name
    """
    from csvline.plugins.base import BaseProcessor

    all_discovered: list[type] = []
    seen: dict[str, type] = {}

    for package in PLUGIN_PACKAGES:
        for cls in discover_plugins_in_package(f"csvline.plugins.{package}", BaseProcessor):
            cls_name: str = cls.name  # type: ignore[attr-defined]
            if cls_name in seen:
                raise ValueError(
                    f"Duplicate processor plugin name '{cls_name}': "
                    f"found in both {seen[cls_name].__module__} and {cls.__module__}. "
                    f"Plugin names must be unique."
                )
            seen[cls_name] = cls
            all_discovered.append(cls)

    return all_discovered


def get_plugin_description(plugin_cls: type) -> str:
    """Return the first non-empty docstring line, or '<name> plugin'."""
    if plugin_cls.__doc__:
        for line in plugin_cls.__doc__.strip().split("\n"):
            cleaned = line.strip()
            if cleaned:
                return cleaned

    name = getattr(plugin_cls, "name", plugin_cls.__name__)
    return f"{name} plugin"


def create_dynamic_hookimpl(
    plugin_classes: list[type],
    hook_method_name: str,
) -> object:
    """Create a pluggy hookimpl object for plugin registration.

    Dynamically generates a class with the given hook method, decorated with
    @hookimpl, returning the provided plugin classes.

    Args:
        plugin_classes: List of plugin classes to register
        hook_method_name: Name of the hook method (e.g. "csvline_get_processors")

    Returns:
        Object instance with the decorated hook method
    """
    from csvline.plugins.hookspecs import hookimpl

    class DynamicHookImpl:
        """Dynamically generated hook implementer."""

        pass

    def hook_method(self: Any) -> list[type]:
        return plugin_classes

    setattr(DynamicHookImpl, hook_method_name, hookimpl(hook_method))

    return DynamicHookImpl()
