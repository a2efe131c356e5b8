# src/csvline/plugins/hookspecs.py
"""pluggy hook specifications for csvline plugins.

Plugins implement these hooks to register themselves with the framework.
The plugin manager calls these hooks during discovery.

Usage (implementing a plugin):
    from csvline.plugins.hookspecs import hookimpl

    class MyPlugin:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def csvline_get_processors(self):
            return [MyProcessor]
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from csvline.plugins.base import BaseProcessor

# Project name for pluggy
PROJECT_NAME = "csvline"

# Hook specification marker
hookspec = pluggy.HookspecMarker(PROJECT_NAME)

# Hook implementation marker (for plugins to use)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class CsvlineProcessorSpec:
    """Hook specifications for processor plugins."""

    @hookspec
    def csvline_get_processors(self) -> list[type["BaseProcessor"]]:  # type: ignore[empty-body]
        """Return processor plugin classes.

        Returns:
            List of processor classes (not instances)
        """
