"""Built-in processor plugins.

Plugins are accessed via PluginManager, not direct imports:
    manager = PluginManager()
    manager.register_builtin_plugins()
    processor = manager.create_processor("csv", {"source": "message"})
"""
