"""Core infrastructure: configuration loading and logging."""
