"""Core components: crypto primitives, configuration, errors and logging."""
