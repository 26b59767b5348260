"""Configuration-driven mock services for a durable-execution host."""

__version__ = "0.1.0"
