"""Personal todos with text-to-tasks decomposition through a language model."""

__version__ = "0.1.0"
