"""Connectors: ways a person talks to the app (terminal console)."""
