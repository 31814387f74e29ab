"""Command-line entrypoints and the composition root."""
