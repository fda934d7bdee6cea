"""Command line interface for cjk-spacing."""
