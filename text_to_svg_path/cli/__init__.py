"""CLI for text-to-svg-path."""
