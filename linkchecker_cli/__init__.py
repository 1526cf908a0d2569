"""Command-line interface for linkchecker."""
