"""Command line interface groups."""
