"""Command-line interface for orrery."""
