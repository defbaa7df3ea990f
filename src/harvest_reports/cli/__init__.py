"""Command-line interface for Harvest Reports."""
