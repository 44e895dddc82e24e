"""Command-line interface for Timestampr."""
