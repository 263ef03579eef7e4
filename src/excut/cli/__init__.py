"""Command line interface for excut."""
