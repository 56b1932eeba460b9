"""Command-line interface for fieldrules."""
