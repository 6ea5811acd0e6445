"""Command-line interface for charforge."""
