"""Command line interface for columnist."""
