"""Command line interface for update-reporter."""
