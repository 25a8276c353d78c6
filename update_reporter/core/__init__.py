"""Core collection pipeline for update-reporter."""
