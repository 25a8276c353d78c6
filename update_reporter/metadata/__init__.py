"""Host metadata collection."""
