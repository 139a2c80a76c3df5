"""Discovery handlers."""
