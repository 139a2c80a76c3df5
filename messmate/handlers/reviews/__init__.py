"""Review handlers."""
