"""System command handlers."""
