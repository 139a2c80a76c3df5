"""MessMate: meal-subscription discovery for students."""

__version__ = "0.1.0"
