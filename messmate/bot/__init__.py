"""Telegram bot application wiring."""
