"""Persistence adapters for the hosted data store."""
