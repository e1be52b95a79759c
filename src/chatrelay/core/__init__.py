"""Relay engine: reaction toggling, publishing and request handlers."""
