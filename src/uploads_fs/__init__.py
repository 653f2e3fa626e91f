"""Routed filesystem over a remote files API and local disk."""

__version__ = "0.1.0"
