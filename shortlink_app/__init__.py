"""Shortlink: a URL shortener service backed by a key-value store."""

__version__ = "1.0.0"
