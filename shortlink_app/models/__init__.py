"""
Domain models.

Links live in the key-value store as hashes; these models are the typed
view the services work with.
"""

from .link import Link, normalize_url, validate_slug

__all__ = ["Link", "normalize_url", "validate_slug"]
