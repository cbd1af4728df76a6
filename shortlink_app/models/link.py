"""
Link model and the rules a slug / destination pair must satisfy.
"""

import re
from typing import Dict

from pydantic import BaseModel, Field

from shortlink_app.exceptions import InvalidLinkError

SLUG_MIN_LENGTH = 3
SLUG_MAX_LENGTH = 64
URL_MIN_LENGTH = 5

SLUG_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
SCHEME_PATTERN = re.compile(r"^https?://", re.IGNORECASE)

# Slugs that would shadow application routes
RESERVED_SLUGS = frozenset({
    "api",
    "login",
    "logout",
    "dashboard",
    "create-account",
    "qr",
    "health",
    "static",
    "docs",
    "redoc",
    "openapi.json",
})


def validate_slug(slug: str) -> str:
    """Return the slug unchanged or raise InvalidLinkError."""
    if len(slug) < SLUG_MIN_LENGTH:
        raise InvalidLinkError(f"Slug must be at least {SLUG_MIN_LENGTH} characters")
    if len(slug) > SLUG_MAX_LENGTH:
        raise InvalidLinkError(f"Slug must be at most {SLUG_MAX_LENGTH} characters")
    if not SLUG_PATTERN.match(slug):
        raise InvalidLinkError(
            "Slug may only contain letters, digits, '-' and '_'"
        )
    if slug.lower() in RESERVED_SLUGS:
        raise InvalidLinkError(f"Slug {slug} is reserved")
    return slug


def normalize_url(url: str) -> str:
    """
    Validate a destination and return it with a scheme.

    The checks apply to the part after an optional http(s):// prefix.
    URLs given without a scheme are stored as https.
    """
    url = url.strip()
    match = SCHEME_PATTERN.match(url)
    bare = url[match.end():] if match else url

    if any(char.isspace() for char in bare):
        raise InvalidLinkError("URL cannot contain spaces")
    if "." not in bare:
        raise InvalidLinkError("URL must contain a dot")
    if len(bare) < URL_MIN_LENGTH:
        raise InvalidLinkError(f"URL must be at least {URL_MIN_LENGTH} characters")

    return url if match else f"https://{bare}"


class Link(BaseModel):
    """A slug mapped to a destination URL, with its click counter."""

    slug: str
    url: str
    clicks: int = Field(default=0, ge=0)

    def to_hash(self) -> Dict[str, str]:
        return {"url": self.url, "clicks": str(self.clicks)}

    @classmethod
    def from_hash(cls, slug: str, values: Dict[str, str]) -> "Link":
        """Build a Link from a stored hash; raises ValueError on corrupt data."""
        if "url" not in values:
            raise ValueError(f"Link {slug} has no url field")
        return cls(slug=slug, url=values["url"], clicks=int(values.get("clicks", 0)))

    def __str__(self) -> str:
        return f"{self.slug} -> {self.url} has {self.clicks} clicks"
