from fastapi import Request

from shortlink_app.config import settings


def build_short_url(request: Request, slug: str) -> str:
    """Public short URL for a slug: BASE_URL when configured, else the request's scheme and host."""
    base_url = settings.base_url or str(request.base_url)
    return f"{base_url.rstrip('/')}/{slug}"
