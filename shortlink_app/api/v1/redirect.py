from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from shortlink_app.dependencies import get_link_service
from shortlink_app.services.link_service import LinkService

router = APIRouter(tags=["redirect"])


@router.get("/{slug}")
async def redirect_to_url(
    slug: str,
    link_service: LinkService = Depends(get_link_service)
):
    """
    Redirect to the destination URL.

    Counts the click before answering. A 302 is used rather than a
    permanent redirect so browsers come back and every visit is counted.
    Unknown slugs raise LinkNotFoundError, answered with 404.
    """
    url = await link_service.resolve_redirect(slug)
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)
