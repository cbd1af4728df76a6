from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from shortlink_app.dependencies import get_link_service, require_session
from shortlink_app.models.link import Link
from shortlink_app.schemas.link import LinkCreate, LinkResponse
from shortlink_app.services.link_service import LinkService
from shortlink_app.url_builder import build_short_url

router = APIRouter(
    prefix="/links",
    tags=["links"],
    dependencies=[Depends(require_session)]
)


def to_response(request: Request, link: Link) -> LinkResponse:
    return LinkResponse(
        slug=link.slug,
        url=link.url,
        clicks=link.clicks,
        short_url=build_short_url(request, link.slug)
    )


@router.post("", response_model=LinkResponse, status_code=status.HTTP_201_CREATED)
async def create_link(
    link_data: LinkCreate,
    request: Request,
    link_service: LinkService = Depends(get_link_service)
):
    """Create a new link; 409 when the slug is taken"""
    link = await link_service.create_link(link_data.url, slug=link_data.slug)
    return to_response(request, link)


@router.get("", response_model=List[LinkResponse])
async def list_links(
    request: Request,
    link_service: LinkService = Depends(get_link_service)
):
    """List all links, newest first"""
    return [to_response(request, link) for link in await link_service.list_links()]


@router.get("/{slug}", response_model=LinkResponse)
async def get_link(
    slug: str,
    request: Request,
    link_service: LinkService = Depends(get_link_service)
):
    return to_response(request, await link_service.get_link(slug))


@router.delete("/{slug}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_link(
    slug: str,
    link_service: LinkService = Depends(get_link_service)
):
    """Delete a link; 404 when it does not exist"""
    await link_service.delete_link(slug)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
