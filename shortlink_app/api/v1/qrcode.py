from fastapi import APIRouter, Depends, Request, Response

from shortlink_app.dependencies import get_link_service
from shortlink_app.services.link_service import LinkService
from shortlink_app.services.qr_service import render_qr_png
from shortlink_app.url_builder import build_short_url

router = APIRouter(tags=["qrcode"])


@router.get("/qr/{slug}")
async def get_qr_code(
    slug: str,
    request: Request,
    link_service: LinkService = Depends(get_link_service)
):
    """PNG QR code of the short URL for an existing link"""
    link = await link_service.get_link(slug)
    png = render_qr_png(build_short_url(request, link.slug))
    return Response(
        content=png,
        media_type="image/png",
        headers={"Cache-Control": "public, max-age=86400"}
    )
