"""Web interface routes: setup, login and dashboard pages."""

import logging
import os

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from shortlink_app.auth.tokens import TokenService
from shortlink_app.dependencies import (
    get_account_service,
    get_link_service,
    get_token_service,
)
from shortlink_app.exceptions import InvalidLinkError, LinkExistsError, LinkNotFoundError
from shortlink_app.services.account_service import AccountService
from shortlink_app.services.link_service import LinkService
from shortlink_app.url_builder import build_short_url

logger = logging.getLogger("shortlink.web")

router = APIRouter(include_in_schema=False)

template_dir = os.path.join(os.path.dirname(__file__), "..", "templates")
templates = Jinja2Templates(directory=template_dir)


def redirect(url: str, status_code: int = status.HTTP_302_FOUND) -> RedirectResponse:
    return RedirectResponse(url, status_code=status_code)


async def render_dashboard(
    request: Request,
    link_service: LinkService,
    error: str = None,
    notice: str = None,
    status_code: int = status.HTTP_200_OK
):
    links = await link_service.list_links()
    rows = [(link, build_short_url(request, link.slug)) for link in links]
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {"links": rows, "error": error, "notice": notice},
        status_code=status_code
    )


@router.get("/")
async def home(
    request: Request,
    accounts: AccountService = Depends(get_account_service),
    token_service: TokenService = Depends(get_token_service)
):
    """Send visitors to account setup, login or the dashboard"""
    if not await accounts.user_exists():
        return redirect("/create-account", status.HTTP_307_TEMPORARY_REDIRECT)
    if not token_service.validate_request(request):
        return redirect("/login", status.HTTP_307_TEMPORARY_REDIRECT)
    return redirect("/dashboard", status.HTTP_307_TEMPORARY_REDIRECT)


@router.get("/login", response_class=HTMLResponse)
async def login_page(
    request: Request,
    accounts: AccountService = Depends(get_account_service)
):
    if not await accounts.user_exists():
        logger.info("User does not exist")
        return redirect("/create-account")
    return templates.TemplateResponse(request, "login.html", {})


@router.get("/create-account", response_class=HTMLResponse)
async def create_account_page(
    request: Request,
    accounts: AccountService = Depends(get_account_service)
):
    if await accounts.user_exists():
        logger.info("User already exists")
        return redirect("/login")
    return templates.TemplateResponse(request, "create_account.html", {})


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard_page(
    request: Request,
    link_service: LinkService = Depends(get_link_service),
    token_service: TokenService = Depends(get_token_service)
):
    if not token_service.validate_request(request):
        return redirect("/login")
    created = request.query_params.get("created")
    notice = f"Link {created} created" if created else None
    return await render_dashboard(request, link_service, notice=notice)


@router.post("/dashboard/links", response_class=HTMLResponse)
async def create_link_form(
    request: Request,
    url: str = Form(""),
    slug: str = Form(""),
    link_service: LinkService = Depends(get_link_service),
    token_service: TokenService = Depends(get_token_service)
):
    """Form variant of link creation; errors are shown on the dashboard"""
    if not token_service.validate_request(request):
        return redirect("/login", status.HTTP_303_SEE_OTHER)
    try:
        link = await link_service.create_link(url, slug=slug.strip() or None)
    except (InvalidLinkError, LinkExistsError) as e:
        logger.warning("Failed to create link %r: %s", slug, e.message)
        return await render_dashboard(
            request, link_service, error=e.message, status_code=status.HTTP_400_BAD_REQUEST
        )
    return redirect(f"/dashboard?created={link.slug}", status.HTTP_303_SEE_OTHER)


@router.post("/dashboard/links/{slug}/delete")
async def delete_link_form(
    slug: str,
    request: Request,
    link_service: LinkService = Depends(get_link_service),
    token_service: TokenService = Depends(get_token_service)
):
    if not token_service.validate_request(request):
        return redirect("/login", status.HTTP_303_SEE_OTHER)
    try:
        await link_service.delete_link(slug)
    except LinkNotFoundError as e:
        logger.warning(e.message)
    return redirect("/dashboard", status.HTTP_303_SEE_OTHER)
