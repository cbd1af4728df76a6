import logging

from fastapi import APIRouter, Depends, Form, HTTPException, Response, status
from fastapi.responses import RedirectResponse

from shortlink_app.auth.tokens import TokenService
from shortlink_app.dependencies import get_account_service, get_token_service
from shortlink_app.schemas.auth import SessionResponse
from shortlink_app.services.account_service import AccountService

logger = logging.getLogger("shortlink.auth")

router = APIRouter(prefix="/auth", tags=["auth"])


def session_response(response: Response, token_service: TokenService) -> SessionResponse:
    token = token_service.set_cookie(response)
    return SessionResponse(
        token=token,
        expires_in=int(token_service.login_duration.total_seconds())
    )


@router.post("/login", response_model=SessionResponse)
async def login(
    response: Response,
    password: str = Form(""),
    accounts: AccountService = Depends(get_account_service),
    token_service: TokenService = Depends(get_token_service)
):
    """
    Password login.

    Sends the client to account setup while no user exists; otherwise
    checks the password and sets the session cookie.
    """
    if not await accounts.user_exists():
        logger.info("No users exist")
        return RedirectResponse("/create-account", status_code=status.HTTP_303_SEE_OTHER)

    if not password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Password field is blank or missing"
        )

    await accounts.authenticate(password)
    logger.info("User logged in")
    return session_response(response, token_service)


@router.post("/token-login")
async def token_login(
    jwt: str = Form(""),
    token_service: TokenService = Depends(get_token_service)
):
    """Check an existing session token and continue to the dashboard"""
    if not jwt:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Token is required for login"
        )
    if token_service.validate(jwt) is None:
        raise HTTPException(status_code=status.HTTP_406_NOT_ACCEPTABLE, detail="Bad token")
    return RedirectResponse("/dashboard", status_code=status.HTTP_303_SEE_OTHER)


@router.post(
    "/create-account",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_account(
    response: Response,
    password: str = Form(""),
    accounts: AccountService = Depends(get_account_service),
    token_service: TokenService = Depends(get_token_service)
):
    """Create the single account and log it in"""
    await accounts.create_user(password)
    return session_response(response, token_service)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(token_service: TokenService = Depends(get_token_service)):
    """Clear the session cookie; the token itself stays valid until it expires"""
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    token_service.clear_cookie(response)
    return response
