import secrets

from fastapi import APIRouter, Query, Request
from fastapi.responses import RedirectResponse

from app.api.v1.schemas import TokenResponse
from app.core.config import settings
from app.core.exceptions import UpstreamAuthError
from app.core.logging import get_logger
from app.infra.github.client import build_authorize_url, exchange_code_for_token

router = APIRouter(prefix="/auth/github", tags=["auth"])
logger = get_logger(__name__)

STATE_COOKIE = "github_oauth_state"


@router.get("/login")
async def login() -> RedirectResponse:
    """Redirect the browser to the GitHub consent screen"""
    state = secrets.token_urlsafe(16)
    response = RedirectResponse(build_authorize_url(state), status_code=302)
    response.set_cookie(
        STATE_COOKIE,
        state,
        max_age=600,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return response


@router.get("/callback", response_model=TokenResponse)
async def callback(
    request: Request,
    code: str = Query(min_length=1),
    state: str = Query(min_length=1),
) -> TokenResponse:
    """Exchange the authorization code for an access token"""
    expected_state = request.cookies.get(STATE_COOKIE)
    if not expected_state or not secrets.compare_digest(expected_state, state):
        logger.warning("oauth state mismatch")
        raise UpstreamAuthError("OAuth state mismatch")

    token = await exchange_code_for_token(code)
    return TokenResponse(**token)
