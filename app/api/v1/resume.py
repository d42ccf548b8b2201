from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from app.api.deps import get_bearer_token
from app.api.v1.schemas import GenerateResponse
from app.core.config import settings
from app.core.limiter import limiter
from app.core.logging import get_logger
from app.domain.resume.normalizer import normalize_profile, normalize_repositories
from app.domain.resume.service import generate_resume

router = APIRouter(prefix="/resume", tags=["resume"])
logger = get_logger(__name__)


@router.post("/generate", response_model=GenerateResponse)
@limiter.limit(settings.rate_limit_generate)
async def generate(
    request: Request,
    payload: dict[str, Any] = Body(...),
    token: str | None = Depends(get_bearer_token),
) -> GenerateResponse:
    profile = normalize_profile(payload, require_target_role=True)
    repos = normalize_repositories(payload.get("top_repos"))

    result, markdown = await generate_resume(profile, repos, token)

    return GenerateResponse(
        json_output=result,
        markdown_resume=markdown,
        generated_at=datetime.now(timezone.utc).isoformat(),
        is_fallback=result.is_fallback,
    )
