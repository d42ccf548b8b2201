from typing import Any

from fastapi import APIRouter, Body, Request

from app.core.config import settings
from app.core.exceptions import ValidationError
from app.core.limiter import limiter
from app.domain.resume.normalizer import normalize_repositories
from app.domain.resume.schemas import AnalysisResult
from app.domain.resume.service import analyze_profile

router = APIRouter(tags=["analyze"])


@router.post("/analyze", response_model=AnalysisResult)
@limiter.limit(settings.rate_limit_analyze)
async def analyze(request: Request, payload: dict[str, Any] = Body(...)) -> AnalysisResult:
    projects = payload.get("projects")
    if not isinstance(projects, list):
        raise ValidationError(
            detail="Invalid projects data",
            issues=[{"field": "projects", "message": "projects must be an array"}],
        )

    username = payload.get("username")
    return await analyze_profile(
        username if isinstance(username, str) else "",
        normalize_repositories(projects),
    )
