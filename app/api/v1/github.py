from fastapi import APIRouter, Depends, Query

from app.api.deps import get_bearer_token
from app.api.v1.schemas import RepoListResponse
from app.infra.github.client import list_user_repos

router = APIRouter(prefix="/github", tags=["github"])


@router.get("/repos", response_model=RepoListResponse)
async def get_repos(
    per_page: int = Query(default=100, ge=1, le=100),
    token: str | None = Depends(get_bearer_token),
) -> RepoListResponse:
    repos = await list_user_repos(token, per_page)
    return RepoListResponse(repos=repos)
