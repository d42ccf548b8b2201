from app.api.v1.schemas.github import RepoListResponse, TokenResponse
from app.api.v1.schemas.resume import GenerateResponse

__all__ = [
    "GenerateResponse",
    "RepoListResponse",
    "TokenResponse",
]
