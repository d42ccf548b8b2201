"""GitHub proxy and OAuth schemas."""

from typing import Literal

from pydantic import BaseModel

from app.domain.resume.schemas import RepositoryListing


class RepoListResponse(BaseModel):
    status: Literal["success"] = "success"
    repos: list[RepositoryListing]


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    scope: str = ""
