"""Resume API schemas."""

from typing import Literal

from pydantic import BaseModel

from app.domain.resume.schemas import GenerationResult


class GenerateResponse(BaseModel):
    """Resume generation response."""

    status: Literal["success"] = "success"
    json_output: GenerationResult
    markdown_resume: str
    generated_at: str
    is_fallback: bool
