from app.domain.resume.prompts.analysis import (
    PROFILE_ANALYSIS_HUMAN,
    PROFILE_ANALYSIS_SYSTEM,
)
from app.domain.resume.prompts.generation import (
    RESUME_GENERATOR_HUMAN,
    RESUME_GENERATOR_SYSTEM,
)

__all__ = [
    "RESUME_GENERATOR_SYSTEM",
    "RESUME_GENERATOR_HUMAN",
    "PROFILE_ANALYSIS_SYSTEM",
    "PROFILE_ANALYSIS_HUMAN",
]
