from app.domain.resume.schemas.base import (
    AnalysisProject,
    AnalysisResult,
    CandidateProfile,
    Contact,
    EducationEntry,
    ExperienceEntry,
    GenerationResult,
    ProjectEntry,
    SkillEntry,
)
from app.domain.resume.schemas.completion import Completion, ParsedCompletion, RawCompletion
from app.domain.resume.schemas.github import RepositoryListing, RepositorySummary

__all__ = [
    "Contact",
    "CandidateProfile",
    "SkillEntry",
    "ProjectEntry",
    "ExperienceEntry",
    "EducationEntry",
    "GenerationResult",
    "AnalysisProject",
    "AnalysisResult",
    "RawCompletion",
    "ParsedCompletion",
    "Completion",
    "RepositorySummary",
    "RepositoryListing",
]
