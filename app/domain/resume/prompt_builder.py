import json

from app.core.config import settings
from app.domain.resume.prompts import (
    PROFILE_ANALYSIS_HUMAN,
    PROFILE_ANALYSIS_SYSTEM,
    RESUME_GENERATOR_HUMAN,
    RESUME_GENERATOR_SYSTEM,
)
from app.domain.resume.schemas import CandidateProfile, GenerationResult, RepositorySummary

MAX_SKILLS = 8
MAX_PROJECTS = 5


def rank_key(repo: RepositorySummary) -> tuple[int, int]:
    """Stars desc, then commits desc"""
    return -repo.stars, -repo.commits


def rank_repositories(repos: list[RepositorySummary]) -> list[RepositorySummary]:
    """sorted() is stable so ties keep input order"""
    return sorted(repos, key=rank_key)


def output_schema_prompt() -> str:
    """JSON schema of the resume the model must return"""
    schema = GenerationResult.model_json_schema()
    schema.get("properties", {}).pop("is_fallback", None)
    return json.dumps(schema, indent=2, ensure_ascii=False)


def format_repository(repo: RepositorySummary) -> dict:
    """Prompt view of one repository"""
    data = {
        "name": repo.name,
        "description": repo.description,
        "language": repo.language,
        "tech": repo.tech,
        "topics": repo.topics,
        "stars": repo.stars,
        "forks": repo.forks,
        "commits": repo.commits,
        "url": repo.url,
    }
    if repo.readme_snippet:
        data["readme_snippet"] = repo.readme_snippet[: settings.readme_max_length_prompt]
    return data


def format_github_data(profile: CandidateProfile, repos: list[RepositorySummary]) -> str:
    github_data = {
        "languages": profile.detected_languages,
        "top_repos": [format_repository(r) for r in rank_repositories(repos)],
        "total_repos": profile.repo_count or len(repos),
        "target_role": profile.target_role,
    }
    return json.dumps(github_data, indent=2, ensure_ascii=False)


def build_generation_prompt(
    profile: CandidateProfile, repos: list[RepositorySummary]
) -> tuple[str, str]:
    """Render the resume generation prompt.

    Args:
        profile: normalized candidate profile
        repos: repositories supplied with the request

    Returns:
        system and human message text
    """
    contact = ", ".join(v for v in (profile.contact.email, profile.contact.location) if v)
    human = RESUME_GENERATOR_HUMAN.format(
        target_role=profile.target_role,
        tone=profile.tone or "neutral",
        name=profile.name or "unknown",
        contact=contact or "not provided",
        resume_text=profile.resume_text[: settings.resume_text_max_length] or "not provided",
        github_data=format_github_data(profile, repos),
        output_schema=output_schema_prompt(),
    )
    return RESUME_GENERATOR_SYSTEM, human


def format_project_summary(repos: list[RepositorySummary]) -> str:
    """One line per repository for the profile analysis prompt"""
    lines = []
    for repo in repos:
        lines.append(
            f"- {repo.name} ({repo.language or 'unknown'}): "
            f"{repo.description or 'No description'} | Stars: {repo.stars} | Forks: {repo.forks}"
        )
    return "\n".join(lines) or "none"


def build_analysis_prompt(username: str, repos: list[RepositorySummary]) -> tuple[str, str]:
    """Render the profile analysis prompt"""
    human = PROFILE_ANALYSIS_HUMAN.format(
        username=username or "unknown",
        project_summary=format_project_summary(repos),
    )
    return PROFILE_ANALYSIS_SYSTEM, human
