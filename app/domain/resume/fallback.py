"""
Deterministic fallback used when the language model is over quota

Everything here is derived from the request payload alone: no network calls,
no randomness, same input gives the same output.
"""

from collections import Counter

from app.core.logging import get_logger
from app.domain.resume.prompt_builder import MAX_PROJECTS, MAX_SKILLS, rank_repositories
from app.domain.resume.schemas import (
    AnalysisProject,
    AnalysisResult,
    CandidateProfile,
    GenerationResult,
    ProjectEntry,
    RepositorySummary,
    SkillEntry,
)

logger = get_logger(__name__)

DEFAULT_ROLE = "Software Engineer"
DEFAULT_LANGUAGES = "Web"

SKILL_DESCRIPTIONS = {
    "python": "Uses Python for backend services, automation scripts and data processing.",
    "javascript": "Builds interactive browser features and Node.js tooling with JavaScript.",
    "typescript": "Writes type-safe frontend and backend code in TypeScript.",
    "java": "Develops object-oriented services and applications in Java.",
    "go": "Builds fast, concurrent network services and CLIs in Go.",
    "rust": "Writes memory-safe, high-performance components in Rust.",
    "c++": "Implements performance-sensitive logic in C++.",
    "c#": "Builds applications and services on .NET with C#.",
    "ruby": "Builds web applications and scripts in Ruby.",
    "php": "Develops server-rendered web applications in PHP.",
    "kotlin": "Builds Android and JVM applications in Kotlin.",
    "swift": "Builds iOS and macOS applications in Swift.",
    "html": "Structures accessible, semantic web pages with HTML.",
    "css": "Styles responsive layouts and UI components with CSS.",
    "shell": "Automates builds and environment setup with shell scripts.",
    "sql": "Models relational data and writes queries in SQL.",
    "dart": "Builds cross-platform mobile apps with Dart.",
    "jupyter notebook": "Explores data and documents experiments in Jupyter notebooks.",
}

BACKEND_KEYWORDS = ("api", "server", "backend")
FRONTEND_KEYWORDS = ("site", "web", "portfolio")


def describe_skill(language: str) -> str:
    return SKILL_DESCRIPTIONS.get(
        language.lower(),
        f"Experience using {language} (derived from repository metadata).",
    )


def build_summary(profile: CandidateProfile, repos: list[RepositorySummary]) -> str:
    role = profile.target_role or DEFAULT_ROLE
    languages = ", ".join(profile.detected_languages[:3]) or DEFAULT_LANGUAGES
    summary = f"Results-driven {role} with experience in {languages}."

    if repos:
        top_names = " and ".join(r.name for r in repos[:2])
        summary += f" Contributed to {len(repos)} GitHub repositories including {top_names}."
    return summary


def _outcome_bullet(repo: RepositorySummary) -> str:
    name = repo.name.lower()
    tech = ", ".join(repo.tech) or repo.language or "modern tooling"

    if any(keyword in name for keyword in BACKEND_KEYWORDS):
        return f"Built backend services with {tech}, focusing on reliable API design and data handling."
    if any(keyword in name for keyword in FRONTEND_KEYWORDS):
        return f"Delivered a responsive web experience with {tech}, tuned for fast page loads."
    return f"Applied {tech} to implement the project's core functionality."


def build_project(repo: RepositorySummary) -> ProjectEntry:
    if repo.description:
        purpose = f"Worked on {repo.name}: {repo.description}"
    else:
        purpose = f"Contributed to {repo.name}"

    return ProjectEntry(
        name=repo.name,
        short_desc=repo.description,
        tech=repo.tech,
        bullets=[purpose, _outcome_bullet(repo)],
        url=repo.url,
    )


def build_fallback_result(
    profile: CandidateProfile, repos: list[RepositorySummary]
) -> GenerationResult:
    """Resume built from the payload alone.

    Args:
        profile: normalized candidate profile
        repos: repositories supplied with the request

    Returns:
        GenerationResult marked as fallback
    """
    skills = [
        SkillEntry(skill=lang, description=describe_skill(lang))
        for lang in profile.detected_languages[:MAX_SKILLS]
    ]
    projects = [build_project(r) for r in rank_repositories(repos)[:MAX_PROJECTS]]

    logger.info("fallback resume built", skills=len(skills), projects=len(projects))
    return GenerationResult(
        name=profile.name,
        contact=profile.contact,
        summary=build_summary(profile, repos),
        skills=skills,
        projects=projects,
        experience=[],
        education=[],
        is_fallback=True,
    )


def rank_languages(repos: list[RepositorySummary]) -> list[str]:
    """Languages by repository count; Counter keeps first-seen order on ties"""
    counts = Counter(r.language for r in repos if r.language)
    return [lang for lang, _ in counts.most_common()]


def build_fallback_analysis(repos: list[RepositorySummary]) -> AnalysisResult:
    """Profile analysis built from repository languages alone"""
    languages = rank_languages(repos)
    primary = languages[0] if languages else "modern web technologies"

    summary = (
        f"Software developer focused on practical, maintainable applications and {primary} tools. "
        f"Maintains an active portfolio of {len(repos)} repositories that showcase hands-on projects "
        "with an emphasis on clean architecture and quick iteration."
    )

    projects = []
    for repo in rank_repositories(repos)[:MAX_PROJECTS]:
        language = repo.language or "software"
        details = repo.description or (
            f"A {language} project demonstrating core development principles "
            f"and a practical implementation of {repo.language or 'its'} features."
        )
        projects.append(AnalysisProject(name=repo.name, details=details))

    logger.info("fallback analysis built", languages=len(languages), projects=len(projects))
    return AnalysisResult(
        summary=summary,
        skills=languages[:MAX_SKILLS],
        projects=projects,
        is_fallback=True,
    )
