from typing import Any

from app.core.exceptions import ValidationError
from app.core.logging import get_logger
from app.domain.resume.schemas import CandidateProfile, Contact, RepositorySummary

logger = get_logger(__name__)


def _as_str(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _as_count(value: Any) -> int:
    """Non-negative integer, 0 for anything else"""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float) and value.is_integer():
        return max(int(value), 0)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return 0


def _as_str_list(value: Any) -> list[str]:
    """Ordered list of distinct non-empty strings"""
    if not isinstance(value, (list, tuple)):
        return []
    result: list[str] = []
    for item in value:
        text = _as_str(item)
        if text and text not in result:
            result.append(text)
    return result


def _first(payload: dict, *keys: str) -> Any:
    for key in keys:
        value = payload.get(key)
        if value not in (None, "", []):
            return value
    return None


def normalize_contact(value: Any) -> Contact:
    if not isinstance(value, dict):
        return Contact()
    return Contact(email=_as_str(value.get("email")), location=_as_str(value.get("location")))


def normalize_repository(entry: Any) -> RepositorySummary | None:
    """Normalize one repository entry, None when it has no usable name"""
    if not isinstance(entry, dict):
        return None

    name = _as_str(entry.get("name"))
    if not name:
        return None

    owner = entry.get("owner")
    if isinstance(owner, dict):
        owner = owner.get("login")

    language = _as_str(entry.get("language"))
    topics = _as_str_list(entry.get("topics"))
    tech = _as_str_list(entry.get("tech"))
    if not tech:
        tech = _as_str_list([language, *topics])

    return RepositorySummary(
        name=name,
        description=_as_str(_first(entry, "short_desc", "description")),
        language=language,
        stars=_as_count(_first(entry, "stars", "stargazers_count")),
        forks=_as_count(_first(entry, "forks", "forks_count")),
        commits=_as_count(entry.get("commits")),
        topics=topics,
        tech=tech,
        url=_as_str(_first(entry, "url", "html_url")),
        owner=_as_str(owner),
        readme_snippet=_as_str(entry.get("readme_snippet")),
    )


def normalize_repositories(value: Any) -> list[RepositorySummary]:
    if not isinstance(value, (list, tuple)):
        return []
    repos = [normalize_repository(entry) for entry in value]
    return [r for r in repos if r is not None]


def normalize_profile(payload: Any, require_target_role: bool = True) -> CandidateProfile:
    """Build a CandidateProfile from a loosely typed request body.

    Args:
        payload: decoded JSON body
        require_target_role: reject the request when target_role is empty

    Returns:
        CandidateProfile with every field defaulted

    Raises:
        ValidationError: target_role missing on the strict path
    """
    if not isinstance(payload, dict):
        payload = {}

    target_role = _as_str(payload.get("target_role"))
    if require_target_role and not target_role:
        raise ValidationError(
            detail="target_role is required",
            issues=[{"field": "target_role", "message": "target_role must be a non-empty string"}],
        )

    profile = CandidateProfile(
        name=_as_str(payload.get("name")),
        contact=normalize_contact(payload.get("contact")),
        resume_text=_as_str(payload.get("existing_resume_text")),
        detected_languages=_as_str_list(payload.get("detected_languages")),
        target_role=target_role,
        tone=_as_str(payload.get("tone")),
        repo_count=_as_count(payload.get("repo_count")),
    )

    logger.debug(
        "profile normalized",
        resume_length=len(profile.resume_text),
        languages=len(profile.detected_languages),
        target_role=profile.target_role,
    )
    return profile
