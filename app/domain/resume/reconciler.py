import json
from typing import Any, Callable

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import EmptyCompletion, UnparsableCompletion
from app.core.logging import get_logger
from app.domain.resume.schemas import (
    AnalysisProject,
    AnalysisResult,
    CandidateProfile,
    Completion,
    GenerationResult,
    ParsedCompletion,
    RawCompletion,
)

logger = get_logger(__name__)

# canonical field -> older spellings the model may still emit
FIELD_SYNONYMS: dict[str, tuple[str, ...]] = {
    "summary": ("executive_summary",),
}

LIST_FIELDS = ("skills", "projects", "experience", "education")

# key a bare string item is promoted to, per list field
ITEM_TEXT_KEYS = {
    "skills": "skill",
    "projects": "name",
    "experience": "role",
    "education": "degree",
}

NESTED_OUTPUT_KEY = "json_output"


def _parse_raw(completion: RawCompletion) -> dict:
    text = completion.text.strip()
    if not text:
        raise EmptyCompletion()

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end <= start:
            raise UnparsableCompletion(detail=text[:200])
        try:
            data = json.loads(text[start : end + 1])
        except json.JSONDecodeError as e:
            raise UnparsableCompletion(detail=f"{e.msg} at position {e.pos}")
        logger.info("json extracted from prose reply", reply_length=len(text))

    if not isinstance(data, dict):
        raise UnparsableCompletion(detail=f"expected a JSON object, got {type(data).__name__}")
    return data


def _parse_structured(completion: ParsedCompletion) -> dict:
    if not completion.data:
        raise EmptyCompletion()
    return dict(completion.data)


_PARSERS: dict[str, Callable[[Any], dict]] = {
    "raw": _parse_raw,
    "parsed": _parse_structured,
}


def parse_completion(completion: Completion) -> dict:
    """Turn a model reply into a JSON object.

    Raises:
        EmptyCompletion: reply had no content
        UnparsableCompletion: no JSON object could be recovered
    """
    return _PARSERS[completion.kind](completion)


def _unwrap(data: dict) -> dict:
    nested = data.get(NESTED_OUTPUT_KEY)
    if isinstance(nested, dict):
        merged = {k: v for k, v in data.items() if k != NESTED_OUTPUT_KEY}
        merged.update(nested)
        return merged
    return data


def resolve_synonyms(data: dict) -> dict:
    """Copy older field spellings onto the canonical name when it is missing"""
    for canonical, synonyms in FIELD_SYNONYMS.items():
        if data.get(canonical):
            continue
        for synonym in synonyms:
            if data.get(synonym):
                data[canonical] = data[synonym]
                break
    return data


def _coerce_items(field: str, value: Any) -> list:
    if not isinstance(value, list):
        if value not in (None, "", {}):
            logger.warning("non-list field replaced", field=field, type=type(value).__name__)
        return []
    items = []
    for item in value:
        if isinstance(item, dict):
            items.append(item)
        elif isinstance(item, str) and item.strip():
            items.append({ITEM_TEXT_KEYS[field]: item.strip()})
    return items


def reconcile(completion: Completion, profile: CandidateProfile) -> GenerationResult:
    """Parse a generation reply and fill in every field the UI relies on.

    Args:
        completion: raw or structured reply of the model
        profile: request profile used for name/contact defaults

    Returns:
        GenerationResult with all list fields present
    """
    data = resolve_synonyms(_unwrap(parse_completion(completion)))

    for field in LIST_FIELDS:
        data[field] = _coerce_items(field, data.get(field))

    if not isinstance(data.get("name"), str) or not data["name"].strip():
        data["name"] = profile.name
    if not isinstance(data.get("contact"), dict) or not data["contact"]:
        data["contact"] = profile.contact.model_dump()
    if not isinstance(data.get("summary"), str):
        data["summary"] = ""

    data["is_fallback"] = False

    try:
        return GenerationResult.model_validate(data)
    except PydanticValidationError as e:
        raise UnparsableCompletion(detail=str(e))


def reconcile_analysis(completion: Completion) -> AnalysisResult:
    """Map the analysis reply onto the flat shape the profile page shows"""
    raw = parse_completion(completion)
    data = resolve_synonyms(_unwrap(raw))

    skills = []
    for item in _coerce_items("skills", data.get("skills")):
        skill = item.get("skill")
        if isinstance(skill, str) and skill.strip():
            skills.append(skill.strip())

    projects = []
    for item in _coerce_items("projects", data.get("projects")):
        name = item.get("name")
        if not isinstance(name, str) or not name.strip():
            continue
        bullets = item.get("bullets") if isinstance(item.get("bullets"), list) else []
        parts = [item.get("short_desc") or "", *[b for b in bullets if isinstance(b, str)]]
        details = " ".join(p.strip() for p in parts if isinstance(p, str) and p.strip())
        projects.append(AnalysisProject(name=name.strip(), details=details))

    summary = data.get("summary")
    return AnalysisResult(
        summary=summary if isinstance(summary, str) else "",
        skills=skills,
        projects=projects,
        raw=raw,
    )
