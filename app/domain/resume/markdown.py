from app.domain.resume.schemas import (
    EducationEntry,
    ExperienceEntry,
    GenerationResult,
    ProjectEntry,
)

DEFAULT_NAME = "Candidate Name"


def _bullets(items: list[str]) -> list[str]:
    return [f"- {item}" for item in items if item]


def _contact_line(result: GenerationResult) -> str:
    parts = []
    if result.contact.email:
        parts.append(f"Email: {result.contact.email}")
    if result.contact.location:
        parts.append(result.contact.location)
    return " | ".join(parts)


def _experience_block(entry: ExperienceEntry) -> list[str]:
    title = " - ".join(p for p in (entry.role, entry.company) if p) or "Role"
    if entry.dates:
        title += f" ({entry.dates})"
    return [f"### {title}", *_bullets(entry.bullets), ""]


def _project_block(entry: ProjectEntry) -> list[str]:
    lines = [f"### {entry.name or 'Project'}"]
    if entry.short_desc:
        lines.append(entry.short_desc)
    if entry.tech:
        lines.append(f"*{', '.join(entry.tech)}*")
    lines.extend(_bullets(entry.bullets))
    if entry.url:
        lines.append(f"[Repository]({entry.url})")
    lines.append("")
    return lines


def _education_line(entry: EducationEntry) -> str:
    line = ", ".join(p for p in (entry.degree, entry.school) if p)
    if entry.year:
        line += f" ({entry.year})"
    return f"- {line.strip()}"


def render_markdown(result: GenerationResult) -> str:
    """Render a resume as a Markdown document.

    Experience and Education are left out when empty; the other sections
    are always present so a sparse result still gives a valid document.
    """
    lines = [f"# {result.name or DEFAULT_NAME}", ""]

    contact = _contact_line(result)
    if contact:
        lines.extend([contact, ""])

    lines.extend(["## Summary", result.summary, ""])

    lines.append("## Skills")
    for skill in result.skills:
        if not skill.skill.strip():
            continue
        lines.append(f"- **{skill.skill}**: {skill.description}".rstrip())
    lines.append("")

    if result.experience:
        lines.append("## Experience")
        for entry in result.experience:
            lines.extend(_experience_block(entry))

    lines.append("## Projects")
    for entry in result.projects:
        lines.extend(_project_block(entry))
    if not result.projects:
        lines.append("")

    if result.education:
        lines.append("## Education")
        lines.extend(_education_line(entry) for entry in result.education)
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"
