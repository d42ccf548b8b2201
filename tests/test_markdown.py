"""Markdown renderer tests"""

from app.domain.resume.markdown import render_markdown
from app.domain.resume.schemas import (
    EducationEntry,
    ExperienceEntry,
    GenerationResult,
    SkillEntry,
)


class TestRenderMarkdown:
    """render_markdown tests"""

    def test_sections(self, sample_result):
        markdown = render_markdown(sample_result)

        assert markdown.startswith("# Ada Lovelace\n")
        assert "Email: ada@example.com | Remote" in markdown
        assert "## Summary\nBackend engineer building payment systems in Go." in markdown
        assert "- **Go**: Built payments-api in Go." in markdown
        assert "### payments-api" in markdown
        assert "*Go, PostgreSQL*" in markdown
        assert "- Designed idempotent payment endpoints." in markdown
        assert "[Repository](https://github.com/ada/payments-api)" in markdown

    def test_optional_sections_omitted(self, sample_result):
        markdown = render_markdown(sample_result)

        assert "## Experience" not in markdown
        assert "## Education" not in markdown

    def test_optional_sections_rendered(self, sample_result):
        result = sample_result.model_copy(
            update={
                "experience": [
                    ExperienceEntry(role="Engineer", company="Example Corp", dates="2020-2024", bullets=["Shipped"])
                ],
                "education": [EducationEntry(degree="BSc", school="Uni", year="2019")],
            }
        )

        markdown = render_markdown(result)

        assert "## Experience\n### Engineer - Example Corp (2020-2024)\n- Shipped" in markdown
        assert "## Education\n- BSc, Uni (2019)" in markdown
        assert markdown.index("## Experience") < markdown.index("## Projects") < markdown.index("## Education")

    def test_empty_result(self):
        """Every field empty still gives a valid document"""
        markdown = render_markdown(GenerationResult())

        assert markdown.startswith("# Candidate Name\n")
        assert "## Summary" in markdown
        assert "## Skills" in markdown
        assert "## Projects" in markdown
        assert "Email:" not in markdown
        assert markdown.endswith("\n")
        assert not markdown.endswith("\n\n")

    def test_unnamed_skills_skipped(self, sample_result):
        result = sample_result.model_copy(
            update={"skills": [SkillEntry(skill="", description="orphan"), SkillEntry(skill="SQL", description="Queries")]}
        )

        markdown = render_markdown(result)

        assert "****" not in markdown
        assert "orphan" not in markdown
        assert "- **SQL**: Queries" in markdown

    def test_rendering_is_repeatable(self, sample_result):
        assert render_markdown(sample_result) == render_markdown(sample_result)
