"""Shared test fixtures"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from app.core.limiter import limiter
from app.domain.resume.schemas import (
    CandidateProfile,
    Contact,
    GenerationResult,
    ProjectEntry,
    RepositorySummary,
    SkillEntry,
)
from app.main import app


@pytest.fixture(autouse=True)
def disable_rate_limit():
    """Rate limits would trip across the test session"""
    limiter.enabled = False
    yield
    limiter.enabled = True


@pytest.fixture
def sample_payload() -> dict:
    """Generation request body as the frontend sends it"""
    return {
        "name": "Ada Lovelace",
        "contact": {"email": "ada@example.com", "location": "Remote"},
        "existing_resume_text": "Backend engineer at Example Corp 2020-2024",
        "detected_languages": ["Go", "Python", "TypeScript"],
        "top_repos": [
            {
                "name": "payments-api",
                "short_desc": "Payment processing service",
                "tech": ["Go", "PostgreSQL"],
                "stars": 10,
                "commits": 40,
                "url": "https://github.com/ada/payments-api",
                "owner": "ada",
            },
            {
                "name": "portfolio-site",
                "short_desc": "Personal website",
                "tech": ["TypeScript"],
                "stars": 3,
                "commits": 12,
                "url": "https://github.com/ada/portfolio-site",
                "owner": "ada",
            },
        ],
        "repo_count": 12,
        "target_role": "Backend Engineer",
        "tone": "confident",
    }


@pytest.fixture
def sample_profile() -> CandidateProfile:
    """Normalized candidate profile"""
    return CandidateProfile(
        name="Ada Lovelace",
        contact=Contact(email="ada@example.com", location="Remote"),
        resume_text="Backend engineer at Example Corp 2020-2024",
        detected_languages=["Go", "Python", "TypeScript"],
        target_role="Backend Engineer",
        tone="confident",
        repo_count=12,
    )


@pytest.fixture
def sample_repos() -> list[RepositorySummary]:
    """Normalized repositories"""
    return [
        RepositorySummary(
            name="payments-api",
            description="Payment processing service",
            language="Go",
            stars=10,
            commits=40,
            tech=["Go", "PostgreSQL"],
            url="https://github.com/ada/payments-api",
            owner="ada",
        ),
        RepositorySummary(
            name="portfolio-site",
            description="Personal website",
            language="TypeScript",
            stars=3,
            commits=12,
            tech=["TypeScript"],
            url="https://github.com/ada/portfolio-site",
            owner="ada",
        ),
    ]


@pytest.fixture
def sample_result() -> GenerationResult:
    """Resume as returned by the model"""
    return GenerationResult(
        name="Ada Lovelace",
        contact=Contact(email="ada@example.com", location="Remote"),
        summary="Backend engineer building payment systems in Go.",
        skills=[SkillEntry(skill="Go", level="strong", description="Built payments-api in Go.")],
        projects=[
            ProjectEntry(
                name="payments-api",
                short_desc="Payment processing service",
                tech=["Go", "PostgreSQL"],
                bullets=["Designed idempotent payment endpoints."],
                url="https://github.com/ada/payments-api",
            )
        ],
    )


@pytest.fixture
def async_client():
    """Async HTTP client bound to the app"""
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
def mock_llm_client():
    """LLM client returned by the factory"""
    with patch("app.infra.llm.client.get_generator_client") as mock_get:
        mock_client = MagicMock()
        mock_client.get_model_name.return_value = "test-model"
        mock_client.get_json_model.return_value.ainvoke = AsyncMock()
        mock_get.return_value = mock_client
        yield mock_client


@pytest.fixture
def mock_readme_fetch():
    """README prefetch that leaves repositories untouched"""

    async def _passthrough(repos, token):
        return repos

    with patch("app.domain.resume.service.attach_readme_snippets", side_effect=_passthrough) as m:
        yield m


@pytest.fixture
def create_http_error():
    """HTTPStatusError helper"""

    def _create(status_code: int, message: str = "Error"):
        return httpx.HTTPStatusError(
            message,
            request=httpx.Request("GET", "https://test.com"),
            response=httpx.Response(status_code),
        )

    return _create


@pytest.fixture
def quota_error():
    """Provider error shaped like openai.RateLimitError"""

    class RateLimitError(Exception):
        status_code = 429
        code = "insufficient_quota"

    return RateLimitError("You exceeded your current quota")
