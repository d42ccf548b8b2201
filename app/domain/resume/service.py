from app.core.context import get_request_id
from app.core.exceptions import QuotaExceeded
from app.core.logging import get_logger
from app.domain.resume.fallback import build_fallback_analysis, build_fallback_result
from app.domain.resume.markdown import render_markdown
from app.domain.resume.prompt_builder import build_analysis_prompt, build_generation_prompt
from app.domain.resume.reconciler import reconcile, reconcile_analysis
from app.domain.resume.schemas import (
    AnalysisResult,
    CandidateProfile,
    GenerationResult,
    RepositorySummary,
)
from app.infra.github.client import attach_readme_snippets
from app.infra.llm.client import ensure_configured, request_completion

logger = get_logger(__name__)


def _markdown_for(result: GenerationResult) -> str:
    """Prefer a Markdown resume the model wrote itself"""
    provided = (result.model_extra or {}).get("markdown_resume")
    if isinstance(provided, str) and provided.strip():
        return provided
    return render_markdown(result)


async def generate_resume(
    profile: CandidateProfile,
    repos: list[RepositorySummary],
    token: str | None = None,
) -> tuple[GenerationResult, str]:
    """Generate a resume, falling back to local generation on quota errors.

    Args:
        profile: normalized candidate profile
        repos: repositories supplied with the request
        token: GitHub token used to fetch README snippets

    Returns:
        result and its Markdown rendering

    Raises:
        ConfigurationError: LLM provider is not configured
        EmptyCompletion: model replied without content
        UnparsableCompletion: model reply held no JSON object
        LLMError: any other LLM failure
    """
    logger.info(
        "resume generation started",
        target_role=profile.target_role,
        repos=len(repos),
        languages=len(profile.detected_languages),
    )

    ensure_configured()
    repos = await attach_readme_snippets(repos, token)
    system_prompt, human_prompt = build_generation_prompt(profile, repos)

    try:
        completion = await request_completion(
            system_prompt,
            human_prompt,
            tags=["resume", "generate", profile.target_role],
            session_id=get_request_id(),
        )
    except QuotaExceeded as e:
        logger.warning("using deterministic fallback", reason=e.message)
        result = build_fallback_result(profile, repos)
        return result, render_markdown(result)

    result = reconcile(completion, profile)
    logger.info(
        "resume generation finished",
        skills=len(result.skills),
        projects=len(result.projects),
        experience=len(result.experience),
    )
    return result, _markdown_for(result)


async def analyze_profile(username: str, repos: list[RepositorySummary]) -> AnalysisResult:
    """Summarise a GitHub profile, heuristic fallback on quota errors"""
    logger.info("profile analysis started", repos=len(repos))
    ensure_configured()

    system_prompt, human_prompt = build_analysis_prompt(username, repos)
    try:
        completion = await request_completion(
            system_prompt,
            human_prompt,
            tags=["profile", "analyze"],
            session_id=get_request_id(),
        )
    except QuotaExceeded as e:
        logger.warning("using heuristic analysis", reason=e.message)
        return build_fallback_analysis(repos)

    result = reconcile_analysis(completion)
    logger.info("profile analysis finished", skills=len(result.skills), projects=len(result.projects))
    return result
