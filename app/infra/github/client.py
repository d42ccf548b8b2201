import asyncio

import httpx

from app.core.config import settings
from app.core.exceptions import ConfigurationError, UpstreamAuthError, UpstreamFetchError
from app.core.logging import get_logger
from app.domain.resume.prompt_builder import rank_key
from app.domain.resume.schemas import RepositoryListing, RepositorySummary

logger = get_logger(__name__)

GITHUB_API_BASE = "https://api.github.com"
GITHUB_OAUTH_AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
GITHUB_OAUTH_TOKEN_URL = "https://github.com/login/oauth/access_token"

_client = httpx.AsyncClient(timeout=settings.github_timeout)
_request_semaphore = asyncio.Semaphore(settings.github_max_concurrent_requests)


def _get_headers(token: str | None = None, raw: bool = False) -> dict[str, str]:
    """Build GitHub API request headers

    Args:
        token: GitHub OAuth token
        raw: ask for raw file content instead of JSON

    Returns:
        HTTP header dictionary
    """
    accept = "application/vnd.github.v3.raw" if raw else "application/vnd.github.v3+json"
    headers = {"Accept": accept}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


async def close_client():
    """Close the shared httpx client"""
    await _client.aclose()


def _to_listing(repo: dict) -> RepositoryListing:
    owner = repo.get("owner") or {}
    return RepositoryListing(
        id=repo["id"],
        name=repo["name"],
        full_name=repo.get("full_name") or repo["name"],
        description=repo.get("description"),
        html_url=repo.get("html_url", ""),
        url=repo.get("url", ""),
        language=repo.get("language"),
        topics=repo.get("topics") or [],
        stars=repo.get("stargazers_count") or 0,
        forks=repo.get("forks_count") or 0,
        owner=owner.get("login", "") if isinstance(owner, dict) else "",
        default_branch=repo.get("default_branch") or "main",
        private=bool(repo.get("private", False)),
    )


async def list_user_repos(token: str | None, per_page: int | None = None) -> list[RepositoryListing]:
    """List the authenticated user's repositories, most recently updated first

    Args:
        token: GitHub OAuth token
        per_page: page size, capped at 100

    Returns:
        repository listings

    Raises:
        UpstreamAuthError: no token given
        UpstreamFetchError: GitHub answered with a non-2xx status
    """
    if not token:
        raise UpstreamAuthError("Missing GitHub access token")

    params = {"per_page": min(per_page or settings.github_repos_per_page, 100), "sort": "updated"}
    response = await _client.get(
        f"{GITHUB_API_BASE}/user/repos", headers=_get_headers(token), params=params
    )

    if response.is_error:
        logger.error("github repo list failed", status_code=response.status_code)
        if response.status_code == 401:
            raise UpstreamAuthError(response.text)
        raise UpstreamFetchError(response.status_code, response.text)

    repos = [_to_listing(r) for r in response.json()]
    logger.info("github repos listed", count=len(repos))
    return repos


async def get_readme_snippet(owner: str, repo: str, token: str | None = None) -> str:
    """Return the first characters of a repository README

    Any failure (missing README, network error, timeout) gives an empty string.

    Args:
        owner: repository owner login
        repo: repository name
        token: GitHub OAuth token

    Returns:
        README text truncated to readme_max_length_github, or ""
    """
    url = f"{GITHUB_API_BASE}/repos/{owner}/{repo}/readme"

    try:
        async with _request_semaphore:
            response = await _client.get(url, headers=_get_headers(token, raw=True))
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.info("readme unavailable", repo=f"{owner}/{repo}", status_code=e.response.status_code)
        return ""
    except httpx.HTTPError as e:
        logger.warning("readme fetch failed", repo=f"{owner}/{repo}", error=type(e).__name__)
        return ""

    logger.info("readme fetched", repo=f"{owner}/{repo}")
    return response.text[: settings.readme_max_length_github]


async def attach_readme_snippets(
    repos: list[RepositorySummary], token: str | None
) -> list[RepositorySummary]:
    """Fetch README snippets for the top-ranked repositories in parallel

    Targets are the repositories the prompt lists first (stars, then commits).
    Only those with an owner and no snippet yet are fetched, and only when a
    token is available. The input list and its order are left untouched.
    """
    if not token:
        return repos

    limit = settings.readme_fetch_max_repos
    ranked = sorted(range(len(repos)), key=lambda i: rank_key(repos[i]))[:limit]
    targets = [i for i in ranked if repos[i].owner and not repos[i].readme_snippet]
    if not targets:
        return repos

    snippets = await asyncio.gather(
        *[get_readme_snippet(repos[i].owner, repos[i].name, token) for i in targets],
        return_exceptions=True,
    )

    result = list(repos)
    for i, snippet in zip(targets, snippets, strict=True):
        if isinstance(snippet, BaseException):
            logger.warning("readme task failed", repo=repos[i].name, error=type(snippet).__name__)
            continue
        if snippet:
            result[i] = repos[i].model_copy(update={"readme_snippet": snippet})

    logger.info("readme snippets attached", requested=len(targets))
    return result


def build_authorize_url(state: str) -> str:
    """GitHub authorize URL the user is redirected to"""
    if not settings.github_client_id:
        raise ConfigurationError("GITHUB_CLIENT_ID is not defined in environment variables")

    params = {
        "client_id": settings.github_client_id,
        "scope": settings.github_oauth_scope,
        "state": state,
    }
    if settings.github_oauth_redirect_uri:
        params["redirect_uri"] = settings.github_oauth_redirect_uri
    return str(httpx.URL(GITHUB_OAUTH_AUTHORIZE_URL, params=params))


async def exchange_code_for_token(code: str) -> dict:
    """Exchange an OAuth authorization code for an access token

    Args:
        code: authorization code from the callback

    Returns:
        access_token, token_type and scope

    Raises:
        ConfigurationError: OAuth app credentials are missing
        UpstreamAuthError: GitHub rejected the code
        UpstreamFetchError: GitHub answered with a non-2xx status
    """
    if not settings.github_client_id or not settings.github_client_secret:
        raise ConfigurationError("GITHUB_CLIENT_ID / GITHUB_CLIENT_SECRET are not configured")

    payload = {
        "client_id": settings.github_client_id,
        "client_secret": settings.github_client_secret,
        "code": code,
    }
    if settings.github_oauth_redirect_uri:
        payload["redirect_uri"] = settings.github_oauth_redirect_uri

    response = await _client.post(
        GITHUB_OAUTH_TOKEN_URL, data=payload, headers={"Accept": "application/json"}
    )
    if response.is_error:
        raise UpstreamFetchError(response.status_code, response.text)

    data = response.json()
    if "access_token" not in data:
        logger.warning("oauth code rejected", error=data.get("error"))
        raise UpstreamAuthError(data.get("error_description") or data.get("error"))

    logger.info("oauth token issued", scope=data.get("scope", ""))
    return {
        "access_token": data["access_token"],
        "token_type": data.get("token_type", "bearer"),
        "scope": data.get("scope", ""),
    }
