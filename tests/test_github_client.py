"""GitHub client tests"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from app.core.config import settings
from app.core.exceptions import ConfigurationError, UpstreamAuthError, UpstreamFetchError
from app.domain.resume.schemas import RepositorySummary
from app.infra.github.client import (
    _get_headers,
    attach_readme_snippets,
    build_authorize_url,
    exchange_code_for_token,
    get_readme_snippet,
    list_user_repos,
)

README_URL = "https://api.github.com/repos/ada/payments-api/readme"


def _github_repo(**overrides) -> dict:
    repo = {
        "id": 1,
        "name": "payments-api",
        "full_name": "ada/payments-api",
        "description": "Payments",
        "html_url": "https://github.com/ada/payments-api",
        "url": "https://api.github.com/repos/ada/payments-api",
        "language": "Go",
        "topics": ["payments"],
        "stargazers_count": 10,
        "forks_count": 2,
        "owner": {"login": "ada"},
        "default_branch": "main",
        "private": False,
    }
    repo.update(overrides)
    return repo


class TestGetHeaders:
    """_get_headers tests"""

    def test_with_token(self):
        headers = _get_headers("test-token")

        assert headers["Authorization"] == "Bearer test-token"
        assert headers["Accept"] == "application/vnd.github.v3+json"

    def test_without_token(self):
        assert "Authorization" not in _get_headers(None)

    def test_raw_content(self):
        assert _get_headers("t", raw=True)["Accept"] == "application/vnd.github.v3.raw"


class TestListUserRepos:
    """list_user_repos tests"""

    @pytest.mark.asyncio
    async def test_success(self):
        mock_response = MagicMock()
        mock_response.is_error = False
        mock_response.json.return_value = [_github_repo(), _github_repo(id=2, name="cli", owner=None)]

        with patch("app.infra.github.client._client") as mock_client:
            mock_client.get = AsyncMock(return_value=mock_response)
            repos = await list_user_repos("token", per_page=500)

        assert [r.name for r in repos] == ["payments-api", "cli"]
        assert repos[0].stars == 10
        assert repos[0].owner == "ada"
        assert repos[1].owner == ""
        assert repos[1].full_name == "ada/payments-api"
        params = mock_client.get.call_args.kwargs["params"]
        assert params == {"per_page": 100, "sort": "updated"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", [None, ""])
    async def test_missing_token(self, token):
        with patch("app.infra.github.client._client") as mock_client:
            mock_client.get = AsyncMock()
            with pytest.raises(UpstreamAuthError) as exc_info:
                await list_user_repos(token)

        assert exc_info.value.status_code == 401
        mock_client.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_token(self):
        response = httpx.Response(401, text='{"message": "Bad credentials"}')

        with patch("app.infra.github.client._client") as mock_client:
            mock_client.get = AsyncMock(return_value=response)
            with pytest.raises(UpstreamAuthError):
                await list_user_repos("expired")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [403, 404, 502])
    async def test_upstream_status_propagated(self, status_code):
        """Non-2xx status and body are passed through"""
        response = httpx.Response(status_code, text="upstream says no")

        with patch("app.infra.github.client._client") as mock_client:
            mock_client.get = AsyncMock(return_value=response)
            with pytest.raises(UpstreamFetchError) as exc_info:
                await list_user_repos("token")

        assert exc_info.value.status_code == status_code
        assert exc_info.value.detail == "upstream says no"


class TestGetReadmeSnippet:
    """get_readme_snippet tests"""

    @pytest.mark.asyncio
    async def test_truncated(self):
        response = httpx.Response(200, text="#" * 5000, request=httpx.Request("GET", README_URL))

        with patch("app.infra.github.client._client") as mock_client:
            mock_client.get = AsyncMock(return_value=response)
            snippet = await get_readme_snippet("ada", "payments-api", "token")

        assert len(snippet) == settings.readme_max_length_github
        assert mock_client.get.call_args.args[0] == README_URL

    @pytest.mark.asyncio
    async def test_missing_readme(self):
        response = httpx.Response(404, request=httpx.Request("GET", README_URL))

        with patch("app.infra.github.client._client") as mock_client:
            mock_client.get = AsyncMock(return_value=response)
            assert await get_readme_snippet("ada", "payments-api") == ""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [httpx.ConnectTimeout("timeout"), httpx.ConnectError("refused")],
        ids=["timeout", "connect"],
    )
    async def test_network_error(self, error):
        with patch("app.infra.github.client._client") as mock_client:
            mock_client.get = AsyncMock(side_effect=error)
            assert await get_readme_snippet("ada", "payments-api") == ""


class TestAttachReadmeSnippets:
    """attach_readme_snippets tests"""

    @pytest.mark.asyncio
    async def test_partial_failure(self):
        """One failed fetch leaves the other snippets in place"""
        repos = [
            RepositorySummary(name="a", owner="ada"),
            RepositorySummary(name="b", owner="ada"),
            RepositorySummary(name="c", owner="ada"),
        ]

        async def _fetch(owner, repo, token):
            if repo == "b":
                raise RuntimeError("boom")
            return f"readme {repo}"

        with patch("app.infra.github.client.get_readme_snippet", side_effect=_fetch):
            result = await attach_readme_snippets(repos, "token")

        assert [r.readme_snippet for r in result] == ["readme a", "", "readme c"]
        assert all(r.readme_snippet == "" for r in repos)

    @pytest.mark.asyncio
    async def test_skips_repos_without_owner_or_with_snippet(self):
        repos = [
            RepositorySummary(name="a"),
            RepositorySummary(name="b", owner="ada", readme_snippet="given"),
            RepositorySummary(name="c", owner="ada"),
        ]

        with patch("app.infra.github.client.get_readme_snippet", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.return_value = "fetched"
            result = await attach_readme_snippets(repos, "token")

        mock_fetch.assert_called_once_with("ada", "c", "token")
        assert [r.readme_snippet for r in result] == ["", "given", "fetched"]

    @pytest.mark.asyncio
    async def test_top_ranked_repos_fetched(self):
        """The most-starred repository gets a snippet even when listed last"""
        repos = [RepositorySummary(name=f"r{i}", owner="ada", stars=i) for i in range(6)]

        async def _fetch(owner, repo, token):
            return f"readme {repo}"

        with (
            patch.object(settings, "readme_fetch_max_repos", 5),
            patch("app.infra.github.client.get_readme_snippet", side_effect=_fetch),
        ):
            result = await attach_readme_snippets(repos, "token")

        assert [r.name for r in result] == [f"r{i}" for i in range(6)]
        assert result[5].readme_snippet == "readme r5"
        assert result[1].readme_snippet == "readme r1"
        assert result[0].readme_snippet == ""

    @pytest.mark.asyncio
    async def test_limited_to_first_repos(self):
        repos = [RepositorySummary(name=f"r{i}", owner="ada") for i in range(8)]

        with patch("app.infra.github.client.get_readme_snippet", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.return_value = "x"
            await attach_readme_snippets(repos, "token")

        assert mock_fetch.call_count == settings.readme_fetch_max_repos

    @pytest.mark.asyncio
    async def test_no_token(self):
        repos = [RepositorySummary(name="a", owner="ada")]

        with patch("app.infra.github.client.get_readme_snippet", new_callable=AsyncMock) as mock_fetch:
            result = await attach_readme_snippets(repos, None)

        assert result is repos
        mock_fetch.assert_not_called()


class TestOAuth:
    """OAuth helper tests"""

    def test_authorize_url(self):
        with (
            patch.object(settings, "github_client_id", "cid"),
            patch.object(settings, "github_oauth_redirect_uri", ""),
        ):
            url = httpx.URL(build_authorize_url("state-123"))

        assert url.host == "github.com"
        assert url.params["client_id"] == "cid"
        assert url.params["state"] == "state-123"
        assert "redirect_uri" not in url.params

    def test_authorize_url_unconfigured(self):
        with patch.object(settings, "github_client_id", ""):
            with pytest.raises(ConfigurationError):
                build_authorize_url("state")

    @pytest.mark.asyncio
    async def test_exchange_success(self):
        response = httpx.Response(200, json={"access_token": "gho_x", "token_type": "bearer", "scope": "repo"})

        with (
            patch.object(settings, "github_client_id", "cid"),
            patch.object(settings, "github_client_secret", "secret"),
            patch("app.infra.github.client._client") as mock_client,
        ):
            mock_client.post = AsyncMock(return_value=response)
            token = await exchange_code_for_token("code-1")

        assert token == {"access_token": "gho_x", "token_type": "bearer", "scope": "repo"}
        sent = mock_client.post.call_args.kwargs["data"]
        assert sent["code"] == "code-1"
        assert sent["client_secret"] == "secret"

    @pytest.mark.asyncio
    async def test_exchange_rejected_code(self):
        response = httpx.Response(
            200, json={"error": "bad_verification_code", "error_description": "The code is incorrect"}
        )

        with (
            patch.object(settings, "github_client_id", "cid"),
            patch.object(settings, "github_client_secret", "secret"),
            patch("app.infra.github.client._client") as mock_client,
        ):
            mock_client.post = AsyncMock(return_value=response)
            with pytest.raises(UpstreamAuthError) as exc_info:
                await exchange_code_for_token("stale")

        assert exc_info.value.detail == "The code is incorrect"

    @pytest.mark.asyncio
    async def test_exchange_unconfigured(self):
        with patch.object(settings, "github_client_secret", ""):
            with pytest.raises(ConfigurationError):
                await exchange_code_for_token("code")
