"""Profile analysis endpoint tests"""

import json

import pytest
from langchain_core.messages import AIMessage

ANALYZE_URL = "/api/v1/analyze"

PROJECTS = [
    {"name": "payments-api", "description": "Payments", "language": "Go", "stargazers_count": 10},
    {"name": "portfolio-site", "language": "TypeScript", "stargazers_count": 3},
]


class TestAnalyzeEndpoint:
    """POST /api/v1/analyze tests"""

    @pytest.mark.asyncio
    async def test_success(self, async_client, mock_llm_client):
        reply = {
            "json_output": {
                "executive_summary": "Builds payment APIs in Go.",
                "skills": [{"skill": "Go"}, {"skill": "TypeScript"}],
                "projects": [{"name": "payments-api", "short_desc": "Payments."}],
            },
            "markdown_output": "# ada",
        }
        mock_llm_client.get_json_model.return_value.ainvoke.return_value = AIMessage(content=json.dumps(reply))

        async with async_client as client:
            response = await client.post(ANALYZE_URL, json={"projects": PROJECTS, "username": "ada"})

        assert response.status_code == 200
        body = response.json()
        assert body["summary"] == "Builds payment APIs in Go."
        assert body["skills"] == ["Go", "TypeScript"]
        assert body["projects"] == [{"name": "payments-api", "details": "Payments."}]
        assert body["is_fallback"] is False

    @pytest.mark.asyncio
    async def test_quota_returns_heuristic(self, async_client, mock_llm_client, quota_error):
        mock_llm_client.get_json_model.return_value.ainvoke.side_effect = quota_error

        async with async_client as client:
            response = await client.post(ANALYZE_URL, json={"projects": PROJECTS})

        assert response.status_code == 200
        body = response.json()
        assert body["is_fallback"] is True
        assert body["summary"]
        assert body["skills"] == ["Go", "TypeScript"]
        assert [p["name"] for p in body["projects"]] == ["payments-api", "portfolio-site"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [{}, {"projects": "payments-api"}, {"projects": {"name": "x"}}, {"projects": None}],
        ids=["missing", "string", "object", "null"],
    )
    async def test_projects_must_be_array(self, async_client, mock_llm_client, payload):
        async with async_client as client:
            response = await client.post(ANALYZE_URL, json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["issues"][0]["field"] == "projects"
        mock_llm_client.get_json_model.return_value.ainvoke.assert_not_called()
