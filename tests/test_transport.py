"""Tests for the GraphQL transport and operations, against a fake aiohttp session."""

from contextlib import asynccontextmanager
from typing import Any

import aiohttp
import pytest

from pulumi_propel.client import PropelClient, operations
from pulumi_propel.errors import ApiError

TOKEN = {"access_token": "tok", "token_type": "Bearer", "expires_in": 3600}


class FakeResponse:
    def __init__(self, status: int = 200, body: Any = None, text: str = ""):
        self.status = status
        self._body = body
        self._text = text

    async def json(self):
        return self._body

    async def text(self):
        return self._text


class FakeSession:
    """Replays queued responses (or raises queued exceptions) for each POST."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests: list[tuple[str, dict[str, Any]]] = []

    @asynccontextmanager
    async def _respond(self, response):
        yield response

    def post(self, url: str, **kwargs):
        self.requests.append((url, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return self._respond(response)


def make_client(session: FakeSession) -> PropelClient:
    return PropelClient(
        api_url="https://api.test/graphql",
        client_id="client",
        client_secret="secret",
        auth_url="https://auth.test/oauth2/token",
        session=session,
    )


class TestExecute:
    @pytest.mark.asyncio
    async def test_returns_data_with_bearer_token(self):
        session = FakeSession(
            FakeResponse(body=TOKEN),
            FakeResponse(body={"data": {"ok": True}}),
            FakeResponse(body={"data": {"ok": False}}),
        )
        client = make_client(session)

        assert await client.execute("query { ok }") == {"ok": True}
        assert await client.execute("query { ok }") == {"ok": False}

        # Token fetched once and reused
        assert len(session.requests) == 3
        auth_url, auth_kwargs = session.requests[0]
        assert auth_url == "https://auth.test/oauth2/token"
        assert auth_kwargs["data"] == {"grant_type": "client_credentials"}
        assert auth_kwargs["auth"] == aiohttp.BasicAuth("client", "secret")
        _, kwargs = session.requests[1]
        assert kwargs["headers"] == {"Authorization": "Bearer tok"}
        assert kwargs["json"] == {"query": "query { ok }", "variables": {}}

    @pytest.mark.asyncio
    async def test_non_200_is_api_error(self):
        session = FakeSession(
            FakeResponse(body=TOKEN),
            FakeResponse(status=502, text="bad gateway"),
        )

        with pytest.raises(ApiError) as exc_info:
            await make_client(session).execute("query", operation="read Data Pool")

        assert exc_info.value.summary == "error trying to read Data Pool"
        assert exc_info.value.detail == "returned error 502: bad gateway"

    @pytest.mark.asyncio
    async def test_graphql_errors_are_joined(self):
        session = FakeSession(
            FakeResponse(body=TOKEN),
            FakeResponse(body={"data": None, "errors": [{"message": "a"}, {"message": "b"}]}),
        )

        with pytest.raises(ApiError, match="a; b"):
            await make_client(session).execute("query", operation="modify Metric")

    @pytest.mark.asyncio
    async def test_client_error_is_api_error(self):
        session = FakeSession(
            FakeResponse(body=TOKEN),
            aiohttp.ClientConnectionError("connection reset"),
        )

        with pytest.raises(ApiError, match="connection reset"):
            await make_client(session).execute("query", operation="create Data Pool")

    @pytest.mark.asyncio
    async def test_token_failure(self):
        session = FakeSession(FakeResponse(status=401, text="invalid_client"))

        with pytest.raises(ApiError, match="error trying to authenticate"):
            await make_client(session).execute("query")

        assert len(session.requests) == 1

    def test_session_required(self):
        client = PropelClient("https://api.test", "c", "s", "https://auth.test")

        with pytest.raises(RuntimeError):
            client.session


class TestOperations:
    @pytest.mark.asyncio
    async def test_read_data_pool(self):
        session = FakeSession(
            FakeResponse(body=TOKEN),
            FakeResponse(
                body={
                    "data": {
                        "dataPool": {
                            "id": "dp_1",
                            "uniqueName": "events",
                            "status": "LIVE",
                            "account": {"id": "acc_1"},
                            "environment": {"id": "env_1"},
                            "dataSource": {"id": "ds_1"},
                            "table": "EVENTS",
                            "timestamp": {"columnName": "ts"},
                        }
                    }
                }
            ),
        )

        pool = await operations.data_pool(make_client(session), "dp_1")

        assert pool.status == "LIVE"
        assert pool.timestamp.column_name == "ts"
        assert session.requests[1][1]["json"]["variables"] == {"id": "dp_1"}

    @pytest.mark.asyncio
    async def test_null_read_is_not_found(self):
        session = FakeSession(FakeResponse(body=TOKEN), FakeResponse(body={"data": {"dataPool": None}}))

        with pytest.raises(ApiError) as exc_info:
            await operations.data_pool(make_client(session), "dp_1")

        assert exc_info.value.is_not_found
