"""
GraphQL transport for the Propel API.

A thin aiohttp client: one POST per operation, authenticated with an OAuth2
client-credentials token. It performs no retries; callers see the first
failure as an ``ApiError``.
"""

import logging
from typing import Any

import aiohttp

from ..errors import ApiError, ConfigurationError
from ..settings import PropelSettings, get_settings

logger = logging.getLogger(__name__)


class PropelClient:
    """Executes GraphQL documents against the Propel API.

    Examples:
        ```python
        async with PropelClient.from_settings() as client:
            data = await client.execute(query, {"id": "dp_1"}, operation="read Data Pool")
        ```
    """

    def __init__(
        self,
        api_url: str,
        client_id: str,
        client_secret: str,
        auth_url: str,
        request_timeout: float = 30.0,
        session: aiohttp.ClientSession | None = None,
    ):
        """
        Initialize the client.

        Args:
            api_url: GraphQL endpoint
            client_id: OAuth2 client ID
            client_secret: OAuth2 client secret
            auth_url: OAuth2 token endpoint
            request_timeout: Per-request timeout in seconds
            session: Existing aiohttp session to reuse (not closed by the client)
        """
        self.api_url = api_url
        self.auth_url = auth_url
        self._client_id = client_id
        self._client_secret = client_secret
        self._timeout = aiohttp.ClientTimeout(total=request_timeout)
        self._session = session
        self._owns_session = session is None
        self._access_token: str | None = None

    @classmethod
    def from_settings(cls, settings: PropelSettings | None = None) -> "PropelClient":
        """Build a client from provider settings.

        Raises:
            ConfigurationError: If the client credentials are missing
        """
        settings = settings or get_settings()
        if not settings.client_id or not settings.client_secret:
            raise ConfigurationError(
                "Credentials are required",
                "Unable to authenticate for the Propel client",
            )
        return cls(
            api_url=settings.api_url,
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            auth_url=settings.auth_url,
            request_timeout=settings.request_timeout,
        )

    async def __aenter__(self) -> "PropelClient":
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise RuntimeError("PropelClient must be used as an async context manager")
        return self._session

    async def _token(self) -> str:
        if self._access_token is not None:
            return self._access_token

        try:
            async with self.session.post(
                self.auth_url,
                data={"grant_type": "client_credentials"},
                auth=aiohttp.BasicAuth(self._client_id, self._client_secret),
            ) as response:
                if response.status != 200:
                    text = await response.text()
                    raise ApiError(
                        f"token request returned {response.status}: {text}",
                        operation="authenticate",
                    )
                body = await response.json()
        except aiohttp.ClientError as e:
            raise ApiError(str(e), operation="authenticate") from e

        self._access_token = body["access_token"]
        logger.debug("Obtained Propel access token")
        return self._access_token

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        operation: str | None = None,
    ) -> dict[str, Any]:
        """
        Execute a GraphQL document and return its ``data`` member.

        Args:
            query: GraphQL query or mutation document
            variables: Operation variables
            operation: Short description used to prefix errors

        Returns:
            The response ``data`` dictionary

        Raises:
            ApiError: On transport failures, non-200 responses or GraphQL errors
        """
        token = await self._token()
        payload = {"query": query, "variables": variables or {}}

        try:
            async with self.session.post(
                self.api_url,
                json=payload,
                headers={"Authorization": f"Bearer {token}"},
            ) as response:
                if response.status != 200:
                    text = await response.text()
                    raise ApiError(
                        f"returned error {response.status}: {text}", operation=operation
                    )
                body = await response.json()
        except aiohttp.ClientError as e:
            raise ApiError(str(e), operation=operation) from e

        errors = body.get("errors")
        if errors:
            messages = "; ".join(err.get("message", str(err)) for err in errors)
            raise ApiError(messages, operation=operation)

        return body.get("data") or {}
