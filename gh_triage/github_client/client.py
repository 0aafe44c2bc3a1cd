"""GitHub GraphQL API client using httpx."""

import logging
from typing import Any

import httpx

from .. import __version__
from ..config import DEFAULT_ENDPOINT, get_github_token

logger = logging.getLogger(__name__)


class GraphQLError(Exception):
    """Base class for GraphQL request failures."""


class AuthorizationError(GraphQLError):
    """The API rejected the credential. Never retried."""


class GraphQLResponseError(GraphQLError):
    """The response was delivered but carried application-level errors."""

    def __init__(self, messages: list[str]):
        self.messages = messages
        super().__init__(f"GraphQL errors! ({len(messages)})")


class GraphQLClient:
    """Authenticated client for a single GraphQL endpoint."""

    def __init__(
        self,
        token: str | None = None,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the GraphQL client.

        Args:
            token: GitHub personal access token. If None, reads from
                GITHUB_TOKEN env var.
            endpoint: GraphQL endpoint URL
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.token = get_github_token(token)
        self.endpoint = endpoint
        self.headers = {
            "Authorization": f"bearer {self.token}",
            "User-Agent": f"gh-triage/{__version__}",
            "Accept": "application/json",
        }
        self._http = httpx.Client(
            headers=self.headers, timeout=timeout, transport=transport
        )

    def execute(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """Run a query and return its ``data`` object.

        Raises:
            AuthorizationError: On HTTP 401
            httpx.HTTPError: On transport failures and other non-2xx statuses
            GraphQLResponseError: If the response carries an ``errors`` array
        """
        response = self._http.post(
            self.endpoint, json={"query": query, "variables": variables}
        )

        if response.status_code == httpx.codes.UNAUTHORIZED:
            raise AuthorizationError(
                "Error encountered in GraphQL query due to HTTP status code 401 "
                "Unauthorized. Check that the provided auth token is still valid "
                "and not expired."
            )
        response.raise_for_status()

        payload = response.json()
        errors = payload.get("errors") or []
        if errors:
            messages = [str(error.get("message", error)) for error in errors]
            logger.warning("GraphQL errors! (%d)", len(messages))
            for message in messages:
                logger.warning("\t%s", message)
            raise GraphQLResponseError(messages)

        data = payload.get("data")
        if data is None:
            raise GraphQLResponseError(["Response contained no data"])
        return data

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "GraphQLClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
