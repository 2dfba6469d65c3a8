"""Fedora repository HTTP client implementation."""

from collections.abc import Iterable, Mapping
from typing import IO

import httpx

from pass_client.db.http import build_http_client
from pass_client.errors import RequestError

RequestContent = bytes | IO[bytes] | Iterable[bytes]


class FedoraHttpClient:
    """Connection manager for the Fedora repository HTTP API.

    Resource URIs are absolute, so requests are addressed by full URL
    rather than relative to the base URL.
    """

    def __init__(
        self,
        base_url: str,
        username: str | None = None,
        password: str | None = None,
        timeout: float = 30.0,
        user_agent: str | None = None,
        client: httpx.Client | None = None,
    ):
        self.base_url: str = base_url if base_url.endswith("/") else base_url + "/"
        self._client: httpx.Client = client or build_http_client(
            username, password, timeout, user_agent
        )

    def request(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str] | None = None,
        content: RequestContent | None = None,
    ) -> httpx.Response:
        """Perform a request and return the fully read response.

        The response body is read and the connection released before this
        method returns, whatever the outcome.

        Raises:
            RequestError: If the request could not be performed.
        """
        try:
            return self._client.request(method, url, headers=headers, content=content)
        except httpx.HTTPError as e:
            raise RequestError(
                f"A problem occurred while performing {method} {url}: {e}"
            ) from e

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def __enter__(self) -> "FedoraHttpClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
