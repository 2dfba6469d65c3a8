"""Elasticsearch HTTP client implementation."""

import logging
from typing import Any

import httpx

from pass_client.db.http import build_http_client
from pass_client.errors import RequestError

logger = logging.getLogger(__name__)


class ElasticsearchHttpClient:
    """Connection manager for the Elasticsearch search API.

    Hosts are tried in the configured order; a host that cannot be reached
    is passed over for the next one.
    """

    def __init__(
        self,
        hosts: list[str],
        timeout: float = 30.0,
        user_agent: str | None = None,
        client: httpx.Client | None = None,
    ):
        if not hosts:
            raise ValueError("At least one Elasticsearch host is required")
        self.hosts: list[str] = [h.rstrip("/") for h in hosts]
        self._client: httpx.Client = client or build_http_client(
            timeout=timeout, user_agent=user_agent
        )

    def search(self, indices: list[str], body: dict[str, Any]) -> dict[str, Any]:
        """Run a search request against the given indices.

        Args:
            indices: Names of the indices to search.
            body: The search request body.

        Returns:
            The decoded search response.

        Raises:
            RequestError: If no host could be reached or the search failed.
        """
        path = f"/{','.join(indices)}/_search"
        last_error: httpx.HTTPError | None = None

        for host in self.hosts:
            try:
                response = self._client.post(
                    f"{host}{path}",
                    json=body,
                    headers={"Content-Type": "application/json"},
                )
            except httpx.TransportError as e:
                logger.warning("Elasticsearch host %s could not be reached: %s", host, e)
                last_error = e
                continue
            except httpx.HTTPError as e:
                raise RequestError(f"A problem occurred while searching {host}: {e}") from e

            if not 200 <= response.status_code <= 299:
                raise RequestError(
                    f"Search on {host}{path} failed with status code {response.status_code}: "
                    f"{response.text}",
                    status_code=response.status_code,
                    body=response.text,
                )

            try:
                return response.json()
            except ValueError as e:
                raise RequestError(
                    f"Search response from {host} is not valid JSON", body=response.text
                ) from e

        raise RequestError(
            f"No Elasticsearch host could be reached: {last_error}"
        ) from last_error

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def __enter__(self) -> "ElasticsearchHttpClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
