"""Shared httpx client construction for the repository and search backends."""

import logging

import httpx
from httpx import BasicAuth

logger = logging.getLogger(__name__)


def _log_request(request: httpx.Request) -> None:
    logger.debug("--> %s %s", request.method, request.url)


def _log_response(response: httpx.Response) -> None:
    logger.debug(
        "<-- %s %s %s",
        response.status_code,
        response.request.method,
        response.request.url,
    )


def build_http_client(
    username: str | None = None,
    password: str | None = None,
    timeout: float = 30.0,
    user_agent: str | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Build an httpx client with auth, User-Agent and debug logging configured."""
    auth = None
    if username and password:
        auth = BasicAuth(username, password)

    headers = {}
    if user_agent:
        logger.debug("Adding 'User-Agent' header with value: %s", user_agent)
        headers["User-Agent"] = user_agent

    event_hooks = {}
    if logger.isEnabledFor(logging.DEBUG):
        event_hooks = {"request": [_log_request], "response": [_log_response]}

    return httpx.Client(
        auth=auth,
        headers=headers,
        timeout=timeout,
        transport=transport,
        event_hooks=event_hooks,
    )
