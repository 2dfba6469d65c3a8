"""Tests for the shared httpx client builder."""

import base64

import httpx

from pass_client.db.http import build_http_client


def _capture(requests: list[httpx.Request]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200)

    return httpx.MockTransport(handler)


class TestBuildHttpClient:
    def test_sends_user_agent_and_credentials(self) -> None:
        requests: list[httpx.Request] = []
        client = build_http_client(
            "user", "secret", user_agent="pass-client/test", transport=_capture(requests)
        )

        client.get("http://localhost/")

        expected = "Basic " + base64.b64encode(b"user:secret").decode()
        assert requests[0].headers["User-Agent"] == "pass-client/test"
        assert requests[0].headers["Authorization"] == expected

    def test_no_credentials_sends_no_authorization(self) -> None:
        requests: list[httpx.Request] = []
        client = build_http_client(transport=_capture(requests))

        client.get("http://localhost/")

        assert "Authorization" not in requests[0].headers
