"""Tests for client settings."""

import logging

import pytest

from pass_client.core.settings import DEFAULT_ELASTICSEARCH_LIMIT, Settings, get_settings


class TestSettings:
    """Tests for loading and normalising settings."""

    def test_base_url_gets_trailing_slash(self) -> None:
        settings = Settings(fedora_base_url="http://localhost:8080/fcrepo/rest")

        assert settings.fedora_base_url == "http://localhost:8080/fcrepo/rest/"
        assert settings.container_url("grants") == "http://localhost:8080/fcrepo/rest/grants"

    def test_reads_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PASS_FEDORA_BASE_URL", "http://fedora:8080/rest/")
        monkeypatch.setenv("PASS_ELASTICSEARCH_LIMIT", "50")
        monkeypatch.setenv("PASS_HTTP_AGENT", "pass-client-tests")

        settings = Settings()

        assert settings.fedora_base_url == "http://fedora:8080/rest/"
        assert settings.elasticsearch_limit == 50
        assert settings.http_agent == "pass-client-tests"

    @pytest.mark.parametrize("limit", ["-1", "not a number", -5])
    def test_bad_limit_falls_back_to_default(
        self, limit, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING):
            settings = Settings(elasticsearch_limit=limit)

        assert settings.elasticsearch_limit == DEFAULT_ELASTICSEARCH_LIMIT
        assert "using default limit" in caplog.text

    def test_zero_limit_is_kept(self) -> None:
        assert Settings(elasticsearch_limit=0).elasticsearch_limit == 0

    def test_host_and_index_lists(self) -> None:
        settings = Settings(
            elasticsearch_url="http://es1:9200/, http://es2:9200",
            elasticsearch_indices="pass,archive",
        )

        assert settings.elasticsearch_urls == ["http://es1:9200", "http://es2:9200"]
        assert settings.indices == ["pass", "archive"]

    def test_get_settings_is_cached(self) -> None:
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
