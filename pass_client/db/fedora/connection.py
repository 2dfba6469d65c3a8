"""Fedora connection management."""

from pass_client.core.settings import Settings, get_settings

from .client import FedoraHttpClient

# Global Fedora client instance
_fedora: FedoraHttpClient | None = None


def create_fedora_client(settings: Settings) -> FedoraHttpClient:
    """Create a new Fedora client configured from settings."""
    return FedoraHttpClient(
        base_url=settings.fedora_base_url,
        username=settings.fedora_user,
        password=settings.fedora_password,
        timeout=settings.http_timeout,
        user_agent=settings.http_agent,
    )


def get_fedora_client() -> FedoraHttpClient:
    """Get the shared Fedora client, creating it from settings on first use."""
    global _fedora
    if _fedora is None or _fedora.is_closed:
        _fedora = create_fedora_client(get_settings())

    return _fedora


def close_fedora_client() -> None:
    """Close the shared Fedora client."""
    global _fedora
    if _fedora:
        _fedora.close()
        _fedora = None


def reset_fedora_client() -> None:
    """Reset the shared Fedora client for testing purposes."""
    close_fedora_client()
    get_settings.cache_clear()
