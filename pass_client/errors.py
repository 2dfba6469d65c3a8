"""Exceptions raised by the PASS client."""


class PassClientError(Exception):
    """Base class for all client errors."""


class InvalidArgumentError(PassClientError, ValueError):
    """Raised when a caller passes an invalid argument.

    Always raised before any request is sent.
    """


class RequestError(PassClientError):
    """Raised when a backend returns a non-success response or cannot be reached."""

    def __init__(
        self, message: str, status_code: int | None = None, body: str | None = None
    ):
        super().__init__(message)
        self.status_code: int | None = status_code
        self.body: str | None = body


class ResourceNotFoundError(RequestError):
    """Raised when the requested resource does not exist or has been deleted."""

    def __init__(self, uri: str, status_code: int | None = None, body: str | None = None):
        super().__init__(f"Resource {uri} was not found", status_code, body)
        self.uri: str = uri


class UpdateConflictError(PassClientError):
    """Raised when an update is rejected because the resource changed since it was read."""

    def __init__(self, uri: str | None):
        super().__init__(
            f"Failed to update {uri} - the data may have changed since {uri} was last retrieved."
        )
        self.uri: str | None = uri


class MultipleMatchesError(PassClientError):
    """Raised when a single-result search matches more than one record."""

    def __init__(self, entity_type: str, criteria: dict[str, object]):
        super().__init__(
            f"More than one {entity_type} record matched {criteria}, expected at most one"
        )
        self.entity_type: str = entity_type
        self.criteria: dict[str, object] = criteria
