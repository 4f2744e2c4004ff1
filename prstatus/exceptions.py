"""prstatus exception classes."""


class PRStatusError(Exception):
    """Base exception for all prstatus errors."""

    def __init__(
        self, code: str, message: str, request_id: str | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"[{code}] {message}")


class ConfigurationError(PRStatusError):
    """Raised when action configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class UpstreamFetchError(PRStatusError):
    """Raised when a GitHub API call fails. Aborts the run."""

    pass


class AuthenticationError(UpstreamFetchError):
    """Raised when the token is rejected (401)."""

    pass


class AuthorizationError(UpstreamFetchError):
    """Raised when access is denied (403)."""

    pass


class NotFoundError(UpstreamFetchError):
    """Raised when a repository or pull request is not found."""

    pass


class RateLimitedError(UpstreamFetchError):
    """Raised when rate limited."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)
        self.retry_after = retry_after


class ValidationError(UpstreamFetchError):
    """Raised on other client errors (4xx)."""

    pass


class ServerError(UpstreamFetchError):
    """Raised on server errors (5xx) and connection failures."""

    pass


class PartialDataWarning(UserWarning):
    """Issued when a listing hit its page cap and may be incomplete."""
