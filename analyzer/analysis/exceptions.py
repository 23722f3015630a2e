from typing import ClassVar


class AnalyzerError(Exception):
    """Base exception for all errors surfaced to API callers.

    ``kind`` names the error category, ``status_code`` the HTTP status and
    ``safe_message`` the text shown to callers outside development mode.
    Errors with ``expose_message`` set always show their own message.
    """

    kind: ClassVar[str] = "InternalError"
    status_code: ClassVar[int] = 500
    safe_message: ClassVar[str] = "An unexpected error occurred."
    expose_message: ClassVar[bool] = False

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.safe_message
        super().__init__(self.message)


class InvalidInputError(AnalyzerError):
    """Raised when request input has the wrong shape."""

    kind = "InvalidInput"
    status_code = 400
    safe_message = "Invalid input."
    expose_message = True

    def __init__(self, message: str | None = None, errors: list[dict[str, str]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class InvalidUrlError(InvalidInputError):
    """Raised when a URL cannot be normalized into an http(s) URL."""

    safe_message = "Invalid or missing URL"
    expose_message = False


class UnauthorizedError(AnalyzerError):
    """Raised when the auth token is missing, expired or invalid."""

    kind = "Unauthorized"
    status_code = 401
    safe_message = "No valid token, authorization denied"


class InvalidCredentialsError(UnauthorizedError):
    """Raised on failed login. Same message for unknown user and bad password."""

    status_code = 400
    safe_message = "Invalid Credentials"


class ConflictError(AnalyzerError):
    """Raised when registering a username that already exists."""

    kind = "Conflict"
    status_code = 400
    safe_message = "User already exists"


class UpstreamTimeoutError(AnalyzerError):
    """Raised when navigation or audit exceeded its time budget."""

    kind = "UpstreamTimeout"
    safe_message = "An error occurred during analysis."


class UpstreamFailureError(AnalyzerError):
    """Raised when the browser or rule engine failed."""

    kind = "UpstreamFailure"
    safe_message = "An error occurred during analysis."


class PersistenceFailureError(AnalyzerError):
    """Raised when the store is unreachable or rejected a write."""

    kind = "PersistenceFailure"
    safe_message = "An error occurred while accessing stored data."


class InternalError(AnalyzerError):
    """Raised for unexpected faults."""


class AnalysisFailedError(AnalyzerError):
    """Raised by the orchestrator when navigation or audit failed.

    Keeps the kind, status and safe message of the underlying upstream
    error and chains it as ``__cause__`` for logging.
    """

    safe_message = "An error occurred during analysis."

    def __init__(self, cause: AnalyzerError) -> None:
        super().__init__(f"Failed to analyze page: {cause.message}")
        self.cause = cause
        self.kind = cause.kind  # type: ignore[misc]
        self.status_code = cause.status_code  # type: ignore[misc]
        self.safe_message = cause.safe_message  # type: ignore[misc]
