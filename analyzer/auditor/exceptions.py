from analyzer.analysis.exceptions import UpstreamFailureError, UpstreamTimeoutError


class AuditError(UpstreamFailureError):
    """Raised when the rule engine failed while running inside the page."""


class EngineNotLoadedError(AuditError):
    """Raised when the engine handle is absent from the page after injection."""


class EngineScriptUnavailableError(AuditError):
    """Raised when the engine script is missing locally and cannot be fetched."""


class AuditTimeoutError(UpstreamTimeoutError):
    """Raised when the rule engine did not finish within the audit time budget."""
