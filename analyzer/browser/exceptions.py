from analyzer.analysis.exceptions import UpstreamFailureError, UpstreamTimeoutError


class BrowserError(UpstreamFailureError):
    """Raised when the browser crashed or the target page refused to load."""


class NavigationTimeoutError(UpstreamTimeoutError):
    """Raised when navigation or the DOM-ready wait ran out of time."""


class BrowserCapacityError(UpstreamFailureError):
    """Raised when every browser slot stayed busy past the queue timeout."""

    status_code = 503
    safe_message = "The analyzer is busy, please retry shortly."
