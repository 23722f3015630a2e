from urllib.parse import urlsplit

from analyzer.analysis.exceptions import InvalidUrlError

_ALLOWED_SCHEMES = ("http://", "https://")


def normalize_url(raw: str | None) -> str:
    """Prefix a bare host with https:// and check the result parses as a URL.

    Raises:
        InvalidUrlError: if the input is empty or does not parse strictly.
    """
    if raw is None or not raw.strip():
        raise InvalidUrlError("Invalid or missing URL")

    url = raw.strip()
    if not url.lower().startswith(_ALLOWED_SCHEMES):
        url = f"https://{url}"

    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as exc:
        raise InvalidUrlError(f"Invalid URL '{raw}': {exc}") from exc

    host = parts.hostname
    if not host or any(ch.isspace() for ch in parts.netloc):
        raise InvalidUrlError(f"Invalid URL '{raw}': missing or malformed host")
    if port == 0:
        raise InvalidUrlError(f"Invalid URL '{raw}': port out of range")
    return url
