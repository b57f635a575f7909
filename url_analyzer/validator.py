"""
URL validation: the syntactic gate in front of the pipeline.

Nothing here touches the network. validate() is the only place an
InvalidURL is raised.
"""

from urllib.parse import urlsplit

from .schemas import ExtractionRequest
from .exceptions import InvalidURL

ALLOWED_SCHEMES = ("http", "https")


def validate(text: str) -> ExtractionRequest:
    """
    Parse text as an absolute http(s) URL.

    Args:
        text: User-supplied URL string (surrounding whitespace is ignored)

    Returns:
        ExtractionRequest for the URL

    Raises:
        InvalidURL: empty input, unparsable input, missing host, or a scheme
                    other than http/https
    """
    if text is None or not str(text).strip():
        raise InvalidURL("No URL specified")

    url = str(text).strip()
    try:
        parts = urlsplit(url)
        # .hostname / .port parse the netloc and raise on malformed ports or IPv6 literals
        hostname = parts.hostname
        parts.port
    except ValueError as e:
        raise InvalidURL("Invalid URL", details={"url": url, "error": str(e)})

    if parts.scheme.lower() not in ALLOWED_SCHEMES:
        raise InvalidURL(
            "Invalid URL: only http and https are supported",
            details={"url": url, "scheme": parts.scheme}
        )
    if not hostname:
        raise InvalidURL("Invalid URL: missing host", details={"url": url})

    return ExtractionRequest(
        url=url,
        scheme=parts.scheme.lower(),
        hostname=hostname,
        path=parts.path
    )


def is_analyzable(text: str) -> bool:
    """Same check as validate(), without raising. Used to decide whether to auto-run analysis."""
    try:
        validate(text)
    except InvalidURL:
        return False
    return True

