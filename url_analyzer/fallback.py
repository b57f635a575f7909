"""
Host-specific fallback notes for pages that could not be fetched.

Many sources reject scripted access (login walls, bot detection). Instead of
failing, the pipeline synthesizes a short note that keeps the link and
something searchable.

Dispatch is an ordered registry of (matcher, handler) pairs. The first
matcher that accepts the hostname wins, unless its handler returns None, in
which case the search continues. The generic rule is always last.
"""

from typing import Callable, Optional

from .schemas import ExtractionRequest, FallbackNote
from .validator import validate
from .exceptions import InvalidURL
from .logger import get_module_logger

logger = get_module_logger("fallback")


PRIVATE_CHAT_MARKER = "slack.com"
CODE_HOSTING_MARKER = "github.com"

Matcher = Callable[[str], bool]
Handler = Callable[[ExtractionRequest], Optional[FallbackNote]]


def _path_segments(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


def private_chat_note(request: ExtractionRequest) -> FallbackNote:
    segments = _path_segments(request.path)
    label = segments[-1] if segments else "message"
    return FallbackNote(
        title=f"Slack - {label}",
        heading="Slack link",
        section="Note",
        body="Slack content is private and cannot be retrieved automatically. "
             "Open the link directly to read it.",
        link_label="Open in Slack"
    )


def code_hosting_note(request: ExtractionRequest) -> Optional[FallbackNote]:
    segments = _path_segments(request.path)
    if len(segments) < 2:
        return None
    owner, repo = segments[0], segments[1]
    return FallbackNote(
        title=f"GitHub - {'/'.join(segments)}",
        heading="GitHub link",
        section="Repository",
        body=f"{owner}/{repo}",
        link_label="Open on GitHub"
    )


def generic_note(request: ExtractionRequest) -> FallbackNote:
    return FallbackNote(
        title=request.hostname,
        heading=request.hostname,
        section="Content",
        body="The content of this URL could not be retrieved. Open the link directly.",
        link_label="Open link"
    )


def _always(hostname: str) -> bool:
    return True


DEFAULT_FALLBACK_RULES: tuple = (
    (lambda hostname: PRIVATE_CHAT_MARKER in hostname, private_chat_note),
    (lambda hostname: CODE_HOSTING_MARKER in hostname, code_hosting_note),
    (_always, generic_note),
)


class FallbackResolver:
    """Ordered (matcher, handler) registry."""

    def __init__(self, rules: Optional[list] = None):
        self.rules: list[tuple[Matcher, Handler]] = list(
            DEFAULT_FALLBACK_RULES if rules is None else rules
        )

    def register(self, matcher: Matcher, handler: Handler, index: Optional[int] = None) -> None:
        """
        Add a host rule.

        Without an index the rule goes right before the last (generic) rule,
        so it is tried after every existing host-specific rule.
        """
        if index is None:
            index = max(len(self.rules) - 1, 0)
        self.rules.insert(index, (matcher, handler))

    def resolve(self, request: ExtractionRequest) -> FallbackNote:
        """Build the fallback note for a request whose fetch failed."""
        hostname = request.hostname.lower()
        for matcher, handler in self.rules:
            if not matcher(hostname):
                continue
            note = handler(request)
            if note is not None:
                logger.info(f"Fallback note for {request.url} via {handler.__name__}")
                return note
        return generic_note(request)


def resolve_fallback(request: ExtractionRequest) -> FallbackNote:
    """Convenience function using the default rules."""
    return FallbackResolver().resolve(request)


def is_private_chat_url(text: str) -> bool:
    """Whether text is a valid URL on the private chat platform."""
    try:
        request = validate(text)
    except InvalidURL:
        return False
    return PRIVATE_CHAT_MARKER in request.hostname.lower()
