"""
Main orchestrator for the URL Analyzer.

Wires the stages together:
  validate → fetch → decode → extract → summarize → render
and on a failed fetch:
  validate → fetch ✗ → fallback note → render

Only an invalid URL ends in an error outcome; every later failure lowers the
quality of the note instead. An analyze() call keeps all of its data in
local variables, so one URLAnalyzer can serve concurrent calls.
"""

from typing import Optional

from .config import AnalyzerConfig
from .validator import validate
from .fetcher import Fetcher
from .charset import CharsetResolver
from .content import extract
from .summarizer import BaseSummarizer, create_summarizer
from .fallback import FallbackResolver
from .assembler import render_summary, render_excerpt, render_fallback
from .schemas import AnalysisOutcome, ExtractionRequest, FetchResult
from .exceptions import InvalidURL, FetchError
from .logger import get_module_logger, setup_logger

logger = get_module_logger("pipeline")


class URLAnalyzer:
    """
    Turns a URL into a {title, content} note.

    Collaborators default to the ones described by the config; each can be
    injected (e.g. a fake Fetcher in tests).
    """

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        summarizer: Optional[BaseSummarizer] = None,
        fetcher: Optional[Fetcher] = None,
        resolver: Optional[CharsetResolver] = None,
        fallback: Optional[FallbackResolver] = None,
        log_level: Optional[int] = None
    ):
        if log_level is not None:
            setup_logger(level=log_level)

        self.config = config or AnalyzerConfig()
        # Strategy is fixed here, so the pipeline never re-checks credentials
        self.summarizer = summarizer or create_summarizer(self.config)
        self.fetcher = fetcher or Fetcher(
            timeout=self.config.fetch_timeout,
            user_agent=self.config.user_agent,
            accept_language=self.config.accept_language
        )
        self.resolver = resolver or CharsetResolver()
        self.fallback = fallback or FallbackResolver()

        logger.info(f"URLAnalyzer initialized with {type(self.summarizer).__name__}")

    def analyze(self, url: str) -> AnalysisOutcome:
        """
        Analyze one URL.

        Args:
            url: User-supplied URL string

        Returns:
            AnalysisOutcome with title + content, or with error for invalid input
        """
        try:
            request = validate(url)
        except InvalidURL as e:
            logger.info(f"Rejected input {url!r}: {e.message}")
            return AnalysisOutcome(error=e.message)

        logger.info(f"Analyzing {request.url}")

        try:
            fetched = self.fetcher.fetch(request)
        except FetchError as e:
            logger.warning(f"Using fallback note for {request.url}: {e.message}")
            return self._fallback_outcome(request)

        return self._page_outcome(request, fetched)

    def _page_outcome(self, request: ExtractionRequest, fetched: FetchResult) -> AnalysisOutcome:
        document = self.resolver.resolve(fetched.content, fetched.content_type)
        page = extract(document.text, request.hostname)

        result = self.summarizer.summarize(page.title, request.url, page.excerpt)
        if result.ai_generated and result.summary:
            content = render_summary(page.title, request.url, result.summary)
        else:
            content = render_excerpt(page.title, request.url, page.excerpt)

        return AnalysisOutcome(title=page.title, content=content)

    def _fallback_outcome(self, request: ExtractionRequest) -> AnalysisOutcome:
        note = self.fallback.resolve(request)
        return AnalysisOutcome(title=note.title, content=render_fallback(note, request.url))


def analyze_url(url: str, config: Optional[AnalyzerConfig] = None) -> dict:
    """Convenience function: analyze one URL and return the boundary dict."""
    return URLAnalyzer(config=config).analyze(url).to_response()
