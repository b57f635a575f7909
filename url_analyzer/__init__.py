"""
URL Analyzer

Turns an arbitrary URL into a Markdown note: fetch, detect the real charset,
recover readable text, extract a title and excerpt, optionally summarize with
an LLM, and degrade to a host-specific note when the page can't be fetched.

Public API surface:
  Pipeline          — URLAnalyzer, analyze_url, AnalyzerConfig
  Stages            — validate, is_analyzable, Fetcher, CharsetResolver,
                      decode_entities, extract_title, extract_body,
                      create_summarizer, FallbackResolver
  Data models       — AnalysisOutcome, FetchResult, DecodedDocument, ExtractedContent, SummaryResult
  Error types       — InvalidURL (surfaced), FetchError / SummarizationUnavailable (recovered)
"""

# --- Pipeline ---
from .pipeline import URLAnalyzer, analyze_url
from .config import AnalyzerConfig

# --- Stages ---
from .validator import validate, is_analyzable
from .fetcher import Fetcher
from .charset import CharsetResolver
from .entities import decode_entities
from .content import extract_title, extract_body
from .summarizer import BaseSummarizer, LLMSummarizer, ExcerptSummarizer, create_summarizer
from .fallback import FallbackResolver, is_private_chat_url

# --- Data models ---
from .schemas import (
    AnalysisOutcome,
    ExtractionRequest,
    FetchResult,
    DecodedDocument,
    ExtractedContent,
    SummaryResult,
    FallbackNote,
)

# --- Exceptions ---
from .exceptions import (
    URLAnalyzerError,
    InvalidURL,
    FetchError,
    SummarizationUnavailable,
    LLMClientError,
)

__version__ = "0.1.0"
__all__ = [
    "URLAnalyzer",
    "analyze_url",
    "AnalyzerConfig",
    "validate",
    "is_analyzable",
    "Fetcher",
    "CharsetResolver",
    "decode_entities",
    "extract_title",
    "extract_body",
    "BaseSummarizer",
    "LLMSummarizer",
    "ExcerptSummarizer",
    "create_summarizer",
    "FallbackResolver",
    "is_private_chat_url",
    "AnalysisOutcome",
    "ExtractionRequest",
    "FetchResult",
    "DecodedDocument",
    "ExtractedContent",
    "SummaryResult",
    "FallbackNote",
    "URLAnalyzerError",
    "InvalidURL",
    "FetchError",
    "SummarizationUnavailable",
    "LLMClientError",
]
