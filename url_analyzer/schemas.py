"""
Pydantic schemas defining the contracts between pipeline stages.

Data flow through the pipeline:
  Validator → ExtractionRequest → Fetcher → FetchResult
  FetchResult → CharsetResolver → DecodedDocument
  DecodedDocument → content extractor → ExtractedContent → Summarizer → SummaryResult
  (fetch failure) ExtractionRequest → fallback resolver → FallbackNote
  everything → assembler → AnalysisOutcome

All models are created inside one analyze() call and discarded with it.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


# Fixed structural limit on the body excerpt, applied before entity decoding.
MAX_EXCERPT_CHARS = 3000


class ExtractionRequest(BaseModel):
    """A validated absolute http(s) URL."""
    url: str
    scheme: str
    hostname: str
    path: str = ""


class FetchResult(BaseModel):
    """Raw response of a successful fetch. Immutable: the bytes are decoded later."""
    model_config = ConfigDict(frozen=True)

    status_code: int
    content_type: str = ""          # Content-Type header value, "" when absent
    content: bytes = b""            # Undecoded body
    hostname: str
    path: str = ""


# --- Charset resolution ---

class DecodeAttempt(BaseModel):
    """One strict decode trial. Exactly one of text / error is set."""
    charset: str
    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.text is not None


class DecodedDocument(BaseModel):
    """Decoded markup plus the charset that produced it."""
    text: str
    charset: str
    lossy: bool = False             # True only for the last-resort replace decode


# --- Extraction / enrichment ---

class ExtractedContent(BaseModel):
    """Title and bounded body excerpt of a page."""
    title: str
    excerpt: str = Field(default="", max_length=MAX_EXCERPT_CHARS)


class SummaryResult(BaseModel):
    """Output of a summarizer; summary is None when no AI summary exists."""
    summary: Optional[str] = None
    ai_generated: bool = False


class FallbackNote(BaseModel):
    """Degraded note synthesized when the page could not be fetched."""
    title: str                      # Note title handed to the caller
    heading: str                    # Markdown H1 text
    section: str                    # Markdown H2 label
    body: str                       # Plain text, escaped by the assembler
    link_label: str = "Open link"


# --- Boundary output ---

class AnalysisOutcome(BaseModel):
    """Final result: either title + content, or error. Never both, never neither."""
    title: Optional[str] = None
    content: Optional[str] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def _check_exclusive(self) -> "AnalysisOutcome":
        if self.error:
            if self.title or self.content:
                raise ValueError("error outcome must not carry title or content")
        elif not self.content:
            raise ValueError("outcome needs either content or an error")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_response(self) -> dict:
        """Boundary dict: {title, content} or {error}."""
        if self.error:
            return {"error": self.error}
        return {"title": self.title or "", "content": self.content}
