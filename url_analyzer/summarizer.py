"""
Summarizer adapter: optional AI enrichment of an extracted page.

Two strategies behind one interface, chosen once by create_summarizer():
  - LLMSummarizer     → a credential is configured; asks the model for bullet points
  - ExcerptSummarizer → no credential; never produces a summary

Neither raises. A failed model call yields an empty SummaryResult and the
assembler falls back to the excerpt template.
"""

from abc import ABC, abstractmethod
from typing import Optional

from .config import AnalyzerConfig
from .llm_client import LLMClient, BaseLLMClient
from .schemas import SummaryResult
from .exceptions import SummarizationUnavailable
from .logger import get_module_logger

logger = get_module_logger("summarizer")


SYSTEM_PROMPT = (
    "Summarize the given web page concisely. "
    "Write the summary as 3-5 bullet points covering the most important points."
)

USER_PROMPT = """Summarize the following web page:

Title: {title}
URL: {url}

Content:
{excerpt}"""


class BaseSummarizer(ABC):
    """Produces an optional summary of one page."""

    @abstractmethod
    def summarize(self, title: str, url: str, excerpt: str) -> SummaryResult:
        pass


class ExcerptSummarizer(BaseSummarizer):
    """No model available: the excerpt is all there is."""

    def summarize(self, title: str, url: str, excerpt: str) -> SummaryResult:
        return SummaryResult(summary=None, ai_generated=False)


class LLMSummarizer(BaseSummarizer):
    """Summaries from a language model."""

    def __init__(self, llm_client: BaseLLMClient):
        self.llm_client = llm_client

    def summarize(self, title: str, url: str, excerpt: str) -> SummaryResult:
        prompt = USER_PROMPT.format(title=title, url=url, excerpt=excerpt)

        try:
            summary = self.llm_client.complete(prompt=prompt, system_prompt=SYSTEM_PROMPT)
        except SummarizationUnavailable as e:
            logger.warning(f"Summarization unavailable for {url}: {e.message}")
            return SummaryResult(summary=None, ai_generated=False)

        if not summary or not summary.strip():
            logger.warning(f"Empty summary returned for {url}")
            return SummaryResult(summary=None, ai_generated=False)

        return SummaryResult(summary=summary, ai_generated=True)


def create_summarizer(config: Optional[AnalyzerConfig] = None) -> BaseSummarizer:
    """
    Pick the summarizer strategy for a config.

    Returns an LLMSummarizer when the selected provider has a credential and
    its client can be built, an ExcerptSummarizer otherwise.
    """
    if config is None or not config.credential:
        logger.info("No LLM credential configured, summaries disabled")
        return ExcerptSummarizer()

    try:
        client = LLMClient.create(
            provider=config.llm_provider,
            api_key=config.credential,
            model=config.llm_model,
            timeout=config.llm_timeout
        )
    except SummarizationUnavailable as e:
        logger.warning(f"LLM client unavailable, summaries disabled: {e.message}")
        return ExcerptSummarizer()

    return LLMSummarizer(client)
