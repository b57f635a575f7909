"""
Configuration for the URL Analyzer.

The environment is read once, in AnalyzerConfig.from_env(); the resulting
object is passed into URLAnalyzer explicitly so the pipeline itself never
looks at os.environ.
"""

import os
from typing import Optional

from pydantic import BaseModel, Field

from .llm_client import LLMProvider
from .logger import get_module_logger

logger = get_module_logger("config")


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


class AnalyzerConfig(BaseModel):
    """Settings for one URLAnalyzer instance."""
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    llm_provider: LLMProvider = LLMProvider.OPENAI
    llm_model: Optional[str] = None             # None → provider default

    fetch_timeout: float = Field(default=10.0, gt=0)
    llm_timeout: float = Field(default=15.0, gt=0)

    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = "ja,en;q=0.9"

    @property
    def credential(self) -> Optional[str]:
        """API key of the selected provider, if any."""
        if self.llm_provider == LLMProvider.ANTHROPIC:
            return self.anthropic_api_key
        return self.openai_api_key

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "AnalyzerConfig":
        """
        Build a config from environment variables.

        Recognized: OPENAI_API_KEY, ANTHROPIC_API_KEY, LLM_PROVIDER, LLM_MODEL,
        URL_ANALYZER_FETCH_TIMEOUT, URL_ANALYZER_LLM_TIMEOUT.
        """
        env = os.environ if environ is None else environ

        provider_str = env.get("LLM_PROVIDER", "openai").lower()
        try:
            provider = LLMProvider(provider_str)
        except ValueError:
            logger.warning(f"Unknown LLM_PROVIDER '{provider_str}', defaulting to openai")
            provider = LLMProvider.OPENAI

        kwargs = {
            "openai_api_key": env.get("OPENAI_API_KEY") or None,
            "anthropic_api_key": env.get("ANTHROPIC_API_KEY") or None,
            "llm_provider": provider,
            "llm_model": env.get("LLM_MODEL") or None,
        }
        if env.get("URL_ANALYZER_FETCH_TIMEOUT"):
            kwargs["fetch_timeout"] = float(env["URL_ANALYZER_FETCH_TIMEOUT"])
        if env.get("URL_ANALYZER_LLM_TIMEOUT"):
            kwargs["llm_timeout"] = float(env["URL_ANALYZER_LLM_TIMEOUT"])

        return cls(**kwargs)
