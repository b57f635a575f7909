"""
LLM Client with OpenAI/Anthropic provider switch.

Uses the Factory pattern (LLMClient.create) to instantiate the right provider.
Each provider implements BaseLLMClient so the summarizer doesn't need to know
which LLM is behind the call.

Credentials are passed in explicitly; nothing here reads the environment.
Every request has a timeout and the SDK's own retries are disabled.
"""

from abc import ABC, abstractmethod
from typing import Optional
from enum import Enum

from .logger import get_module_logger
from .exceptions import LLMClientError

logger = get_module_logger("llm_client")


class LLMProvider(Enum):
    """Supported LLM providers."""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class BaseLLMClient(ABC):
    """Abstract base class for LLM clients."""

    @abstractmethod
    def complete(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        """
        Send a prompt to the LLM and return the text of the first choice.

        Args:
            prompt: The user prompt
            system_prompt: Optional system prompt

        Returns:
            The LLM's response text

        Raises:
            LLMClientError: on any provider or transport failure
        """
        pass


class OpenAIClient(BaseLLMClient):
    """OpenAI chat completions client."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4o-mini",
        timeout: float = 15.0,
        max_tokens: int = 500,
        temperature: float = 0.3
    ):
        if not api_key:
            raise LLMClientError("OpenAI API key not provided", provider="openai")
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

        # Lazy import: only import the openai SDK when this provider is actually used.
        try:
            from openai import OpenAI
        except ImportError:
            raise LLMClientError(
                "openai package not installed. Run: pip install openai",
                provider="openai"
            )
        self.client = OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    def complete(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        """Send prompt to OpenAI and return response."""
        messages = []

        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})

        messages.append({"role": "user", "content": prompt})

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=self.max_tokens,
                temperature=self.temperature
            )
        except Exception as e:
            logger.error(f"OpenAI API error: {e}")
            raise LLMClientError(
                f"OpenAI API call failed: {str(e)}",
                provider="openai",
                details={"error": str(e)}
            )

        if not response.choices:
            raise LLMClientError("OpenAI returned no choices", provider="openai")
        return response.choices[0].message.content or ""


class AnthropicClient(BaseLLMClient):
    """Anthropic messages client."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "claude-3-5-haiku-latest",
        timeout: float = 15.0,
        max_tokens: int = 500,
        temperature: float = 0.3
    ):
        if not api_key:
            raise LLMClientError("Anthropic API key not provided", provider="anthropic")
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

        # Lazy import: same rationale as OpenAIClient.
        try:
            import anthropic
        except ImportError:
            raise LLMClientError(
                "anthropic package not installed. Run: pip install anthropic",
                provider="anthropic"
            )
        self.client = anthropic.Anthropic(api_key=api_key, timeout=timeout, max_retries=0)

    def complete(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        """Send prompt to Anthropic and return response."""
        kwargs = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "messages": [{"role": "user", "content": prompt}]
        }

        # Anthropic takes the system instruction as a separate field, not a message
        if system_prompt:
            kwargs["system"] = system_prompt

        try:
            response = self.client.messages.create(**kwargs)
        except Exception as e:
            logger.error(f"Anthropic API error: {e}")
            raise LLMClientError(
                f"Anthropic API call failed: {str(e)}",
                provider="anthropic",
                details={"error": str(e)}
            )

        if not response.content:
            raise LLMClientError("Anthropic returned no content", provider="anthropic")
        return getattr(response.content[0], "text", "") or ""


class LLMClient:
    """
    Factory class for creating LLM clients with provider switch.

    Usage:
        client = LLMClient.create(provider=LLMProvider.OPENAI, api_key="sk-...")
        client = LLMClient.create(provider=LLMProvider.ANTHROPIC, api_key="...", timeout=10)
    """

    @staticmethod
    def create(
        provider: LLMProvider = LLMProvider.OPENAI,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: float = 15.0
    ) -> BaseLLMClient:
        """
        Create an LLM client for the specified provider.

        Args:
            provider: LLM provider
            api_key: API key for that provider
            model: Model name (defaults to provider-specific default)
            timeout: Per-request timeout in seconds

        Returns:
            Configured LLM client

        Raises:
            LLMClientError: missing key, missing SDK, or unknown provider
        """
        logger.info(f"Creating LLM client for provider: {provider.value}")

        kwargs = {"api_key": api_key, "timeout": timeout}
        if model:
            kwargs["model"] = model

        if provider == LLMProvider.OPENAI:
            return OpenAIClient(**kwargs)

        elif provider == LLMProvider.ANTHROPIC:
            return AnthropicClient(**kwargs)

        else:
            raise LLMClientError(
                f"Unsupported provider: {provider}",
                provider=str(provider)
            )
