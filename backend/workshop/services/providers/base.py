"""
Base LLM Provider Interface

This module defines the standard interface that all LLM providers must implement.
To add a new provider, create a class that inherits from LLMProvider and implements
the completion method.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Any, Optional


@dataclass
class CompletionResult:
    """Text of a completion plus the token usage the provider reported"""
    text: str
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


class LLMProvider(ABC):
    """
    Abstract base class for LLM providers.

    All providers must implement the completion method with this signature.
    The provider is responsible for:
    - Initializing its own client (if needed)
    - Handling provider-specific API calls
    - Converting responses to a CompletionResult
    """

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None, **kwargs):
        """
        Initialize the provider.

        Args:
            api_key: API key for the provider (if required)
            base_url: Base URL for the provider API (if different from default)
            **kwargs: Additional provider-specific configuration
        """
        self.api_key = api_key
        self.base_url = base_url
        self._client = None
        self._initialize_client(**kwargs)

    @abstractmethod
    def _initialize_client(self, **kwargs) -> None:
        """
        Initialize the provider's client.
        This is called during __init__.
        """
        pass

    @abstractmethod
    async def completion(
        self,
        prompt: str,
        model: str,
        temperature: float,
        max_tokens: int,
        response_format: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> CompletionResult:
        """
        Get a completion from the LLM provider.

        Args:
            prompt: The prompt text to send to the LLM
            model: The model identifier (provider-specific)
            temperature: Temperature setting
            max_tokens: Maximum tokens to generate
            response_format: Optional OpenAI-style response_format (e.g. a json_schema)
            **kwargs: Additional provider-specific parameters

        Returns:
            The response text and token usage

        Raises:
            Exception: If the API call fails or returns an error
        """
        pass


def usage_counts(usage: Any) -> tuple[int, int]:
    """Read (prompt_tokens, completion_tokens) from an OpenAI-style usage object"""
    if usage is None:
        return 0, 0
    input_tokens = getattr(usage, "prompt_tokens", None) or 0
    output_tokens = getattr(usage, "completion_tokens", None) or 0
    return int(input_tokens), int(output_tokens)
