# LLM Provider implementations

from workshop.services.providers.base import LLMProvider, CompletionResult
from workshop.services.providers.registry import get_provider
from workshop.services.providers.litellm_provider import LiteLLMProvider
from workshop.services.providers.openai_provider import OpenAIProvider

__all__ = [
    "LLMProvider",
    "CompletionResult",
    "get_provider",
    "LiteLLMProvider",
    "OpenAIProvider",
]
