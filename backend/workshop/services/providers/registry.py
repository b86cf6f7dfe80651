"""Maps provider names used in llm_models.MODELS to provider classes"""

from typing import Dict, Type
from workshop.services.providers.base import LLMProvider
from workshop.services.providers.litellm_provider import LiteLLMProvider
from workshop.services.providers.openai_provider import OpenAIProvider


_PROVIDERS: Dict[str, Type[LLMProvider]] = {
    "litellm": LiteLLMProvider,
    "openai": OpenAIProvider,
}


def get_provider(name: str, **kwargs) -> LLMProvider:
    """
    Build a provider instance by name.

    Raises:
        ValueError: If the provider is not registered
    """
    if name not in _PROVIDERS:
        available = ", ".join(_PROVIDERS.keys())
        raise ValueError(f"Provider '{name}' not found. Available providers: {available}")
    return _PROVIDERS[name](**kwargs)
