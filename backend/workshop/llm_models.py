"""
LLM Model Configuration

This file defines the models the evaluator can be pointed at (EVALUATOR_MODEL).
To add a new model, add a new entry to the MODELS dictionary.

Each model configuration includes:
- id: Unique identifier for the model (the value used in EVALUATOR_MODEL)
- label: Display name
- provider: The provider name (must match a registered provider in services/providers/registry.py)
- model_name: Identifier passed to the provider (LiteLLM routing string or OpenAI model name)
- max_tokens_param: Parameter name for max tokens ('max_completion_tokens' or 'max_tokens')
- default_temperature: Default temperature value
- default_max_tokens: Default max tokens value
- supports_structured_output: Whether the model accepts a JSON schema response_format
- requires_api_key_env: Environment variable holding the API key
- extra_params: Optional dict of model-specific parameters to pass to the provider
"""

import os
from typing import Dict, Any, Optional
from dataclasses import dataclass


@dataclass
class ModelConfig:
    """Configuration for an LLM model"""
    id: str
    label: str
    provider: str
    model_name: str
    max_tokens_param: str = "max_tokens"  # 'max_completion_tokens' or 'max_tokens'
    default_temperature: float = 0.3
    default_max_tokens: int = 4000
    supports_structured_output: bool = True
    requires_api_key_env: Optional[str] = None
    extra_params: Optional[Dict[str, Any]] = None  # Model-specific parameters


MODELS: Dict[str, ModelConfig] = {
    "claude-sonnet-4": ModelConfig(
        id="claude-sonnet-4",
        label="Claude Sonnet 4",
        provider="litellm",
        model_name="anthropic/claude-sonnet-4-20250514",
        requires_api_key_env="ANTHROPIC_API_KEY",
    ),
    "claude-3-5-haiku": ModelConfig(
        id="claude-3-5-haiku",
        label="Claude 3.5 Haiku",
        provider="litellm",
        model_name="anthropic/claude-3-5-haiku-20241022",
        requires_api_key_env="ANTHROPIC_API_KEY",
    ),
    "gpt-4o": ModelConfig(
        id="gpt-4o",
        label="GPT-4o",
        provider="openai",
        model_name="gpt-4o",
        requires_api_key_env="OPENAI_API_KEY",
    ),
    "gpt-4o-mini": ModelConfig(
        id="gpt-4o-mini",
        label="GPT-4o Mini",
        provider="openai",
        model_name="gpt-4o-mini",
        requires_api_key_env="OPENAI_API_KEY",
    ),
    "gpt-5-mini": ModelConfig(
        id="gpt-5-mini",
        label="GPT-5 Mini",
        provider="openai",
        model_name="gpt-5-mini",
        max_tokens_param="max_completion_tokens",
        default_temperature=1.0,
        requires_api_key_env="OPENAI_API_KEY",
    ),
}


def get_model_config(model_id: str) -> Optional[ModelConfig]:
    """Get configuration for a specific model"""
    return MODELS.get(model_id)


def has_api_key(model_id: str) -> bool:
    """Whether the API key a model needs is present in the environment"""
    config = get_model_config(model_id)
    if config is None:
        return False
    if not config.requires_api_key_env:
        return True
    return bool(os.getenv(config.requires_api_key_env))


