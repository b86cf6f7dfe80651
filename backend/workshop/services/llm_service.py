"""LLM service: routes completions to the provider configured for each model"""
import json
import re
from typing import Dict, Any, Optional

from workshop.llm_models import get_model_config, ModelConfig
from workshop.services.providers import get_provider, LLMProvider, CompletionResult


class LLMService:
    """Service for interacting with LLM providers"""

    def __init__(self):
        self._providers: Dict[str, LLMProvider] = {}

    def render_prompt(self, prompt_template: str, values: Dict[str, Any]) -> str:
        """
        Render a prompt template by replacing {{variable}} placeholders with actual values.
        Unknown variables render as empty strings.
        """
        def replace_var(match):
            return str(values.get(match.group(1).strip(), ""))

        return re.sub(r'\{\{([^}]+)\}\}', replace_var, prompt_template)

    def get_provider_for(self, model_config: ModelConfig) -> LLMProvider:
        """Return the (cached) provider instance serving a model"""
        provider = self._providers.get(model_config.provider)
        if provider is None:
            provider = get_provider(model_config.provider)
            self._providers[model_config.provider] = provider
        return provider

    async def completion(
        self,
        prompt: str,
        model: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        response_format: Optional[Dict[str, Any]] = None,
    ) -> CompletionResult:
        """
        Get a completion for a registered model.

        Args:
            prompt: The prompt to send to the LLM
            model: Model id from llm_models.MODELS
            temperature: Temperature setting (defaults to the model's default)
            max_tokens: Maximum tokens to generate (defaults to the model's default)
            response_format: Optional structured output format

        Returns:
            The response text and token usage

        Raises:
            ValueError: If the model is not registered
        """
        model_config = get_model_config(model)
        if model_config is None:
            raise ValueError(f"Model '{model}' is not configured")

        final_temperature = temperature if temperature is not None else model_config.default_temperature
        final_max_tokens = max_tokens if max_tokens is not None else model_config.default_max_tokens

        if response_format is not None and not model_config.supports_structured_output:
            response_format = None

        provider = self.get_provider_for(model_config)
        return await provider.completion(
            prompt,
            model=model_config.model_name,
            temperature=final_temperature,
            max_tokens=final_max_tokens,
            response_format=response_format,
            max_tokens_param=model_config.max_tokens_param,
            **(model_config.extra_params or {}),
        )

    def parse_json_object(self, output: str) -> Dict[str, Any]:
        """
        Parse a JSON object from LLM output, tolerating code fences or prose around it.

        Raises:
            ValueError: If no JSON object can be found
        """
        text = (output or "").strip()
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            match = re.search(r"\{[\s\S]*\}", text)
            if not match:
                raise ValueError(
                    f"No JSON object found in LLM output: {text[:200]}..." if len(text) > 200
                    else f"No JSON object found in LLM output: {text}"
                )
            try:
                data = json.loads(match.group(0))
            except json.JSONDecodeError as e:
                raise ValueError(f"Malformed JSON in LLM output: {e}")

        if not isinstance(data, dict):
            raise ValueError("LLM output is JSON but not an object")
        return data


# Global instance
llm_service = LLMService()
