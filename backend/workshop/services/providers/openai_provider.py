"""
OpenAI Provider Implementation

This provider handles all OpenAI-compatible API calls.
"""

import os
from typing import Optional, Dict, Any
from openai import AsyncOpenAI

from workshop.services.providers.base import LLMProvider, CompletionResult, usage_counts


class OpenAIProvider(LLMProvider):
    """Provider for OpenAI and OpenAI-compatible APIs"""

    def _initialize_client(self, **kwargs) -> None:
        """Initialize the OpenAI client"""
        api_key = self.api_key or os.getenv("OPENAI_API_KEY")
        base_url = self.base_url or os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")

        if not api_key:
            # Allow initialization without API key for now
            # Will fail when actually calling the API
            api_key = "not-set"

        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
        )

    async def completion(
        self,
        prompt: str,
        model: str,
        temperature: float,
        max_tokens: int,
        response_format: Optional[Dict[str, Any]] = None,
        max_tokens_param: str = "max_tokens",
        **kwargs
    ) -> CompletionResult:
        """
        Get a completion from OpenAI.

        Args:
            prompt: The prompt text
            model: Model identifier (e.g., 'gpt-4o-mini')
            temperature: Temperature setting
            max_tokens: Maximum tokens to generate
            response_format: Optional structured output format
            max_tokens_param: Parameter name for max tokens ('max_tokens' or 'max_completion_tokens')
            **kwargs: Additional OpenAI-specific parameters

        Returns:
            The response text and token usage
        """
        if not self._client:
            raise ValueError("OpenAI client not initialized")

        api_params: Dict[str, Any] = {
            "model": model,
            "messages": [
                {"role": "user", "content": prompt}
            ],
            "temperature": temperature,
            "stream": False,
        }

        # Use the specified parameter name for max tokens
        api_params[max_tokens_param] = max_tokens

        if response_format is not None:
            api_params["response_format"] = response_format

        # Add any additional parameters
        api_params.update(kwargs)

        response = await self._client.chat.completions.create(**api_params)

        if not response.choices:
            raise Exception("No response from LLM")

        message = response.choices[0].message
        content = message.content or ""
        if not content.strip() and getattr(message, "refusal", None):
            content = str(message.refusal)

        input_tokens, output_tokens = usage_counts(response.usage)
        return CompletionResult(text=content, input_tokens=input_tokens, output_tokens=output_tokens)
