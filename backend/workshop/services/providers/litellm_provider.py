"""
LiteLLM Provider Implementation

Routes a completion to any LiteLLM-supported backend
(e.g. 'anthropic/claude-sonnet-4-20250514', 'azure/gpt-4', 'gemini/gemini-pro').
API keys are read by LiteLLM from the usual environment variables.
"""

from typing import Optional, Dict, Any
from litellm import acompletion

from workshop.services.providers.base import LLMProvider, CompletionResult, usage_counts


class LiteLLMProvider(LLMProvider):
    """Provider backed by LiteLLM's unified completion API"""

    def _initialize_client(self, **kwargs) -> None:
        # LiteLLM is a module-level API; there is no client object to hold
        self._client = None

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
        api_params: Dict[str, Any] = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
            max_tokens_param: max_tokens,
        }
        if response_format is not None:
            api_params["response_format"] = response_format
        if self.api_key:
            api_params["api_key"] = self.api_key
        if self.base_url:
            api_params["api_base"] = self.base_url
        api_params.update(kwargs)

        response = await acompletion(**api_params)

        if not response or not response.choices:
            raise Exception("No response from LLM")

        choice = response.choices[0]
        content = choice.message.content if choice.message and choice.message.content else ""

        input_tokens, output_tokens = usage_counts(getattr(response, "usage", None))
        return CompletionResult(text=content, input_tokens=input_tokens, output_tokens=output_tokens)
