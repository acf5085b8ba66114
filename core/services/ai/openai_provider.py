"""
OpenAI provider implementation.
"""

import logging
from typing import List, Dict, Any, Optional

import openai

from core.services.config import OpenAIConfig, get_openai_config
from core.services.integrations import IntegrationTemporaryError, raise_for_status
from .base_provider import BaseProvider
from .schemas import ProviderResponse


logger = logging.getLogger(__name__)


class OpenAIProvider(BaseProvider):
    """OpenAI API provider implementation."""

    def __init__(self, api_key: str, **kwargs):
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            **kwargs: Additional config (base_url, timeout)
        """
        super().__init__(api_key, **kwargs)

        # Single attempt per request; failures surface to the caller
        client_kwargs = {
            'api_key': self.api_key,
            'max_retries': 0,
        }

        if self.config.get('base_url'):
            client_kwargs['base_url'] = self.config['base_url']

        if self.config.get('timeout'):
            client_kwargs['timeout'] = self.config['timeout']

        self.client = openai.AsyncOpenAI(**client_kwargs)

    @property
    def provider_type(self) -> str:
        """Return provider type."""
        return 'OpenAI'

    async def chat(
        self,
        messages: List[Dict[str, Any]],
        model_id: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> ProviderResponse:
        """
        Execute OpenAI chat completion.

        Args:
            messages: List of message dicts with 'role' and 'content'
            model_id: OpenAI model ID (e.g., 'gpt-4o-mini-2024-07-18')
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            **kwargs: Additional OpenAI parameters

        Returns:
            ProviderResponse whose raw field is the upstream JSON body

        Raises:
            IntegrationError: Mapped from the upstream status or transport failure
        """
        request_params = {
            'model': model_id,
            'messages': messages,
        }

        if temperature is not None:
            request_params['temperature'] = temperature

        if max_tokens is not None:
            request_params['max_tokens'] = max_tokens

        request_params.update(kwargs)

        logger.debug(f"Requesting OpenAI chat completion with model {model_id}")

        try:
            raw_response = await self.client.chat.completions.with_raw_response.create(
                **request_params
            )
        except openai.APIStatusError as e:
            reason = e.response.reason_phrase if e.response is not None else ''
            raise_for_status(
                e.status_code,
                f"OpenAI API error: {e.status_code} {reason}".strip(),
                retry_after=e.response.headers.get('retry-after') if e.response is not None else None,
            )
            raise
        except openai.APIConnectionError as e:
            logger.warning(f"OpenAI API connection failed: {e}")
            raise IntegrationTemporaryError(f"OpenAI API connection failed: {e}") from e

        body = raw_response.http_response.json()
        completion = raw_response.parse()

        text = completion.choices[0].message.content if completion.choices else None
        input_tokens = completion.usage.prompt_tokens if completion.usage else None
        output_tokens = completion.usage.completion_tokens if completion.usage else None

        return ProviderResponse(
            text=text,
            raw=body,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            model=completion.model or model_id,
        )


def get_openai_provider(config: Optional[OpenAIConfig] = None) -> OpenAIProvider:
    """
    Build an OpenAI provider from settings.

    Args:
        config: Already loaded configuration (loaded from settings if None)

    Raises:
        ServiceNotConfigured: If no API key is configured
    """
    config = config or get_openai_config()
    return OpenAIProvider(
        config.api_key,
        base_url=config.base_url,
        timeout=config.timeout,
    )
