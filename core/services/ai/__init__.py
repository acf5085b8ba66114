"""
AI service layer.

Provides the OpenAI chat completion provider behind the /api/openai proxy.
"""

from .openai_provider import OpenAIProvider, get_openai_provider
from .schemas import ProviderResponse

__all__ = ['OpenAIProvider', 'ProviderResponse', 'get_openai_provider']
