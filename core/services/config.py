"""
Core configuration service for the Learning Trail service.

This module provides a centralized configuration layer that:
- Reads the LEARNING_TRAIL settings dict with defaults
- Returns typed configuration objects per service
- Raises ServiceNotConfigured when required secrets are missing

The render pipeline and the chat proxy should use this module to access
their configuration rather than reading settings directly.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from django.conf import settings

from .exceptions import ServiceNotConfigured


DEFAULT_FONT_STYLESHEET_URL = (
    'https://fonts.googleapis.com/css2?family=Comic+Neue:wght@300;400;700&display=swap'
)
DEFAULT_OPENAI_MODEL = 'gpt-4o-mini-2024-07-18'


@dataclass(frozen=True)
class RenderConfig:
    """Configuration of the PDF render pipeline."""
    browser_executable: Optional[str] = None
    render_timeout: Optional[float] = 60.0
    max_concurrent_renders: Optional[int] = None
    escape_user_content: bool = False
    font_stylesheet_url: str = DEFAULT_FONT_STYLESHEET_URL


@dataclass(frozen=True)
class OpenAIConfig:
    """Configuration of the OpenAI chat proxy."""
    api_key: str
    base_url: Optional[str] = None
    default_model: str = DEFAULT_OPENAI_MODEL
    max_tokens: int = 2000
    temperature: float = 0.7
    timeout: float = 60.0


@dataclass(frozen=True)
class CorsConfig:
    """Cross-origin policy."""
    allowed_origins: List[str] = field(default_factory=list)


def _options() -> dict:
    """Return the LEARNING_TRAIL settings dict (empty if unset)."""
    return getattr(settings, 'LEARNING_TRAIL', None) or {}


def get_render_config() -> RenderConfig:
    """
    Get the render pipeline configuration.

    Returns:
        RenderConfig built from settings.LEARNING_TRAIL
    """
    options = _options()
    return RenderConfig(
        browser_executable=options.get('BROWSER_EXECUTABLE') or None,
        render_timeout=options.get('RENDER_TIMEOUT', 60.0) or None,
        max_concurrent_renders=options.get('MAX_CONCURRENT_RENDERS'),
        escape_user_content=bool(options.get('ESCAPE_USER_CONTENT', False)),
        font_stylesheet_url=options.get('FONT_STYLESHEET_URL') or DEFAULT_FONT_STYLESHEET_URL,
    )


def get_openai_config() -> OpenAIConfig:
    """
    Get the OpenAI configuration.

    Returns:
        OpenAIConfig built from settings.LEARNING_TRAIL

    Raises:
        ServiceNotConfigured: If no API key is configured
    """
    options = _options()
    api_key = options.get('OPENAI_API_KEY')
    if not api_key:
        raise ServiceNotConfigured("OpenAI API key is not configured")

    return OpenAIConfig(
        api_key=api_key,
        base_url=options.get('OPENAI_BASE_URL') or None,
        default_model=options.get('OPENAI_DEFAULT_MODEL') or DEFAULT_OPENAI_MODEL,
        max_tokens=options.get('OPENAI_MAX_TOKENS', 2000),
        temperature=options.get('OPENAI_TEMPERATURE', 0.7),
        timeout=options.get('OPENAI_TIMEOUT', 60.0),
    )


def get_cors_config() -> CorsConfig:
    """
    Get the cross-origin policy.

    An empty allow-list disables cross-origin access entirely.
    """
    return CorsConfig(allowed_origins=list(_options().get('CORS_ALLOWED_ORIGINS') or []))
