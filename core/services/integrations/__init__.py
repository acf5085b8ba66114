"""
Integration Base Package

Provides the error hierarchy and HTTP status mapping shared by external
service integrations (the OpenAI chat proxy).

Key Components:
- errors.py: Integration-specific exceptions
- http.py: HTTP status to exception mapping
"""

from .errors import (
    IntegrationError,
    IntegrationAuthError,
    IntegrationRateLimited,
    IntegrationTemporaryError,
    IntegrationPermanentError,
)
from .http import raise_for_status

__all__ = [
    # Exceptions
    'IntegrationError',
    'IntegrationAuthError',
    'IntegrationRateLimited',
    'IntegrationTemporaryError',
    'IntegrationPermanentError',
    # Helpers
    'raise_for_status',
]
