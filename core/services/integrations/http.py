"""
HTTP status mapping for integration services.

Logging Guidelines:
- Log status code + reason only (no tokens/keys)
- Never log Authorization headers or API keys
"""

import logging
from typing import Optional

from .errors import (
    IntegrationAuthError,
    IntegrationRateLimited,
    IntegrationTemporaryError,
    IntegrationPermanentError,
)

logger = logging.getLogger(__name__)


def parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Parse a Retry-After header value given in seconds."""
    try:
        return int(value) if value else None
    except (ValueError, TypeError):
        return None


def raise_for_status(status: int, message: str, retry_after: Optional[str] = None) -> None:
    """
    Map an upstream HTTP status to an integration exception.
    
    Mapping:
    - 401/403 → IntegrationAuthError
    - 429 → IntegrationRateLimited (with retry_after)
    - 5xx → IntegrationTemporaryError
    - other 4xx → IntegrationPermanentError
    
    Args:
        status: HTTP status code returned by the upstream service
        message: Error message (no secrets!)
        retry_after: Raw Retry-After header, if any
        
    Raises:
        IntegrationError subclass for any status >= 400
    """
    if status < 400:
        return
    
    logger.warning(f"Upstream request failed with HTTP {status}")
    
    if status in (401, 403):
        raise IntegrationAuthError(message, status_code=status)
    
    if status == 429:
        raise IntegrationRateLimited(
            message,
            status_code=status,
            retry_after=parse_retry_after(retry_after),
        )
    
    if status >= 500:
        raise IntegrationTemporaryError(message, status_code=status)
    
    raise IntegrationPermanentError(message, status_code=status)
