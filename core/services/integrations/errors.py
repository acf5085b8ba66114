"""
Integration-specific exceptions for consistent error handling.

These exceptions provide a unified way to handle errors from external
services (currently the OpenAI chat completion API).

Design principles:
- Never include secrets or tokens in exception messages
- Map HTTP status codes consistently
- Distinguish between temporary and permanent failures
"""


class IntegrationError(Exception):
    """
    Base exception for all integration-related errors.
    
    All integration exceptions inherit from this class, allowing
    consumers to catch all integration errors with a single except clause.
    
    Attributes:
        status_code: Upstream HTTP status, if the failure came with one
    """
    
    def __init__(self, message="Integration error", status_code=None):
        super().__init__(message)
        self.status_code = status_code


class IntegrationAuthError(IntegrationError):
    """
    Raised when authentication with external service fails.
    
    Typically corresponds to HTTP 401/403 errors.
    
    Example:
        Invalid API key, insufficient permissions.
    """
    pass


class IntegrationRateLimited(IntegrationError):
    """
    Raised when rate limit is exceeded.
    
    Corresponds to HTTP 429 errors.
    
    Attributes:
        retry_after: Optional seconds the upstream asked us to wait
    """
    
    def __init__(self, message="Rate limit exceeded", status_code=429, retry_after=None):
        super().__init__(message, status_code=status_code)
        self.retry_after = retry_after


class IntegrationTemporaryError(IntegrationError):
    """
    Raised for temporary errors.
    
    Typically corresponds to:
    - HTTP 5xx server errors
    - Network timeouts
    - Connection errors
    """
    pass


class IntegrationPermanentError(IntegrationError):
    """
    Raised for permanent errors.
    
    Typically corresponds to HTTP 4xx client errors (except 429).
    
    Example:
        Invalid request format, unknown model.
    """
    pass
