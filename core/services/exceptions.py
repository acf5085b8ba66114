"""
Service-layer exceptions for consistent error handling across the service.

Views translate these into JSON error responses; nothing here is retried.
"""


class ServiceError(Exception):
    """Base exception for all service-related errors."""
    pass


class ServiceNotConfigured(ServiceError):
    """
    Raised when a service is used but its configuration is incomplete or missing.
    
    Example:
        The chat proxy is called but no OpenAI API key is set.
    """
    pass


class InvalidRenderRequest(ServiceError):
    """
    Raised when a PDF request payload is missing required data.
    
    Always raised before any rendering resource is acquired.
    """
    pass


class RenderError(ServiceError):
    """
    Raised when the rendering engine fails to produce a PDF.
    
    Covers engine launch failures, content load and font wait timeouts,
    capture faults and an expired render deadline. The engine instance has
    already been torn down when this reaches the caller.
    """
    pass
