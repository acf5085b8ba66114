"""
Custom middleware for the Learning Trail service.
"""
import logging

from django.http import HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

from core.services.config import get_cors_config

logger = logging.getLogger(__name__)


class CorsOriginMiddleware(MiddlewareMixin):
    """
    Middleware that applies the cross-origin policy.

    Requests from origins on the configured allow-list receive the
    Access-Control-Allow-Origin header and preflight requests are answered
    directly. In production the allow-list is empty (the frontend is served
    from the same domain), so no cross-origin headers are ever sent.

    This must be placed first in the MIDDLEWARE setting so preflight
    requests never reach the views.
    """

    ALLOWED_METHODS = 'GET, HEAD, PUT, PATCH, POST, DELETE'

    def _allowed_origin(self, request):
        """
        Return the request origin if it is on the allow-list, else None.
        """
        origin = request.headers.get('Origin')
        if origin and origin in get_cors_config().allowed_origins:
            return origin
        return None

    def process_request(self, request):
        """Answer CORS preflight requests from allowed origins."""
        if request.method != 'OPTIONS' or 'Access-Control-Request-Method' not in request.headers:
            return None

        if self._allowed_origin(request) is None:
            return None

        response = HttpResponse(status=204)
        response['Access-Control-Allow-Methods'] = self.ALLOWED_METHODS
        requested_headers = request.headers.get('Access-Control-Request-Headers')
        if requested_headers:
            response['Access-Control-Allow-Headers'] = requested_headers
        response['Content-Length'] = '0'
        return response

    def process_response(self, request, response):
        """Add Access-Control-Allow-Origin for allowed origins."""
        origin = self._allowed_origin(request)
        if origin is not None:
            response['Access-Control-Allow-Origin'] = origin
            response['Vary'] = 'Origin'
        return response


class JsonExceptionMiddleware(MiddlewareMixin):
    """
    Catch-all error handler.

    Any exception escaping a view is logged and answered with a generic
    JSON 500, so a single faulty request never takes the process down.
    """

    def process_exception(self, request, exception):
        logger.error(
            f"Unhandled error on {request.method} {request.path}: {exception}",
            exc_info=True
        )
        return JsonResponse({'error': 'Something went wrong!'}, status=500)
