"""
Views for the Learning Trail service.

Endpoints:
- GET  /health            liveness probe
- POST /api/generate-pdf  render a Learning Trail PDF
- POST /api/openai        pass-through to the OpenAI chat completion API
"""
import json
import logging
from functools import lru_cache

from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_POST, require_safe

from core.printing import PdfRenderService, RenderRequest, pdf_response
from core.services.ai import get_openai_provider
from core.services.config import get_openai_config
from core.services.exceptions import InvalidRenderRequest

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def get_render_service():
    """
    Process-wide render service.

    Shared so the optional concurrency cap applies across requests; the
    service itself keeps no per-request state.
    """
    return PdfRenderService()


def _parse_json_object(request):
    """
    Decode the request body as a JSON object.

    Returns:
        dict, or None if the body is not a JSON object
    """
    try:
        data = json.loads(request.body or b'{}')
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return data if isinstance(data, dict) else None


@require_safe
def health(request):
    """
    GET|HEAD /health

    Returns:
        200: {"status": "OK", "timestamp": "<ISO-8601>"}
    """
    timestamp = timezone.now().isoformat(timespec='milliseconds').replace('+00:00', 'Z')
    return JsonResponse({'status': 'OK', 'timestamp': timestamp})


@require_POST
async def generate_pdf(request):
    """
    POST /api/generate-pdf

    Expects JSON payload:
    {
        "kidName": "Asha",
        "kidAge": 7,
        "kidGender": "F" (optional),
        "poppedCategories": ["Space", "Animals"] (optional),
        "learningContent": "**Read** a book\\n\\nCount to 10",
        "theme": "Science" (optional)
    }

    Returns:
        200: PDF attachment
        400: Missing required fields
        500: Rendering failed
    """
    payload = _parse_json_object(request)
    if payload is None:
        return JsonResponse({'error': 'Invalid JSON body'}, status=400)

    try:
        render_request = RenderRequest.from_payload(payload)
    except InvalidRenderRequest as e:
        return JsonResponse({'error': str(e)}, status=400)

    try:
        result = await get_render_service().render(render_request)
    except Exception as e:
        logger.error(f"PDF generation error: {e}", exc_info=True)
        return JsonResponse(
            {'error': 'Failed to generate PDF', 'details': str(e)},
            status=500
        )

    return pdf_response(result)


@require_POST
async def openai_proxy(request):
    """
    POST /api/openai

    Expects JSON payload:
    {
        "messages": [{"role": "user", "content": "..."}],
        "model": "gpt-4o-mini-2024-07-18" (optional)
    }

    Returns:
        200: Upstream chat completion JSON, unchanged
        400: messages missing or not an array
        500: Upstream or configuration failure
    """
    payload = _parse_json_object(request) or {}
    messages = payload.get('messages')

    if not isinstance(messages, list):
        return JsonResponse(
            {'error': 'Invalid request: messages array is required'},
            status=400
        )

    try:
        config = get_openai_config()
        provider = get_openai_provider(config)
        response = await provider.chat(
            messages,
            model_id=payload.get('model') or config.default_model,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
        )
    except Exception as e:
        logger.error(f"OpenAI API error: {e}", exc_info=True)
        return JsonResponse(
            {'error': 'Failed to process request', 'details': str(e)},
            status=500
        )

    return JsonResponse(response.raw, safe=False)
