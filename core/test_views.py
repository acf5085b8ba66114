"""
Tests for the Learning Trail HTTP endpoints.

Covers:
- Health check
- PDF generation (validation, success framing, rendering failures)
- OpenAI pass-through proxy
"""
import asyncio
import json
import re
import threading
from unittest.mock import AsyncMock, MagicMock, patch

from django.test import Client, SimpleTestCase, override_settings
import httpx
import respx

from core import views
from core.printing import IPdfRenderer, PdfRenderService
from core.services.exceptions import RenderError


FAKE_PDF = b'%PDF-1.4\n%fake learning trail\n%%EOF'

ASHA_PAYLOAD = {
    'kidName': 'Asha',
    'kidAge': 7,
    'kidGender': 'F',
    'poppedCategories': ['Space', 'Animals'],
    'learningContent': '**Read** a book\n\nCount to 10',
    'theme': 'Science',
}


def fake_async_playwright(pdf_bytes=FAKE_PDF):
    """Build a patched async_playwright factory and return (factory, browser)."""
    page = MagicMock()
    page.set_content = AsyncMock()
    page.evaluate = AsyncMock(return_value='loaded')
    page.pdf = AsyncMock(return_value=pdf_bytes)

    browser = MagicMock()
    browser.new_page = AsyncMock(return_value=page)
    browser.close = AsyncMock()

    playwright = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)

    driver = MagicMock()
    driver.__aenter__.return_value = playwright
    driver.__aexit__.return_value = False

    return MagicMock(return_value=driver), browser


class HealthViewTestCase(SimpleTestCase):
    """Test the health endpoint."""

    def test_health_ok(self):
        """Test status payload and ISO timestamp."""
        response = self.client.get('/health')

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['status'], 'OK')
        self.assertRegex(
            data['timestamp'],
            r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$'
        )

    def test_health_answers_head(self):
        """Test that HEAD is answered like GET."""
        response = self.client.head('/health')
        self.assertEqual(response.status_code, 200)

    def test_health_rejects_post(self):
        """Test that the probe is read-only."""
        response = self.client.post('/health')
        self.assertEqual(response.status_code, 405)


class GeneratePdfViewTestCase(SimpleTestCase):
    """Test the PDF generation endpoint."""

    def setUp(self):
        """Set up test fixtures."""
        views.get_render_service.cache_clear()

    def tearDown(self):
        """Drop the cached service so settings overrides do not leak."""
        views.get_render_service.cache_clear()

    def post(self, payload):
        return self.client.post(
            '/api/generate-pdf',
            data=json.dumps(payload),
            content_type='application/json',
        )

    def test_round_trip(self):
        """Test a full request with the engine mocked."""
        factory, browser = fake_async_playwright()

        with patch('core.printing.playwright_renderer.async_playwright', factory):
            response = self.post(ASHA_PAYLOAD)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'application/pdf')
        self.assertEqual(response['Cache-Control'], 'no-cache')

        disposition = response['Content-Disposition']
        match = re.match(r'^attachment; filename="(.+)"$', disposition)
        self.assertIsNotNone(match)
        self.assertTrue(match.group(1).startswith('Learning_Trail_Asha_'))
        self.assertRegex(match.group(1), r'_\d{4}-\d{2}-\d{2}\.pdf$')

        self.assertGreater(len(response.content), 0)
        self.assertEqual(response.content, FAKE_PDF)
        self.assertEqual(int(response['Content-Length']), len(response.content))

        browser.close.assert_awaited_once()

    def test_filename_is_sanitized(self):
        """Test that the learner name is sanitized in the filename."""
        factory, _ = fake_async_playwright()

        with patch('core.printing.playwright_renderer.async_playwright', factory):
            response = self.post({**ASHA_PAYLOAD, 'kidName': 'A&B!'})

        self.assertEqual(response.status_code, 200)
        self.assertIn('filename="Learning_Trail_A_B__', response['Content-Disposition'])

    def test_missing_fields_rejected_without_engine(self):
        """Test that invalid requests never launch the engine."""
        factory, _ = fake_async_playwright()
        payloads = [
            {key: value for key, value in ASHA_PAYLOAD.items() if key != 'kidName'},
            {key: value for key, value in ASHA_PAYLOAD.items() if key != 'learningContent'},
            {**ASHA_PAYLOAD, 'kidName': ''},
            {**ASHA_PAYLOAD, 'learningContent': ''},
        ]

        with patch('core.printing.playwright_renderer.async_playwright', factory):
            for payload in payloads:
                with self.subTest(payload=payload):
                    response = self.post(payload)

                    self.assertEqual(response.status_code, 400)
                    self.assertEqual(response.json(), {
                        'error': 'Missing required fields: kidName and learningContent are required'
                    })

        factory.assert_not_called()

    def test_invalid_json_rejected(self):
        """Test that a body that is not a JSON object is rejected."""
        response = self.client.post(
            '/api/generate-pdf',
            data='not json',
            content_type='application/json',
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Invalid JSON body'})

    def test_categories_must_be_array(self):
        """Test that a malformed category list is rejected."""
        response = self.post({**ASHA_PAYLOAD, 'poppedCategories': 'Space'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'poppedCategories must be an array'})

    def test_render_failure_returns_500(self):
        """Test that engine failures are reported with details."""
        factory, browser = fake_async_playwright()
        browser.new_page.side_effect = RuntimeError('Target page crashed')

        with patch('core.printing.playwright_renderer.async_playwright', factory):
            response = self.post(ASHA_PAYLOAD)

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {
            'error': 'Failed to generate PDF',
            'details': 'Target page crashed',
        })
        browser.close.assert_awaited_once()

    def test_service_error_returns_500(self):
        """Test that errors raised by the service are reported."""
        service = MagicMock()
        service.render = AsyncMock(side_effect=RenderError('PDF rendering timed out after 60s'))

        with patch('core.views.get_render_service', return_value=service):
            response = self.post(ASHA_PAYLOAD)

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()['details'], 'PDF rendering timed out after 60s')

    def test_get_not_allowed(self):
        """Test that only POST is accepted."""
        response = self.client.get('/api/generate-pdf')
        self.assertEqual(response.status_code, 405)


COMPLETIONS_URL = 'https://api.openai.com/v1/chat/completions'

COMPLETION_BODY = {
    'id': 'chatcmpl-abc',
    'object': 'chat.completion',
    'created': 1700000000,
    'model': 'gpt-4o-mini-2024-07-18',
    'choices': [
        {
            'index': 0,
            'message': {'role': 'assistant', 'content': 'Look for the moon tonight.'},
            'finish_reason': 'stop',
        }
    ],
    'usage': {'prompt_tokens': 5, 'completion_tokens': 7, 'total_tokens': 12},
}


@override_settings(LEARNING_TRAIL={'OPENAI_API_KEY': 'sk-test'})
class OpenAIProxyViewTestCase(SimpleTestCase):
    """Test the OpenAI pass-through endpoint."""

    def post(self, payload):
        return self.client.post(
            '/api/openai',
            data=json.dumps(payload),
            content_type='application/json',
        )

    def test_messages_required(self):
        """Test that messages must be an array."""
        for payload in ({}, {'messages': 'hello'}, {'messages': None}):
            with self.subTest(payload=payload):
                response = self.post(payload)

                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json(), {
                    'error': 'Invalid request: messages array is required'
                })

    @respx.mock
    def test_forwards_and_returns_upstream_json(self):
        """Test that the upstream body is returned verbatim."""
        route = respx.post(COMPLETIONS_URL).mock(
            return_value=httpx.Response(200, json=COMPLETION_BODY)
        )

        response = self.post({'messages': [{'role': 'user', 'content': 'Hi'}]})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), COMPLETION_BODY)

        sent = json.loads(route.calls.last.request.content)
        self.assertEqual(sent['model'], 'gpt-4o-mini-2024-07-18')
        self.assertEqual(sent['max_tokens'], 2000)
        self.assertEqual(sent['temperature'], 0.7)

    @respx.mock
    def test_model_override(self):
        """Test that a caller-supplied model is forwarded."""
        route = respx.post(COMPLETIONS_URL).mock(
            return_value=httpx.Response(200, json=COMPLETION_BODY)
        )

        self.post({'messages': [{'role': 'user', 'content': 'Hi'}], 'model': 'gpt-4o'})

        sent = json.loads(route.calls.last.request.content)
        self.assertEqual(sent['model'], 'gpt-4o')

    @respx.mock
    def test_upstream_error_returns_500(self):
        """Test that upstream failures are reported with status detail."""
        respx.post(COMPLETIONS_URL).mock(
            return_value=httpx.Response(401, json={'error': {'message': 'bad key'}})
        )

        response = self.post({'messages': [{'role': 'user', 'content': 'Hi'}]})

        self.assertEqual(response.status_code, 500)
        data = response.json()
        self.assertEqual(data['error'], 'Failed to process request')
        self.assertEqual(data['details'], 'OpenAI API error: 401 Unauthorized')

    @override_settings(LEARNING_TRAIL={'OPENAI_API_KEY': ''})
    def test_missing_api_key_returns_500(self):
        """Test that an unconfigured key is reported, not raised."""
        response = self.post({'messages': [{'role': 'user', 'content': 'Hi'}]})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()['details'], 'OpenAI API key is not configured')


class SlowRenderer(IPdfRenderer):
    """Renderer that records how many renders overlap across threads"""

    def __init__(self, delay=0.3):
        self.delay = delay
        self.lock = threading.Lock()
        self.active = 0
        self.peak = 0

    async def render_html_to_pdf(self, html):
        with self.lock:
            self.active += 1
            self.peak = max(self.peak, self.active)
        try:
            await asyncio.sleep(self.delay)
            return FAKE_PDF
        finally:
            with self.lock:
                self.active -= 1


class ConcurrentRendersViewTestCase(SimpleTestCase):
    """Test the render cap when requests are served from several threads."""

    def test_cap_holds_across_request_threads(self):
        """Test that capped requests on separate event loops all complete in turn."""
        renderer = SlowRenderer()
        service = PdfRenderService(renderer=renderer, max_concurrent_renders=1)
        results = {}

        def send(index):
            response = Client().post(
                '/api/generate-pdf',
                data=json.dumps(ASHA_PAYLOAD),
                content_type='application/json',
            )
            results[index] = (response.status_code, response.content)

        with patch('core.views.get_render_service', return_value=service):
            threads = [threading.Thread(target=send, args=(i,)) for i in range(3)]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join(timeout=10)

        self.assertFalse(any(thread.is_alive() for thread in threads))
        self.assertEqual(results, {i: (200, FAKE_PDF) for i in range(3)})
        self.assertEqual(renderer.peak, 1)
