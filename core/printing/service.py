"""
Core PDF Render Service

Central service for turning a Learning Trail request into a PDF.
"""

import asyncio
import datetime
import threading
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
import logging

from core.services.config import get_render_config

from .composer import compose_learning_trail
from .dto import PdfResult, RenderRequest
from .interfaces import IPdfRenderer
from .playwright_renderer import PlaywrightRenderer
from .responses import build_pdf_filename


logger = logging.getLogger(__name__)


class PdfRenderService:
    """
    Core service for the PDF rendering pipeline.

    Responsibilities:
    1. Compose the Learning Trail HTML from the request
    2. Delegate PDF rendering to an IPdfRenderer implementation
    3. Return a structured PdfResult

    Usage:
        service = PdfRenderService()
        result = await service.render(RenderRequest.from_payload(payload))
    """

    def __init__(
        self,
        renderer: Optional[IPdfRenderer] = None,
        max_concurrent_renders: Optional[int] = None,
    ):
        """
        Initialize the service.

        Args:
            renderer: PDF renderer implementation. If None, uses the default
                Playwright renderer built from settings.
            max_concurrent_renders: Upper bound on simultaneous renders.
                If None, uses the MAX_CONCURRENT_RENDERS setting (which
                defaults to unbounded).
        """
        config = get_render_config()
        self.renderer = renderer or self._get_default_renderer()

        limit = max_concurrent_renders or config.max_concurrent_renders
        # Acquired from worker threads so waiters on any event loop are woken.
        self._slots = threading.BoundedSemaphore(limit) if limit else None

    @asynccontextmanager
    async def _render_slot(self) -> AsyncIterator[None]:
        """Hold one render slot while the block runs (no-op when uncapped)."""
        if self._slots is None:
            yield
            return

        acquire = asyncio.ensure_future(asyncio.to_thread(self._slots.acquire))
        try:
            await asyncio.shield(acquire)
        except asyncio.CancelledError:
            # The worker thread may still obtain the slot after cancellation.
            acquire.add_done_callback(self._release_abandoned_slot)
            raise

        try:
            yield
        finally:
            self._slots.release()

    def _release_abandoned_slot(self, acquire: asyncio.Future) -> None:
        if not acquire.cancelled() and acquire.exception() is None:
            self._slots.release()

    async def render(
        self,
        request: RenderRequest,
        *,
        generated_on: Optional[datetime.date] = None,
    ) -> PdfResult:
        """
        Render a Learning Trail PDF.

        Args:
            request: Validated render request
            generated_on: Date printed in the document (defaults to today)

        Returns:
            PdfResult with PDF bytes and download filename

        Raises:
            RenderError: If the rendering engine fails
        """
        html = compose_learning_trail(request, generated_on=generated_on)
        logger.debug(f"Composed Learning Trail document ({len(html)} characters)")

        async with self._render_slot():
            pdf_bytes = await self.renderer.render_html_to_pdf(html)

        result = PdfResult(
            pdf_bytes=pdf_bytes,
            filename=build_pdf_filename(request.kid_name),
            content_type='application/pdf',
        )

        logger.info(
            f"Successfully generated PDF: {result.filename} "
            f"({len(result.pdf_bytes)} bytes)"
        )

        return result

    def _get_default_renderer(self) -> IPdfRenderer:
        """
        Get the default PDF renderer.

        Returns:
            PlaywrightRenderer configured from settings
        """
        config = get_render_config()
        return PlaywrightRenderer(
            executable_path=config.browser_executable,
            timeout=config.render_timeout,
        )
