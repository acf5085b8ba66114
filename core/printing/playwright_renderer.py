"""
Playwright Renderer Implementation

Adapter for rendering HTML to PDF in a short-lived headless Chromium.

Each render owns exactly one engine instance (driver, browser process and
page). The instance is closed on every exit path: success, engine fault,
or an expired render deadline.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
import logging

from playwright.async_api import Page, async_playwright

from core.services.exceptions import RenderError

from .interfaces import IPdfRenderer


logger = logging.getLogger(__name__)


CHROMIUM_ARGS = [
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-dev-shm-usage',
    '--disable-gpu',
]

# Extra flags for bundled binaries in serverless runtimes (no forking helpers).
BUNDLED_CHROMIUM_ARGS = [
    '--single-process',
    '--no-zygote',
]

PDF_OPTIONS = {
    'format': 'A4',
    'print_background': True,
    'margin': {
        'top': '20px',
        'right': '20px',
        'bottom': '20px',
        'left': '20px',
    },
}

# Resolves once every web font referenced by the document has loaded.
FONTS_READY_SCRIPT = '() => document.fonts.ready.then(() => document.fonts.status)'


class PlaywrightRenderer(IPdfRenderer):
    """
    PDF renderer using headless Chromium through Playwright.

    Supports:
    - Web fonts (waits for network quiescence, then for document.fonts.ready)
    - Locally installed or bundled Chromium binaries
    - An optional per-render deadline
    """

    def __init__(self, executable_path: Optional[str] = None, timeout: Optional[float] = None):
        """
        Initialize the renderer.

        Args:
            executable_path: Bundled Chromium binary. None uses the browser
                installed by `playwright install chromium`
            timeout: Deadline for one render in seconds, None for no deadline
        """
        self.executable_path = executable_path
        self.timeout = timeout

    def launch_options(self) -> dict:
        """Chromium launch options for the configured binary."""
        options = {
            'headless': True,
            'chromium_sandbox': False,
            'args': list(CHROMIUM_ARGS),
        }
        if self.executable_path:
            options['executable_path'] = self.executable_path
            options['args'].extend(BUNDLED_CHROMIUM_ARGS)
        return options

    @asynccontextmanager
    async def engine_instance(self) -> AsyncIterator[Page]:
        """
        Acquire one Chromium process and one page, released on exit.

        Yields:
            The page to load the document into
        """
        async with async_playwright() as playwright:
            browser = await playwright.chromium.launch(**self.launch_options())
            logger.debug("Chromium launched")
            try:
                page = await browser.new_page()
                if self.timeout is not None:
                    page.set_default_timeout(self.timeout * 1000)
                yield page
            finally:
                await browser.close()
                logger.debug("Chromium closed")

    async def wait_for_network_idle(self, page: Page, html: str) -> None:
        """Load the document and wait until no requests are in flight."""
        await page.set_content(html, wait_until='networkidle')

    async def wait_for_fonts(self, page: Page) -> None:
        """Wait until the document's web fonts are ready to rasterize."""
        status = await page.evaluate(FONTS_READY_SCRIPT)
        logger.debug(f"Document fonts status: {status}")

    async def render_html_to_pdf(self, html: str) -> bytes:
        """
        Render HTML to PDF using headless Chromium.

        Args:
            html: Complete HTML document to render

        Returns:
            PDF content as bytes

        Raises:
            RenderError: If the engine fails at any step or the deadline expires
        """
        if self.timeout is None:
            return await self._render(html)

        try:
            return await asyncio.wait_for(self._render(html), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"PDF rendering timed out after {self.timeout:g}s")
            raise RenderError(f"PDF rendering timed out after {self.timeout:g}s") from e

    async def _render(self, html: str) -> bytes:
        # Engine faults leave here as RenderError; only the deadline surfaces as a timeout.
        try:
            async with self.engine_instance() as page:
                await self.wait_for_network_idle(page, html)
                await self.wait_for_fonts(page)
                pdf_bytes = await page.pdf(**PDF_OPTIONS)
        except Exception as e:
            logger.error(f"Failed to render PDF: {e}", exc_info=True)
            raise RenderError(str(e) or e.__class__.__name__) from e

        logger.info(f"Successfully rendered PDF: {len(pdf_bytes)} bytes")
        return pdf_bytes
