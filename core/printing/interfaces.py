"""
Interfaces for the Printing Framework

Defines the rendering engine interface so the service can be driven by
Playwright in production and by fakes in tests.
"""

from abc import ABC, abstractmethod


class IPdfRenderer(ABC):
    """
    Interface for PDF rendering engines.

    Implementations convert HTML to PDF bytes using their specific engine.
    Each call owns its engine resources and releases them before returning.
    """

    @abstractmethod
    async def render_html_to_pdf(self, html: str) -> bytes:
        """
        Render HTML to PDF.

        Args:
            html: Complete HTML document to render

        Returns:
            PDF content as bytes

        Raises:
            RenderError: If rendering fails
        """
        pass
