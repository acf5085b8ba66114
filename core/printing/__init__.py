"""
Core Printing Framework

Turns Learning Trail requests into PDFs: composes the HTML document,
renders it in headless Chromium via Playwright and frames the bytes for
download.
"""

from .service import PdfRenderService
from .dto import PdfResult, RenderRequest
from .interfaces import IPdfRenderer
from .composer import compose_learning_trail
from .responses import build_pdf_filename, pdf_response

__all__ = [
    'PdfRenderService',
    'PdfResult',
    'RenderRequest',
    'IPdfRenderer',
    'compose_learning_trail',
    'build_pdf_filename',
    'pdf_response',
]
