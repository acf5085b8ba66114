"""
HTTP framing for rendered PDFs.
"""

import datetime
import re
from typing import Optional

from django.http import HttpResponse
from django.utils import timezone

from .dto import PdfResult


FILENAME_PREFIX = 'Learning_Trail'

_UNSAFE_FILENAME_CHARS = re.compile(r'[^a-zA-Z0-9]')


def sanitize_filename_part(value: str) -> str:
    """Replace every character outside [a-zA-Z0-9] with an underscore."""
    return _UNSAFE_FILENAME_CHARS.sub('_', value)


def build_pdf_filename(kid_name: str, on_date: Optional[datetime.date] = None) -> str:
    """
    Build the download filename for a learner's PDF.

    Args:
        kid_name: Learner display name
        on_date: Date stamp (defaults to the current UTC date)

    Returns:
        e.g. "Learning_Trail_Asha_2026-10-19.pdf"
    """
    on_date = on_date or timezone.now().astimezone(datetime.timezone.utc).date()
    return f"{FILENAME_PREFIX}_{sanitize_filename_part(kid_name)}_{on_date.isoformat()}.pdf"


def pdf_response(result: PdfResult) -> HttpResponse:
    """
    Wrap a rendered PDF in a downloadable attachment response.

    The body is sent in one piece with an exact Content-Length. Empty
    artifacts are passed through unchanged.
    """
    response = HttpResponse(result.pdf_bytes, content_type=result.content_type)
    response['Content-Disposition'] = f'attachment; filename="{result.filename}"'
    response['Content-Length'] = str(len(result))
    response['Cache-Control'] = 'no-cache'
    return response
