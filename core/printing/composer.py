"""
Learning Trail document composer

Builds the HTML document that the rendering engine turns into a PDF.
Pure: same request and date give the same markup, nothing is cached.
"""

import datetime
import re
from typing import List, Optional

from django.template.loader import render_to_string

from core.services.config import get_render_config

from .dto import RenderRequest
from .sanitizer import escape_text


TEMPLATE_NAME = 'printing/learning_trail.html'

DEFAULT_THEME = 'Mixed Topics'

MALE_GLYPH = '👦'
FEMALE_GLYPH = '👧'
NEUTRAL_GLYPH = '🌈'

EMPHASIS_PATTERN = re.compile(r'\*\*(.*?)\*\*')
SECTION_BREAK = '\n\n'


def gender_glyph(kid_gender: Optional[str]) -> str:
    """Map the gender code to its header glyph ("M", "F", anything else)."""
    if kid_gender == 'M':
        return MALE_GLYPH
    if kid_gender == 'F':
        return FEMALE_GLYPH
    return NEUTRAL_GLYPH


def apply_emphasis(text: str) -> str:
    """Replace **text** pairs on a single line with <strong> markup."""
    return EMPHASIS_PATTERN.sub(r'<strong>\1</strong>', text)


def split_activity_sections(text: str) -> List[str]:
    """
    Turn activity text into the HTML bodies of the activity sections.

    Emphasis is applied first, then the text is split on blank lines and
    the remaining single line breaks become <br>.
    """
    emphasised = apply_emphasis(text)
    return [
        section.replace('\n', '<br>')
        for section in emphasised.split(SECTION_BREAK)
    ]


def compose_learning_trail(
    request: RenderRequest,
    *,
    generated_on: Optional[datetime.date] = None,
    escape: Optional[bool] = None,
) -> str:
    """
    Compose the Learning Trail HTML document for a request.

    Args:
        request: Validated render request
        generated_on: Date shown in the header (defaults to today)
        escape: Escape user text before embedding it. Defaults to the
            ESCAPE_USER_CONTENT setting (off: text is embedded verbatim)

    Returns:
        Complete HTML document as a string
    """
    config = get_render_config()
    if escape is None:
        escape = config.escape_user_content

    def clean(value):
        text = '' if value is None else str(value)
        return escape_text(text) if escape else text

    context = {
        'kid_name': clean(request.kid_name),
        'kid_age': clean(request.kid_age),
        'gender_glyph': gender_glyph(request.kid_gender),
        'generated_on': generated_on or datetime.date.today(),
        'theme': clean(request.theme or DEFAULT_THEME),
        'categories': [clean(category) for category in request.popped_categories],
        'activity_sections': split_activity_sections(clean(request.learning_content)),
        'font_stylesheet_url': config.font_stylesheet_url,
    }

    return render_to_string(TEMPLATE_NAME, context)
