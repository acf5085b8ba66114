"""
HTML escaping for the Printing Framework

User-supplied text is embedded verbatim unless ESCAPE_USER_CONTENT is
enabled; this module provides the escaping used when it is.
"""

import logging

import bleach


logger = logging.getLogger(__name__)


def escape_text(text: str) -> str:
    """
    Neutralise markup-significant characters in user text.

    No tags are allowed, so any markup is escaped rather than interpreted.
    Line breaks and asterisks are untouched so the emphasis and section
    transformations still apply afterwards.

    Args:
        text: Untrusted text fragment

    Returns:
        Text safe to embed in HTML element content
    """
    if not text:
        return text

    escaped = bleach.clean(text, tags=[], attributes={}, strip=False)
    if escaped != text:
        logger.debug("Escaped markup in user supplied text")
    return escaped
