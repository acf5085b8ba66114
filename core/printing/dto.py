"""
Data Transfer Objects for the Printing Framework
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple, Union

from core.services.exceptions import InvalidRenderRequest


MISSING_FIELDS_MESSAGE = "Missing required fields: kidName and learningContent are required"


@dataclass(frozen=True)
class RenderRequest:
    """
    Learner session data to be turned into a Learning Trail PDF.

    Only kid_name and learning_content are required; everything else is
    display-only and may be absent.
    """

    kid_name: str
    learning_content: str
    kid_age: Union[str, int, float, None] = None
    kid_gender: Optional[str] = None
    popped_categories: Tuple[str, ...] = ()
    theme: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "RenderRequest":
        """
        Build a request from the JSON body of POST /api/generate-pdf.

        Args:
            payload: Decoded JSON object using the camelCase API field names

        Returns:
            RenderRequest

        Raises:
            InvalidRenderRequest: If kidName or learningContent is absent or
                empty, or poppedCategories is not an array
        """
        kid_name = payload.get('kidName')
        learning_content = payload.get('learningContent')

        if not kid_name or not learning_content:
            raise InvalidRenderRequest(MISSING_FIELDS_MESSAGE)

        categories = payload.get('poppedCategories')
        if categories is None:
            categories = []
        if not isinstance(categories, list):
            raise InvalidRenderRequest("poppedCategories must be an array")

        return cls(
            kid_name=str(kid_name),
            learning_content=str(learning_content),
            kid_age=payload.get('kidAge'),
            kid_gender=payload.get('kidGender'),
            popped_categories=tuple(str(category) for category in categories),
            theme=payload.get('theme') or None,
        )


@dataclass
class PdfResult:
    """
    Result of PDF rendering operation.

    Contains the PDF bytes and metadata for HTTP responses.
    """

    pdf_bytes: bytes
    filename: str
    content_type: str = "application/pdf"

    def __len__(self) -> int:
        """Return the size of PDF in bytes"""
        return len(self.pdf_bytes)
