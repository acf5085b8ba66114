"""
Data schemas for AI service requests and responses.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ProviderResponse:
    """Response from a provider implementation."""
    text: Optional[str]
    raw: Any
    input_tokens: Optional[int]
    output_tokens: Optional[int]
    model: str
