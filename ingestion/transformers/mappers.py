"""
Helpers for writing table mappers
"""

import math
import re
from typing import Any, Dict, List, Optional, Union

Number = Union[int, float]


def to_number(value: Any, fallback: Number = 0) -> Number:
    """Coerce a cell to a finite number, or return ``fallback``"""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else fallback
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return fallback
        return number if math.isfinite(number) else fallback
    return fallback


def to_string(value: Any, fallback: str = "") -> str:
    """Stringify a cell; ``None`` becomes ``fallback``"""
    return fallback if value is None else str(value)


def generate_slug(text: str) -> str:
    """URL slug: lowercase, non-alphanumeric runs collapsed to ``-``"""
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower().strip())
    return slug.strip("-")


def prefer_signed_urls(attachments: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """
    Point each attachment's ``url`` at its ``signedUrl`` when present.

    NocoDB returns signed URLs for attachments stored on private buckets;
    the plain ``url`` is not fetchable in that case.
    """
    if not attachments:
        return []
    return [
        {**attachment, "url": attachment.get("signedUrl") or attachment.get("url")}
        for attachment in attachments
    ]
