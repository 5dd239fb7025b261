"""
Pydantic schemas for records as they travel from the source to the store
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any


RawRecord = Dict[str, Any]


class Attachment(BaseModel):
    """NocoDB attachment cell item"""
    url: str
    signedUrl: Optional[str] = None
    title: Optional[str] = None
    mimetype: Optional[str] = None


class Page(BaseModel):
    """
    One records response from the source.

    The API returns ``{"list": [...], "pageInfo": {"isLastPage": bool, ...}}``.
    A missing or null ``list`` is an empty page.
    """
    records: List[RawRecord] = Field(default_factory=list)
    is_last_page: bool = False

    @classmethod
    def from_response(cls, payload: Any) -> "Page":
        if not isinstance(payload, dict):
            raise TypeError(f"Expected a JSON object, got {type(payload).__name__}")

        records = payload.get("list") or []
        if not isinstance(records, list):
            raise TypeError(f"Expected \"list\" to be an array, got {type(records).__name__}")

        page_info = payload.get("pageInfo") or {}
        if not isinstance(page_info, dict):
            raise TypeError(f"Expected \"pageInfo\" to be an object, got {type(page_info).__name__}")

        return cls(
            records=records,
            is_last_page=bool(page_info.get("isLastPage", False))
        )


class Entry(BaseModel):
    """
    Unit persisted to the destination store.

    ``data`` is the validated record minus the body field when one was
    promoted into ``body``.
    """
    id: str
    data: Dict[str, Any] = Field(default_factory=dict)
    body: Optional[str] = None
