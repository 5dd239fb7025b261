"""
Table and fetch request configuration
"""

from dataclasses import dataclass, field
from pydantic import BaseModel, Field, validator
from typing import Optional, List, Dict, Any, Callable, Union

from schemas.records import RawRecord


Scalar = Union[str, int, float, bool]
Mapper = Callable[[RawRecord], RawRecord]

DEFAULT_PAGE_SIZE = 100
DEFAULT_BODY_FIELD = "content"
DEFAULT_RETRIES = 10
DEFAULT_RETRY_DELAY = 2.0


@dataclass(frozen=True)
class TableSpec:
    """
    Per-table loader configuration, supplied once by the caller.

    Attributes:
        table_id: NocoDB table identifier
        schema: Pydantic model class, TypeAdapter, or ``validate(raw)`` callable
        mapper: Optional RawRecord -> RawRecord transform run before validation
        body_field: Validated field promoted into the entry body (None disables)
        query_params: Extra query parameters (``where``, ``sort``, ``limit``, ...)
        fields: Field selection sent as ``fields=a,b,c``
        retries: Retry budget per page on HTTP 429 (None uses MAX_RETRIES)
        retry_delay: Base backoff delay in seconds (None uses RETRY_DELAY)
        max_retry_delay: Optional ceiling on the backoff delay in seconds
        skip_invalid: Skip records the schema rejects instead of raising
    """
    table_id: str
    schema: Any
    mapper: Optional[Mapper] = None
    body_field: Optional[str] = DEFAULT_BODY_FIELD
    query_params: Dict[str, Scalar] = field(default_factory=dict)
    fields: List[str] = field(default_factory=list)
    retries: Optional[int] = None
    retry_delay: Optional[float] = None
    max_retry_delay: Optional[float] = None
    skip_invalid: bool = False


class FetchRequest(BaseModel):
    """Everything the fetcher needs for one fetch-all pass over a table"""

    endpoint: str = Field(..., min_length=1)
    api_key: str = Field(..., min_length=1)
    query_params: Dict[str, Scalar] = Field(default_factory=dict)
    fields: List[str] = Field(default_factory=list)
    retries: int = Field(DEFAULT_RETRIES, ge=0)
    retry_delay: float = Field(DEFAULT_RETRY_DELAY, ge=0)
    max_retry_delay: Optional[float] = Field(None, gt=0)
    timeout: float = Field(30.0, gt=0)
    default_page_size: int = Field(DEFAULT_PAGE_SIZE, gt=0)

    @validator("query_params")
    def drop_cursor_params(cls, v):
        """The offset is owned by the fetcher"""
        return {k: val for k, val in v.items() if k != "offset"}

    @property
    def page_size(self) -> int:
        return int(self.query_params.get("limit") or self.default_page_size)

    @classmethod
    def for_table(cls, endpoint: str, api_key: str, table: TableSpec, **overrides: Any) -> "FetchRequest":
        """Build a request from a table spec (unset retry options keep the request defaults)"""
        values: Dict[str, Any] = {
            "endpoint": endpoint,
            "api_key": api_key,
            "query_params": dict(table.query_params),
            "fields": list(table.fields),
        }
        for name in ("retries", "retry_delay", "max_retry_delay"):
            value = getattr(table, name)
            if value is not None:
                values[name] = value
        values.update(overrides)
        return cls(**values)

    class Config:
        frozen = True
