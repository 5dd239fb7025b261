"""
Pydantic schemas and configuration types for the collection loader.

Schemas:
    records: Raw records, pages, attachments and stored entries
    tables: Table specs and fetch requests

Usage:
    from schemas.records import Entry, Page
    from schemas.tables import FetchRequest, TableSpec

Example:
    table = TableSpec(table_id="mf3j1dklbw5cvsb", schema=SampleEntry)
    request = FetchRequest.for_table(
        endpoint="https://nocodb.example.com/api/v2/tables/mf3j1dklbw5cvsb/records",
        api_key="token",
        table=table,
    )

    assert request.page_size == 100
"""

from schemas.records import RawRecord, Attachment, Page, Entry
from schemas.tables import TableSpec, FetchRequest

__all__ = [
    "RawRecord",
    "Attachment",
    "Page",
    "Entry",
    "TableSpec",
    "FetchRequest",
]
