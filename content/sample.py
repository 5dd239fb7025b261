"""
Sample collection: Instagram albums with a budget
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel

from schemas.records import Attachment, RawRecord
from schemas.tables import TableSpec
from ingestion.transformers.mappers import to_string, prefer_signed_urls


class SampleEntry(BaseModel):
    Id: Optional[str] = None
    Album: Optional[str] = None
    Thumbnail: Optional[List[Attachment]] = None
    Platform: Optional[str] = None
    Budget: Optional[float] = None


def sample_mapper(raw: RawRecord) -> Dict[str, Any]:
    return {
        "Id": to_string(raw.get("Id")),
        "Album": raw.get("Album"),
        "Thumbnail": prefer_signed_urls(raw.get("Thumbnail")),
        "Platform": raw.get("Platform"),
        "Budget": raw.get("Budget"),
    }


SAMPLE_TABLE = TableSpec(
    table_id="mf3j1dklbw5cvsb",
    schema=SampleEntry,
    mapper=sample_mapper,
    query_params={
        "where": "(Platform,eq,Instagram)~and(Album,notnull)",
        "sort": "Budget",
    },
    fields=["Id", "Album", "Thumbnail", "Platform", "Budget"],
    retries=5,
    retry_delay=1.0,
)
