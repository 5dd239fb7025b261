"""
Ingest pipeline - turns raw records into stored entries.

For each record: map, derive identity, validate against the table schema,
promote the body field, upsert into the store. Records are handled one at
a time; what happens to a record the schema rejects depends on the table's
``skip_invalid`` policy.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Iterable, Mapping, Optional
import logging

from schemas.records import Entry, RawRecord
from schemas.tables import TableSpec
from ingestion.loaders.data_store import DataStore
from ingestion.transformers.validation import resolve_validator
from core.exceptions import (
    TransformationError,
    ValidationError,
    MappingError
)

logger = logging.getLogger(__name__)

UNKNOWN_ID = "unknown"


@dataclass
class IngestResult:
    """Counters for one ingest pass"""
    records_received: int = 0
    records_stored: int = 0
    records_failed: int = 0
    error_details: List[Dict[str, Any]] = field(default_factory=list)


def derive_id(record: Mapping[str, Any]) -> str:
    """Identity from ``Id`` or ``id``; ``"unknown"`` when neither is set"""
    for key in ("Id", "id"):
        value = record.get(key)
        if value is not None and value != "":
            return str(value)
    return UNKNOWN_ID


def build_entry(entry_id: str, data: Dict[str, Any], body_field: Optional[str]) -> Entry:
    """Move a truthy body field out of ``data`` into ``body``

    Strings are kept as they are; any other value is stored as JSON text.
    """
    data = dict(data)
    body = None
    if body_field and data.get(body_field):
        value = data.pop(body_field)
        if isinstance(value, str):
            body = value
        else:
            body = json.dumps(value, ensure_ascii=False, default=str)
    return Entry(id=entry_id, data=data, body=body)


def _error_messages(error: Exception) -> Any:
    errors = getattr(error, "errors", None)
    if callable(errors):
        try:
            return errors(include_url=False)
        except TypeError:
            return errors()
    return str(error)


class IngestPipeline:
    """
    Map, validate and store the records of one table.

    Responsibilities:
    - Apply the table mapper (identity when absent)
    - Assign a stable id to every record
    - Validate through the table schema
    - Promote the body field
    - Upsert into the destination store
    """

    def __init__(self, table: TableSpec):
        self.table = table
        self.validate = resolve_validator(table.schema)

    def transform(self, raw_record: RawRecord) -> Entry:
        """
        Build the entry for one raw record.

        Raises:
            MappingError: The mapper raised
            ValidationError: The schema rejected the mapped record
        """
        if self.table.mapper is not None:
            try:
                mapped = self.table.mapper(raw_record)
            except Exception as e:
                raise MappingError(
                    "Mapper failed",
                    context={
                        "table_id": self.table.table_id,
                        "record_id": derive_id(raw_record)
                    },
                    original_exception=e
                )
        else:
            mapped = raw_record

        entry_id = derive_id(mapped)

        try:
            parsed = self.validate(mapped)
        except Exception as e:
            raise ValidationError(
                f"Record {entry_id!r} failed schema validation",
                context={
                    "table_id": self.table.table_id,
                    "record_id": entry_id,
                    "errors": _error_messages(e)
                },
                original_exception=e
            )

        return build_entry(entry_id, parsed, self.table.body_field)

    def ingest(self, raw_records: Iterable[RawRecord], store: DataStore) -> IngestResult:
        """
        Transform every record and upsert it into ``store``.

        Running this twice with the same records leaves the store unchanged.

        Raises:
            TransformationError: First rejected record, unless the table
                skips invalid records
        """
        result = IngestResult()

        for raw_record in raw_records:
            result.records_received += 1

            try:
                entry = self.transform(raw_record)

            except TransformationError as e:
                if not self.table.skip_invalid:
                    raise

                result.records_failed += 1
                error_detail = {
                    "id": e.context.get("record_id"),
                    "error_type": type(e).__name__,
                    "error_message": e.message
                }
                result.error_details.append(error_detail)
                logger.warning(
                    f"Skipping record {error_detail['id']!r} from table "
                    f"{self.table.table_id}: {e.message}",
                    extra={"error_context": e.to_dict()}
                )
                continue

            if entry.id == UNKNOWN_ID:
                logger.debug(f"Record without Id in table {self.table.table_id}, stored as {UNKNOWN_ID!r}")

            store.set(entry)
            result.records_stored += 1

        logger.info(
            f"Ingested table {self.table.table_id}: {result.records_stored} stored, "
            f"{result.records_failed} failed"
        )
        return result


def ingest(table: TableSpec, raw_records: Iterable[RawRecord], store: DataStore) -> IngestResult:
    """Shortcut for ``IngestPipeline(table).ingest(raw_records, store)``"""
    return IngestPipeline(table).ingest(raw_records, store)
