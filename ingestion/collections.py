"""
Build one content collection per NocoDB table.

A collection ties a table spec to its records endpoint and to the store its
entries end up in. ``Collection.load()`` performs a full fetch-and-replace
pass: the store is cleared, every record is fetched, and each one is
ingested.
"""

from typing import Any, Dict, Mapping, Optional, Union
import logging

from schemas.tables import TableSpec, FetchRequest
from ingestion.extractors.paged_fetcher import PagedFetcher
from ingestion.loaders.data_store import DataStore
from ingestion.pipeline import IngestPipeline
from core.config import settings
from core.exceptions import ConfigError

logger = logging.getLogger(__name__)

RECORDS_PATH = "/api/v2/tables/{table_id}/records"


def records_url(base_url: str, table_id: str) -> str:
    return base_url.rstrip("/") + RECORDS_PATH.format(table_id=table_id)


class Collection:
    """
    A named table loader and the store it fills.

    Attributes:
        name: Loader name (``nocodb-<collection>``)
        table: Table spec
        request: Fetch request for the table's records endpoint
        store: Destination store, owned by the caller after ``load``
    """

    def __init__(
        self,
        name: str,
        table: TableSpec,
        request: FetchRequest,
        fetcher: Optional[PagedFetcher] = None,
        store: Optional[DataStore] = None
    ):
        self.name = name
        self.table = table
        self.request = request
        self.fetcher = fetcher or PagedFetcher()
        self.store = store if store is not None else DataStore(name)
        self.pipeline = IngestPipeline(table)

    async def load(self) -> Dict[str, Any]:
        """
        Replace the store contents with the table's current records.

        Returns:
            Dictionary with load statistics:
            - status: "success", or "partial_success" when fetching stopped
              early or records were skipped
            - records_fetched / records_stored / records_failed
            - error: the fetch error (if fetching stopped early)
            - error_details: skipped records (if any)
        """
        logger.info(f"Loading collection {self.name} (table {self.table.table_id})")

        self.store.clear()
        records = await self.fetcher.fetch_all(self.request)
        fetch_error = self.fetcher.last_error

        result = self.pipeline.ingest(records, self.store)

        summary: Dict[str, Any] = {
            "status": "success",
            "records_fetched": len(records),
            "records_stored": result.records_stored,
            "records_failed": result.records_failed,
        }
        if fetch_error is not None:
            summary["error"] = fetch_error.to_dict()
        if result.error_details:
            summary["error_details"] = result.error_details
        if fetch_error is not None or result.records_failed:
            summary["status"] = "partial_success"

        logger.info(
            f"Collection {self.name} loaded: {summary['status']} - "
            f"Fetched: {len(records)}, Stored: {result.records_stored}, "
            f"Failed: {result.records_failed}"
        )
        return summary

    def __repr__(self) -> str:
        return f"Collection(name={self.name!r}, table_id={self.table.table_id!r})"


def _table_spec(name: str, value: Union[TableSpec, Mapping[str, Any]]) -> TableSpec:
    if isinstance(value, TableSpec):
        return value
    try:
        return TableSpec(**value)
    except TypeError as e:
        raise ConfigError(
            f"Invalid table config for collection {name!r}",
            context={"collection": name},
            original_exception=e
        )


def _or_default(value: Any, default: Any) -> Any:
    return default if value is None else value


def nocodb_collections(
    config: Mapping[str, Any],
    fetcher: Optional[PagedFetcher] = None
) -> Dict[str, Collection]:
    """
    Build collections from a loader config.

    Args:
        config: ``{"base_url": ..., "api_key": ..., "tables": {name: TableSpec | dict}}``
        fetcher: Fetcher shared by all collections (one per collection when None)

    Returns:
        Collections keyed by name, in config order

    Raises:
        ConfigError: Missing base URL or API key, or an unusable table config
    """
    base_url = config.get("base_url")
    api_key = config.get("api_key")
    if not base_url or not api_key:
        raise ConfigError(
            "Missing base_url or api_key in NocoDB config.",
            context={
                "base_url_set": bool(base_url),
                "api_key_set": bool(api_key)
            }
        )

    collections: Dict[str, Collection] = {}

    for name, value in (config.get("tables") or {}).items():
        table = _table_spec(name, value)
        request = FetchRequest.for_table(
            records_url(base_url, table.table_id),
            api_key,
            table,
            retries=_or_default(table.retries, settings.MAX_RETRIES),
            retry_delay=_or_default(table.retry_delay, settings.RETRY_DELAY),
            max_retry_delay=_or_default(table.max_retry_delay, settings.MAX_RETRY_DELAY),
            timeout=settings.REQUEST_TIMEOUT,
            default_page_size=settings.DEFAULT_PAGE_SIZE
        )
        collections[name] = Collection(
            name=f"nocodb-{name}",
            table=table,
            request=request,
            fetcher=fetcher
        )
        logger.debug(f"Configured collection {name} -> {request.endpoint}")

    return collections
