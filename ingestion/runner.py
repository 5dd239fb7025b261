# ============================================================================
# File: ingestion/runner.py
# Description: Loads every configured collection, one table at a time
# ============================================================================
"""
Collection Runner - loads many collections in one build.

One table failing (for example a schema rejecting a record) is logged and
reported; it never stops the remaining tables from loading.
"""

from typing import Dict, Any, Mapping
import logging

from ingestion.collections import Collection
from core.exceptions import LoaderException

logger = logging.getLogger(__name__)


class CollectionRunner:
    """
    Sequential orchestrator over collections.

    Responsibilities:
    - Run each collection's fetch-and-replace pass in config order
    - Contain per-table failures
    - Report per-table statistics
    """

    async def run(self, collections: Mapping[str, Collection]) -> Dict[str, Dict[str, Any]]:
        """
        Load every collection.

        Args:
            collections: Collections keyed by name

        Returns:
            Load summary per collection name; failed tables have
            ``status == "failed"`` and an ``error`` dictionary
        """
        results: Dict[str, Dict[str, Any]] = {}

        for name, collection in collections.items():
            try:
                results[name] = await collection.load()

            except LoaderException as e:
                logger.error(
                    f"Loading {collection.name} failed: {e.message}",
                    extra={"error_context": e.to_dict()}
                )
                results[name] = {
                    "status": "failed",
                    "records_stored": len(collection.store),
                    "error": e.to_dict()
                }

            except Exception as e:
                logger.exception(f"Unexpected error loading {collection.name}")
                results[name] = {
                    "status": "failed",
                    "records_stored": len(collection.store),
                    "error": {
                        "error_type": type(e).__name__,
                        "message": str(e)
                    }
                }

        failed = [name for name, result in results.items() if result["status"] == "failed"]
        logger.info(
            f"Loaded {len(results) - len(failed)}/{len(results)} collections"
            + (f" (failed: {', '.join(failed)})" if failed else "")
        )
        return results
