"""
Script to load every configured collection and write it out as JSON
"""

import asyncio
import json
import sys
import os
import logging
from pathlib import Path
from typing import Dict, Any

# Add current directory to path to allow imports from core, ingestion, etc.
sys.path.append(os.getcwd())

from core.config import settings
from core.exceptions import ConfigError
from core.logging import setup_logging
from content import build_collections
from ingestion.collections import Collection
from ingestion.runner import CollectionRunner

logger = logging.getLogger(__name__)


def write_collection(collection: Collection, output_dir: Path) -> Path:
    """Write ``<output_dir>/<collection>.json`` with the store contents"""
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{collection.name}.json"
    path.write_text(
        json.dumps(collection.store.to_dict(), indent=2, ensure_ascii=False),
        encoding="utf-8"
    )
    return path


async def run_sync() -> Dict[str, Dict[str, Any]]:
    """Load all collections and export them"""
    collections = build_collections(settings)

    if not collections:
        logger.warning("No collections configured. Skipping sync.")
        return {}

    runner = CollectionRunner()
    coro = runner.run(collections)
    if settings.SYNC_TIMEOUT:
        results = await asyncio.wait_for(coro, timeout=settings.SYNC_TIMEOUT)
    else:
        results = await coro

    output_dir = Path(settings.OUTPUT_DIR)
    for name, collection in collections.items():
        if results[name]["status"] == "failed":
            continue
        path = write_collection(collection, output_dir)
        logger.info(f"Wrote {len(collection.store)} entries to {path}")

    return results


def main() -> int:
    setup_logging()

    try:
        results = asyncio.run(run_sync())
    except ConfigError as e:
        logger.error(str(e))
        return 1
    except asyncio.TimeoutError:
        logger.error(f"Sync exceeded {settings.SYNC_TIMEOUT}s timeout")
        return 1

    if any(result["status"] == "failed" for result in results.values()):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
