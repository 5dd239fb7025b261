"""
Collection loading components: fetch, transform, store.

Modules:
    collections: Builds one collection per NocoDB table from a loader config
    pipeline: Maps, validates and upserts records into a store
    runner: Loads many collections, containing per-table failures

Subpackages:
    extractors: Paged, rate-limit aware record fetcher
    transformers: Schema resolution and mapper helpers
    loaders: In-memory id-keyed content store

Architecture:
    Every load is a full fetch-and-replace pass:

    1. Fetch - Walk the records endpoint page by page, backing off on 429
    2. Transform - Map, identify and validate each record
    3. Store - Upsert the entry by id

    Fetch failures yield the records gathered so far instead of failing
    the whole build.

Usage:
    from ingestion.collections import nocodb_collections
    from ingestion.runner import CollectionRunner

Example:
    collections = nocodb_collections({
        "base_url": settings.API_URL,
        "api_key": settings.API_TOKEN,
        "tables": {"sample": SAMPLE_TABLE},
    })

    results = await CollectionRunner().run(collections)

    for entry in collections["sample"].store:
        print(entry.id, entry.data)
"""

__all__ = [
    "Collection",
    "CollectionRunner",
    "IngestPipeline",
    "PagedFetcher",
    "DataStore",
    "nocodb_collections",
]

from ingestion.collections import Collection, nocodb_collections
from ingestion.pipeline import IngestPipeline
from ingestion.runner import CollectionRunner
from ingestion.extractors.paged_fetcher import PagedFetcher
from ingestion.loaders.data_store import DataStore
