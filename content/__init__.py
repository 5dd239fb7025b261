"""
Content collections served from NocoDB.

Add a module per table (schema, mapper, TableSpec) and register it in
``TABLES``.
"""

from typing import Dict, Optional

from core.config import Settings, settings as default_settings
from ingestion.collections import Collection, nocodb_collections
from content.sample import SAMPLE_TABLE

TABLES = {
    "sample": SAMPLE_TABLE,
}


def build_collections(settings: Optional[Settings] = None) -> Dict[str, Collection]:
    """Collections for every registered table, configured from the environment"""
    settings = settings or default_settings
    return nocodb_collections({
        "base_url": settings.API_URL,
        "api_key": settings.API_TOKEN,
        "tables": TABLES,
    })
