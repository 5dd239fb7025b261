"""
In-memory content store with id-keyed upsert (idempotency)
"""

from typing import Dict, Iterator, List, Optional, Any
from schemas.records import Entry
from core.exceptions import StoreError
import logging

logger = logging.getLogger(__name__)


class DataStore:
    """
    Collection of entries keyed by id.

    Ensures:
    - No duplicate entries on repeated runs (``set`` replaces by id)
    - Iteration follows first-insertion order of ids
    - An entry is either fully stored or not stored at all
    """

    def __init__(self, name: str = "default"):
        self.name = name
        self._entries: Dict[str, Entry] = {}

    def set(self, entry: Entry) -> bool:
        """
        Upsert an entry.

        Returns:
            True if the id was new, False if an existing entry was replaced
        """
        if not isinstance(entry, Entry):
            raise StoreError(
                "Only Entry instances can be stored",
                context={"store": self.name, "value_type": type(entry).__name__}
            )

        is_new = entry.id not in self._entries
        if not is_new:
            logger.debug(f"Replacing entry {entry.id!r} in {self.name}")

        self._entries[entry.id] = entry.model_copy(deep=True)
        return is_new

    def get(self, entry_id: str) -> Optional[Entry]:
        return self._entries.get(entry_id)

    def has(self, entry_id: str) -> bool:
        return entry_id in self._entries

    def delete(self, entry_id: str) -> None:
        self._entries.pop(entry_id, None)

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> List[str]:
        return list(self._entries.keys())

    def values(self) -> List[Entry]:
        return list(self._entries.values())

    def entries(self) -> List[tuple]:
        return list(self._entries.items())

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """JSON-ready view: ``{id: {"data": ..., "body": ...}}``"""
        return {
            entry_id: entry.model_dump(mode="json", exclude={"id"})
            for entry_id, entry in self._entries.items()
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(list(self._entries.values()))

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries

    def __repr__(self) -> str:
        return f"DataStore(name={self.name!r}, entries={len(self)})"
