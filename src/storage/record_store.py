from __future__ import annotations

import copy
from typing import Any, Dict, List, Mapping, Optional, Protocol


Record = Dict[str, Any]


class RecordStore(Protocol):
    """Storage abstraction: named collections of JSON-compatible records."""

    def read_all(self, collection: str) -> List[Record]:
        """
        Returns every record of the collection, or [] if it holds none.
        A collection that has never been written is seeded first when
        seed data exists for it.
        """
        ...

    def write_all(self, collection: str, records: List[Record]) -> None:
        """Replaces the whole collection in one step."""
        ...


class InMemoryRecordStore:
    """Dict-backed store for tests and ephemeral sessions."""

    def __init__(self, seed: Optional[Mapping[str, List[Record]]] = None):
        self.seed = dict(seed or {})
        self._collections: Dict[str, List[Record]] = {}

    def read_all(self, collection: str) -> List[Record]:
        if collection not in self._collections:
            self._collections[collection] = copy.deepcopy(self.seed.get(collection, []))
        return copy.deepcopy(self._collections[collection])

    def write_all(self, collection: str, records: List[Record]) -> None:
        self._collections[collection] = copy.deepcopy(list(records))
