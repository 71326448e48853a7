from __future__ import annotations

import json
import os
import sqlite3
from typing import Any, Dict, List, Mapping, Optional


class SQLiteRecordStore:
    """
    Minimal record store.
    - record_collections: one row per collection, JSON array of records.
    """

    def __init__(self, db_path: str, seed: Optional[Mapping[str, List[Dict[str, Any]]]] = None):
        self.db_path = db_path
        self.seed = dict(seed or {})
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        parent = os.path.dirname(self.db_path)
        if parent:
            os.makedirs(parent, exist_ok=True)

        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS record_collections (
                    name TEXT PRIMARY KEY,
                    records_json TEXT NOT NULL DEFAULT '[]',
                    created_at TEXT NOT NULL DEFAULT (datetime('now')),
                    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
                );
                """
            )
            conn.commit()

    def read_all(self, collection: str) -> List[Dict[str, Any]]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT records_json FROM record_collections WHERE name = ? LIMIT 1;",
                (collection,),
            ).fetchone()

        if not row:
            seeded = list(self.seed.get(collection, []))
            self.write_all(collection, seeded)
            return json.loads(json.dumps(seeded))

        data = json.loads(row["records_json"] or "[]")
        if not isinstance(data, list):
            raise ValueError(f"Collection {collection!r} is not a list of records")
        return data

    def write_all(self, collection: str, records: List[Dict[str, Any]]) -> None:
        records_json = json.dumps(list(records), ensure_ascii=False)
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO record_collections(name, records_json, updated_at)
                VALUES(?, ?, datetime('now'))
                ON CONFLICT(name) DO UPDATE SET
                    records_json=excluded.records_json,
                    updated_at=datetime('now');
                """,
                (collection, records_json),
            )
            conn.commit()
