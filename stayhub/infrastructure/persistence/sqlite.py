from __future__ import annotations

import json
import logging
import sqlite3
import threading
from pathlib import Path
from typing import Dict, List, Sequence

from ...domain.errors import StoreCorruptedError
from ...domain.ports.persistence import COLLECTIONS, Record, RecordStore, ensure_collection

logger = logging.getLogger(__name__)


class SQLiteRecordStore(RecordStore):
    """SQLite-backed record store keyed by ``(collection, id)``.

    Collections keep the read-all/write-all contract; every write replaces the
    collection's rows inside one transaction.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(self._path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn_lock = threading.Lock()
        self._locks: Dict[str, threading.RLock] = {name: threading.RLock() for name in COLLECTIONS}

    def initialize(self) -> None:
        with self._conn_lock, self._conn:
            self._conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS records (
                    collection TEXT NOT NULL,
                    id TEXT NOT NULL,
                    position INTEGER NOT NULL,
                    payload TEXT NOT NULL,
                    PRIMARY KEY (collection, id)
                );

                CREATE INDEX IF NOT EXISTS idx_records_collection_position
                    ON records(collection, position);
                """
            )

    def close(self) -> None:
        self._conn.close()

    def read(self, collection: str) -> List[Record]:
        ensure_collection(collection)
        with self._conn_lock:
            cur = self._conn.execute(
                "SELECT id, payload FROM records WHERE collection = ? ORDER BY position",
                (collection,),
            )
            rows = cur.fetchall()
        records: List[Record] = []
        for row in rows:
            try:
                payload = json.loads(row["payload"])
            except json.JSONDecodeError as exc:
                logger.error("Record %s in collection %s is not valid JSON: %s", row["id"], collection, exc)
                raise StoreCorruptedError(f"Collection '{collection}' is unreadable") from exc
            if not isinstance(payload, dict):
                logger.error("Record %s in collection %s is not an object", row["id"], collection)
                raise StoreCorruptedError(f"Collection '{collection}' is unreadable")
            records.append(payload)
        return records

    def write(self, collection: str, records: Sequence[Record]) -> None:
        ensure_collection(collection)
        rows = [
            (collection, str(record["id"]), position, json.dumps(record, default=str, ensure_ascii=False))
            for position, record in enumerate(records)
        ]
        with self._conn_lock, self._conn:
            self._conn.execute("DELETE FROM records WHERE collection = ?", (collection,))
            self._conn.executemany(
                "INSERT INTO records (collection, id, position, payload) VALUES (?, ?, ?, ?)",
                rows,
            )

    def lock(self, collection: str) -> threading.RLock:
        return self._locks[ensure_collection(collection)]
