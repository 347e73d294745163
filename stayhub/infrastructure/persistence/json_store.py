from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, List, Sequence

from ...domain.errors import StoreCorruptedError
from ...domain.ports.persistence import COLLECTIONS, Record, RecordStore, ensure_collection

logger = logging.getLogger(__name__)


class JsonFileRecordStore(RecordStore):
    """One pretty-printed JSON array per collection under a data directory."""

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = Path(data_dir)
        self._locks: Dict[str, threading.RLock] = {name: threading.RLock() for name in COLLECTIONS}

    def initialize(self) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)
        for collection in COLLECTIONS:
            path = self._path(collection)
            if not path.exists():
                self._dump(path, [])
                logger.info("Created empty collection file %s", path)

    def read(self, collection: str) -> List[Record]:
        path = self._path(ensure_collection(collection))
        with self._locks[collection]:
            try:
                raw = path.read_text(encoding="utf-8")
            except FileNotFoundError:
                return []
            except UnicodeDecodeError as exc:
                logger.error("Collection file %s is not valid UTF-8: %s", path, exc)
                raise StoreCorruptedError(f"Collection '{collection}' is unreadable") from exc
            try:
                data = json.loads(raw)
            except json.JSONDecodeError as exc:
                logger.error("Collection file %s is not valid JSON: %s", path, exc)
                raise StoreCorruptedError(f"Collection '{collection}' is unreadable") from exc
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            logger.error("Collection file %s does not hold an array of objects", path)
            raise StoreCorruptedError(f"Collection '{collection}' is unreadable")
        return data

    def write(self, collection: str, records: Sequence[Record]) -> None:
        path = self._path(ensure_collection(collection))
        with self._locks[collection]:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            self._dump(path, list(records))

    def lock(self, collection: str) -> threading.RLock:
        return self._locks[ensure_collection(collection)]

    def close(self) -> None:
        return None

    def _path(self, collection: str) -> Path:
        return self._data_dir / f"{collection}.json"

    def _dump(self, path: Path, records: List[Record]) -> None:
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(records, handle, indent=2, ensure_ascii=False, default=str)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
