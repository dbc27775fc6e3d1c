# src/fibseq/storage/jsonfile.py
from __future__ import annotations

import os
from pathlib import Path
from threading import Lock
from typing import Any, Iterable

import orjson
import structlog

from fibseq.core.sequence.record import SequenceRecord
from fibseq.storage.errors import StorageReadFailure, StorageWriteFailure

log = structlog.get_logger()


class JsonFileStore:
    """
    Durable store backed by a single JSON document.

    - Document shape: {"<key>": {"counter", "location", "timestamp"}, ...}
    - Every write replaces the whole document (tmp file + os.replace),
      so put_many is atomic across keys and readers never see partial JSON.
    - fsync on demand for crash safety.
    """

    def __init__(self, *, path: Path, fsync: bool = True) -> None:
        self._path = path
        self._fsync = fsync
        self._lock = Lock()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> SequenceRecord | None:
        with self._lock:
            payload = self._load().get(key)
        if payload is None:
            return None
        try:
            return SequenceRecord.from_wire(payload)
        except (KeyError, TypeError, ValueError) as exc:
            raise StorageReadFailure(f"corrupt record {key!r} in {self._path}") from exc

    def put(self, key: str, record: SequenceRecord) -> None:
        self.put_many([(key, record)])

    def put_many(self, items: Iterable[tuple[str, SequenceRecord]]) -> None:
        staged = {key: record.to_wire() for key, record in items}
        with self._lock:
            doc = self._load()
            doc.update(staged)
            self._write(doc)

    def delete(self, key: str) -> None:
        with self._lock:
            doc = self._load()
            if key not in doc:
                return
            del doc[key]
            self._write(doc)

    # ---------------- Internals ----------------

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            doc = orjson.loads(self._path.read_bytes())
        except (OSError, orjson.JSONDecodeError) as exc:
            log.error("store.read_failed", path=str(self._path), error=str(exc))
            raise StorageReadFailure(f"cannot read {self._path}: {exc}") from exc
        if not isinstance(doc, dict):
            raise StorageReadFailure(f"unexpected document type in {self._path}")
        return doc

    def _write(self, doc: dict[str, Any]) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            data = orjson.dumps(doc, option=orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2)
            with tmp.open("wb") as fh:
                fh.write(data)
                fh.flush()
                if self._fsync:
                    os.fsync(fh.fileno())
            tmp.replace(self._path)
        except (OSError, TypeError) as exc:
            log.error("store.write_failed", path=str(self._path), error=str(exc))
            raise StorageWriteFailure(f"cannot write {self._path}: {exc}") from exc
        finally:
            tmp.unlink(missing_ok=True)


class JsonFileBackend:
    """
    One JsonFileStore per sequence name: <state_dir>/<name>.json
    """

    def __init__(self, *, state_dir: Path, fsync: bool = True) -> None:
        self._state_dir = state_dir
        self._fsync = fsync
        self._lock = Lock()
        self._stores: dict[str, JsonFileStore] = {}

    def path_for(self, name: str) -> Path:
        return self._state_dir / f"{name}.json"

    def open(self, name: str) -> JsonFileStore:
        with self._lock:
            store = self._stores.get(name)
            if store is None:
                store = JsonFileStore(path=self.path_for(name), fsync=self._fsync)
                self._stores[name] = store
            return store

    def lookup(self, name: str) -> JsonFileStore | None:
        with self._lock:
            store = self._stores.get(name)
        if store is not None:
            return store
        path = self.path_for(name)
        if not path.exists():
            return None
        # Read-only view; not cached so unknown names leave no trace
        return JsonFileStore(path=path, fsync=self._fsync)

    def drop(self, name: str) -> None:
        with self._lock:
            self._stores.pop(name, None)
            path = self.path_for(name)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageWriteFailure(f"cannot delete {path}: {exc}") from exc
        log.info("store.dropped", sequence=name, path=str(path))
