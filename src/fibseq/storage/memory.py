from __future__ import annotations

from threading import Lock
from typing import Iterable

from fibseq.core.sequence.record import SequenceRecord


class MemoryStore:
    """
    Process-local store. Durable only for the lifetime of the process.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._data: dict[str, SequenceRecord] = {}

    def get(self, key: str) -> SequenceRecord | None:
        with self._lock:
            return self._data.get(key)

    def put(self, key: str, record: SequenceRecord) -> None:
        with self._lock:
            self._data[key] = record

    def put_many(self, items: Iterable[tuple[str, SequenceRecord]]) -> None:
        staged = dict(items)
        with self._lock:
            self._data.update(staged)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)


class MemoryBackend:
    """
    One MemoryStore per sequence name, created on first open.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._stores: dict[str, MemoryStore] = {}

    def open(self, name: str) -> MemoryStore:
        with self._lock:
            store = self._stores.get(name)
            if store is None:
                store = MemoryStore()
                self._stores[name] = store
            return store

    def lookup(self, name: str) -> MemoryStore | None:
        with self._lock:
            return self._stores.get(name)

    def drop(self, name: str) -> None:
        with self._lock:
            self._stores.pop(name, None)
