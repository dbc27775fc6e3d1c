from __future__ import annotations

from itertools import count
from typing import Callable, Iterable

import pytest

from fibseq.core.sequence.record import SequenceRecord
from fibseq.storage.errors import StorageReadFailure, StorageWriteFailure
from fibseq.storage.memory import MemoryStore


class FlakyStore(MemoryStore):
    """
    MemoryStore that can be armed to fail reads or writes.
    """

    def __init__(self) -> None:
        super().__init__()
        self.fail_reads = False
        self.fail_writes = False

    def get(self, key: str) -> SequenceRecord | None:
        if self.fail_reads:
            raise StorageReadFailure(f"read of {key!r} failed")
        return super().get(key)

    def put(self, key: str, record: SequenceRecord) -> None:
        if self.fail_writes:
            raise StorageWriteFailure(f"write of {key!r} failed")
        super().put(key, record)

    def put_many(self, items: Iterable[tuple[str, SequenceRecord]]) -> None:
        if self.fail_writes:
            raise StorageWriteFailure("batch write failed")
        super().put_many(items)


class FlakyBackend:
    def __init__(self) -> None:
        self.stores: dict[str, FlakyStore] = {}

    def open(self, name: str) -> FlakyStore:
        return self.stores.setdefault(name, FlakyStore())

    def lookup(self, name: str) -> FlakyStore | None:
        return self.stores.get(name)

    def drop(self, name: str) -> None:
        self.stores.pop(name, None)


@pytest.fixture
def clock() -> Callable[[], int]:
    ticks = count(start=1_700_000_000_000, step=7)
    return lambda: next(ticks)


@pytest.fixture
def flaky_store() -> FlakyStore:
    return FlakyStore()


@pytest.fixture
def flaky_backend() -> FlakyBackend:
    return FlakyBackend()
