from __future__ import annotations

from typing import Iterable, Protocol

from fibseq.core.sequence.record import SequenceRecord


class DurableStore(Protocol):
    """
    Private key/value storage of a single sequence.

    Contract:
      - get observes every put/put_many issued earlier on the same store
      - put/put_many return only once the write is durable
      - put_many writes all items or none of them
      - failures raise StorageReadFailure / StorageWriteFailure
    """

    def get(self, key: str) -> SequenceRecord | None:
        ...

    def put(self, key: str, record: SequenceRecord) -> None:
        ...

    def put_many(self, items: Iterable[tuple[str, SequenceRecord]]) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class StoreBackend(Protocol):
    """
    Hands out one isolated DurableStore per sequence name.
    """

    def open(self, name: str) -> DurableStore:
        ...

    def lookup(self, name: str) -> DurableStore | None:
        """
        Existing state of name, or None. Must not allocate anything.
        """
        ...

    def drop(self, name: str) -> None:
        """
        Remove every durable key held for name.
        """
        ...
