from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from threading import Lock
from typing import Any, Callable, Iterator

import structlog

from fibseq.core.logging.setup import bound_context
from fibseq.core.sequence.actor import SequenceActor, now_ms
from fibseq.core.sequence.naming import validate_sequence_name
from fibseq.core.sequence.record import AdvanceResult, SequenceState
from fibseq.storage.base import StoreBackend

log = structlog.get_logger()


@dataclass(slots=True)
class _Slot:
    actor: SequenceActor
    lock: Lock = field(default_factory=Lock)
    # Set under lock by delete(); holders of a stale slot must re-resolve
    retired: bool = False


class ActorRegistry:
    """
    Explicit map from sequence name to its actor.

    - actors are created on first advance and kept until delete()
    - one lock per name: at most one advance per sequence at a time
    - a slot stays registered until delete() has wiped its storage, so
      nobody can open a second actor on the same name meanwhile
    - different names never share state or locks
    """

    def __init__(
        self,
        *,
        backend: StoreBackend,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._backend = backend
        self._clock = clock
        self._lock = Lock()
        self._slots: dict[str, _Slot] = {}

    def get(self, name: str) -> SequenceActor:
        return self._slot(name).actor

    def advance(self, name: str, context: Any) -> AdvanceResult:
        with self._locked(name) as slot, bound_context(sequence=name):
            return slot.actor.advance(context)

    def snapshot(self, name: str) -> SequenceState:
        """
        Committed state of name. Never registers an actor.
        """
        validate_sequence_name(name)
        with self._lock:
            slot = self._slots.get(name)
        if slot is not None:
            with slot.lock:
                if not slot.retired:
                    return slot.actor.snapshot()

        store = self._backend.lookup(name)
        if store is None:
            return SequenceState()
        return SequenceActor(name=name, store=store, clock=self._clock).snapshot()

    def delete(self, name: str) -> None:
        with self._locked(name) as slot:
            self._backend.drop(name)
            with self._lock:
                del self._slots[name]
            slot.retired = True
        log.info("sequence.deleted", sequence=name)

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._slots)

    @contextmanager
    def _locked(self, name: str) -> Iterator[_Slot]:
        while True:
            slot = self._slot(name)
            with slot.lock:
                if slot.retired:
                    continue
                yield slot
                return

    def _slot(self, name: str) -> _Slot:
        validate_sequence_name(name)
        with self._lock:
            slot = self._slots.get(name)
            if slot is None:
                actor = SequenceActor(
                    name=name,
                    store=self._backend.open(name),
                    clock=self._clock,
                )
                slot = _Slot(actor=actor)
                self._slots[name] = slot
                log.debug("sequence.actor_created", sequence=name)
            return slot
