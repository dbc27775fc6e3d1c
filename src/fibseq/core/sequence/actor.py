from __future__ import annotations

import time
from typing import Any, Callable

import structlog

from fibseq.core.sequence.record import AdvanceResult, SequenceRecord, SequenceState
from fibseq.storage.base import DurableStore
from fibseq.storage.errors import StorageError

log = structlog.get_logger()

CURRENT_KEY = "current"
PREVIOUS_KEY = "previous"

# Bootstrap seed: the sequence runs 2, 3, 5, 8, ... (not 0, 1, 1, 2)
SEED_VALUE = 2
FALLBACK_PREVIOUS = 1


def now_ms() -> int:
    return time.time_ns() // 1_000_000


class SequenceActor:
    """
    Owns one named sequence and its two durable slots.

    advance() is a read-modify-write over the store; callers must not
    overlap two advances on the same actor (ActorRegistry serializes them).

    State machine:
      empty       -> seeded       (current = 2, previous slot untouched)
      seeded      -> established  (previous = old current, current = 1 + old)
      established -> established  (previous = old current, current = old + old previous)
    """

    def __init__(
        self,
        *,
        name: str,
        store: DurableStore,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._name = name
        self._store = store
        self._clock = clock

    @property
    def name(self) -> str:
        return self._name

    def snapshot(self) -> SequenceState:
        return SequenceState(
            current=self._store.get(CURRENT_KEY),
            previous=self._store.get(PREVIOUS_KEY),
        )

    def advance(self, context: Any) -> AdvanceResult:
        try:
            state = self.snapshot()
            current = state.current

            value = next_value(state)
            recorded_at = self._clock()
            if current is not None and recorded_at < current.recorded_at:
                # Wall clock stepped back; keep timestamps non-decreasing
                recorded_at = current.recorded_at

            record = SequenceRecord(value=value, context=context, recorded_at=recorded_at)

            if current is None:
                self._store.put(CURRENT_KEY, record)
            else:
                # Single atomic write: previous and current never diverge
                self._store.put_many([(PREVIOUS_KEY, current), (CURRENT_KEY, record)])

        except StorageError as exc:
            log.error(
                "sequence.advance_failed",
                sequence=self._name,
                error_type=type(exc).__name__,
                error_message=str(exc),
            )
            raise

        log.info(
            "sequence.advanced",
            sequence=self._name,
            value=record.value,
            previous_value=current.value if current is not None else None,
        )
        return AdvanceResult(current=record, previous=current)


def next_value(state: SequenceState) -> int:
    """
    Next element for the given committed state.
    """
    if state.current is None:
        return SEED_VALUE
    p = state.previous.value if state.previous is not None else FALLBACK_PREVIOUS
    return p + state.current.value
