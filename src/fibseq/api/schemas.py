from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from fibseq.core.sequence.record import AdvanceResult, SequenceRecord, SequenceState


class StoredData(BaseModel):
    counter: int
    location: Any
    timestamp: int

    @classmethod
    def from_record(cls, record: SequenceRecord) -> "StoredData":
        return cls(counter=record.value, location=record.context, timestamp=record.recorded_at)


class SequenceResponse(BaseModel):
    """
    Shape shared by /message, advance and snapshot responses.
    """

    current: StoredData | None
    previous: StoredData | None = None

    @classmethod
    def from_result(cls, result: AdvanceResult) -> "SequenceResponse":
        return cls(
            current=StoredData.from_record(result.current),
            previous=StoredData.from_record(result.previous) if result.previous is not None else None,
        )

    @classmethod
    def from_state(cls, state: SequenceState) -> "SequenceResponse":
        return cls(
            current=StoredData.from_record(state.current) if state.current is not None else None,
            previous=StoredData.from_record(state.previous) if state.previous is not None else None,
        )
