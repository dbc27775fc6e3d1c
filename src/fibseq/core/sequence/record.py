from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# orjson only encodes integers that fit in a signed/unsigned 64-bit word
_INT64_MIN = -(2**63)
_UINT64_MAX = 2**64 - 1


def wire_int(value: int) -> int | str:
    """
    Integers past the 64-bit range go on the wire as decimal strings.

    The sequence passes that range around its 92nd element.
    """
    if _INT64_MIN <= value <= _UINT64_MAX:
        return value
    return str(value)


@dataclass(frozen=True, slots=True)
class SequenceRecord:
    """
    One snapshot written by a single advance.

    - value: the sequence element at that point (unbounded)
    - context: caller-supplied payload, stored verbatim and never read
    - recorded_at: milliseconds since epoch, set by the actor at write time
    """

    value: int
    context: Any
    recorded_at: int

    def to_wire(self) -> dict[str, Any]:
        """
        Wire/storage shape: {"counter", "location", "timestamp"}.
        """
        return {
            "counter": wire_int(self.value),
            "location": self.context,
            "timestamp": self.recorded_at,
        }

    @classmethod
    def from_wire(cls, payload: dict[str, Any]) -> "SequenceRecord":
        return cls(
            value=int(payload["counter"]),
            context=payload.get("location"),
            recorded_at=int(payload["timestamp"]),
        )


@dataclass(frozen=True, slots=True)
class SequenceState:
    """
    The two durable slots of one sequence.

    Both None -> empty, only current -> seeded, both -> established.
    """

    current: SequenceRecord | None = None
    previous: SequenceRecord | None = None

    @property
    def is_empty(self) -> bool:
        return self.current is None


@dataclass(frozen=True, slots=True)
class AdvanceResult:
    """
    Outcome of one advance.

    previous is the record that was current before the call, not the
    store's previous slot.
    """

    current: SequenceRecord
    previous: SequenceRecord | None

    def to_wire(self) -> dict[str, Any]:
        return {
            "current": self.current.to_wire(),
            "previous": self.previous.to_wire() if self.previous is not None else None,
        }
