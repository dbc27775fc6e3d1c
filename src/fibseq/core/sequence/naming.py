from __future__ import annotations

import re

_SEQUENCE_NAME_RE = re.compile(r"^[A-Za-z0-9_\-]+$")


class InvalidSequenceName(ValueError):
    pass


def validate_sequence_name(name: str) -> None:
    """
    Names double as file names for the JSON backend, so keep them path-safe.
    """
    if not name or not _SEQUENCE_NAME_RE.match(name):
        raise InvalidSequenceName(f"invalid sequence name: {name!r}")
