from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator

import orjson
import structlog
from structlog.typing import EventDict, WrappedLogger

from fibseq.core.sequence.record import wire_int


def stringify_big_ints(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    """
    Processor: orjson refuses integers past 64 bits, and sequence values
    get there. Render those as strings so a log line never fails a call.
    """
    for key, value in event_dict.items():
        if isinstance(value, int) and not isinstance(value, bool):
            event_dict[key] = wire_int(value)
    return event_dict


def _json_serializer(obj: Any, default: Any) -> str:
    return orjson.dumps(obj, default=default).decode("utf-8")


def configure_logging(*, level: str = "INFO") -> None:
    """
    Configure structured JSON logging for the whole process.

    Called from the application factory.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.dict_tracebacks,
            stringify_big_ints,
            structlog.processors.JSONRenderer(serializer=_json_serializer),
        ],
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )

    # uvicorn / fastapi go through stdlib logging
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


@contextmanager
def bound_context(**values: Any) -> Iterator[None]:
    """
    Bind values to every log entry emitted inside the block.

    Example:
        with bound_context(sequence="foo"):
            ...
    """
    with structlog.contextvars.bound_contextvars(**values):
        yield
