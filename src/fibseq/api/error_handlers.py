from __future__ import annotations

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from fibseq.core.sequence.naming import InvalidSequenceName
from fibseq.storage.errors import StorageError

log = structlog.get_logger()


def register_error_handlers(app: FastAPI) -> None:
    """
    Map domain errors to HTTP responses.

    StorageError -> 503 (state unchanged or last commit kept)
    InvalidSequenceName -> 422
    """

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
        log.error(
            "api.storage_error",
            path=request.url.path,
            error_type=type(exc).__name__,
            error_message=str(exc),
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"error": {"code": type(exc).__name__, "message": "sequence storage unavailable"}},
        )

    @app.exception_handler(InvalidSequenceName)
    async def invalid_name_handler(request: Request, exc: InvalidSequenceName) -> JSONResponse:
        log.warning("api.invalid_sequence_name", path=request.url.path, error_message=str(exc))
        return JSONResponse(
            status_code=422,
            content={"error": {"code": "InvalidSequenceName", "message": str(exc)}},
        )
