from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from fibseq.api.deps import get_registry, get_settings
from fibseq.api.location import location_from_request
from fibseq.api.schemas import SequenceResponse
from fibseq.core.config.settings import AppSettings
from fibseq.core.sequence.registry import ActorRegistry

router = APIRouter(tags=["message"])


@router.get("/message", response_model=SequenceResponse)
def message(
    request: Request,
    registry: ActorRegistry = Depends(get_registry),
    settings: AppSettings = Depends(get_settings),
) -> SequenceResponse:
    """
    Advance the default sequence with the caller's location.
    """
    location = location_from_request(request)
    result = registry.advance(settings.default_sequence, location.model_dump())
    return SequenceResponse.from_result(result)


# Every other GET path answers with the liveness banner
@router.get("/", response_class=PlainTextResponse)
@router.get("/{path:path}", response_class=PlainTextResponse, include_in_schema=False)
def index() -> str:
    return "Sequence actor service is running"
