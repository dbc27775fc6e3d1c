from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response

from fibseq.api.deps import get_registry
from fibseq.api.location import location_from_request
from fibseq.api.schemas import SequenceResponse
from fibseq.core.sequence.registry import ActorRegistry

router = APIRouter(tags=["sequences"])


@router.post(
    "/sequences/{name}/advance",
    response_model=SequenceResponse,
    summary="Advance a named sequence by one step",
)
def advance_sequence(
    name: str,
    request: Request,
    context: Any = Body(default=None),
    registry: ActorRegistry = Depends(get_registry),
) -> SequenceResponse:
    # No body: record where the request came from, like /message does
    if context is None:
        context = location_from_request(request).model_dump()
    result = registry.advance(name, context)
    return SequenceResponse.from_result(result)


@router.get(
    "/sequences/{name}",
    response_model=SequenceResponse,
    summary="Read the committed state of a sequence",
)
def get_sequence(name: str, registry: ActorRegistry = Depends(get_registry)) -> SequenceResponse:
    return SequenceResponse.from_state(registry.snapshot(name))


@router.delete("/sequences/{name}", status_code=204, summary="Delete a sequence and its state")
def delete_sequence(name: str, registry: ActorRegistry = Depends(get_registry)) -> Response:
    registry.delete(name)
    return Response(status_code=204)
