from __future__ import annotations

from fastapi import APIRouter

from fibseq.api.routes.health import router as health_router
from fibseq.api.routes.message import router as message_router
from fibseq.api.routes.sequences import router as sequences_router

# Mounted under /api
router = APIRouter()

router.include_router(health_router)
router.include_router(sequences_router)

# Mounted at the root, outside /api
public_router = message_router
