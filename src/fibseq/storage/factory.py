from __future__ import annotations

import structlog

from fibseq.core.config.settings import AppSettings
from fibseq.storage.base import StoreBackend
from fibseq.storage.jsonfile import JsonFileBackend
from fibseq.storage.memory import MemoryBackend

log = structlog.get_logger()


def build_backend(settings: AppSettings) -> StoreBackend:
    if settings.store_backend == "memory":
        log.info("store.backend_selected", backend="memory")
        return MemoryBackend()

    log.info("store.backend_selected", backend="json", state_dir=str(settings.state_dir))
    return JsonFileBackend(state_dir=settings.state_dir, fsync=settings.fsync)
