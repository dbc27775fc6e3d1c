from __future__ import annotations

from fastapi import Request

from fibseq.core.config.settings import AppSettings
from fibseq.core.sequence.registry import ActorRegistry


def get_registry(request: Request) -> ActorRegistry:
    return request.app.state.registry


def get_settings(request: Request) -> AppSettings:
    return request.app.state.settings
