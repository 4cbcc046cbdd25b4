"""Liveness endpoint reporting which record layout the decoder serves."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(request: Request) -> dict[str, Any]:
    layout = request.app.state.decoder.layout
    return {
        "status": "healthy",
        "layout_version": layout.version,
        "record_length": layout.record_length,
        "store": request.app.state.settings.store,
    }
