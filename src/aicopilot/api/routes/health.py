"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe: always returns 200 if the process is up."""
    return {"status": "ok"}


@router.get("/ready")
async def ready(request: Request) -> dict[str, object]:
    """Readiness probe: reports whether the active provider has a credential."""
    service = request.app.state.copilot
    return {
        "status": "ready",
        "provider": service.provider.name,
        "provider_available": service.is_available(),
    }
