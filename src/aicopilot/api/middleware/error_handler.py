"""Global exception handlers mapping domain exceptions to HTTP responses."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from aicopilot.exceptions import CopilotError, OutOfRangeError


def register_error_handlers(app: FastAPI) -> None:
    """Register exception-to-HTTP-status mappings."""

    @app.exception_handler(OutOfRangeError)
    async def handle_out_of_range(request: Request, exc: OutOfRangeError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"error": str(exc), "type": "out_of_range"})

    @app.exception_handler(CopilotError)
    async def handle_generic_error(request: Request, exc: CopilotError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"error": str(exc), "type": "copilot_error"})
