from __future__ import annotations

import asyncio
from pathlib import Path

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from notetagger.config import settings

router = APIRouter()


@router.get("/")
async def health_check():
    """Health check endpoint."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "healthy",
            "service": "notetagger-api",
            "version": "0.1.0"
        }
    )


@router.get("/ready")
async def readiness_check():
    """Readiness check endpoint."""
    vault_ready = await asyncio.to_thread(lambda: Path(settings.vault_path).is_dir())
    return JSONResponse(
        status_code=status.HTTP_200_OK if vault_ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ready" if vault_ready else "unavailable",
            "vault": "found" if vault_ready else "missing",
            "api_prefix": settings.api_prefix
        }
    )
