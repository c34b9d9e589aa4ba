from __future__ import annotations
from fastapi import APIRouter, Depends, Request
from lukucheck.config import settings
from lukucheck.deps import get_clock
from lukucheck.services.time_windows import Clock

router = APIRouter()

@router.get("/health")
async def health(request: Request, clock: Clock = Depends(get_clock)):
    return {
        "status": "ok",
        "env": settings.environment,
        "time": clock().isoformat(),
        "request_id": request.headers.get("x-request-id") or request.state.request_id,
    }

@router.get("/version")
async def version():
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "git_sha": settings.git_sha,
        "build": "docker",
    }
