"""System router providing health endpoints."""
from fastapi import APIRouter
import time

from ..utils.api_shapes import success

router = APIRouter()

_start_time = time.time()


@router.get("/health", tags=["System"])  # liveness
async def health():
    return success({"ok": True, "uptime_s": int(time.time() - _start_time)})
