# ================================
# file: app/routers/health.py
# ================================
from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
def health():
    return {"ok": True, "time": datetime.now(timezone.utc).isoformat()}
