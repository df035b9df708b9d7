from fastapi import APIRouter
from typing import Any

from app.core.time import utc_now, to_utc_z

router = APIRouter()

@router.get("", response_model=dict[str, Any])
def health_check() -> Any:
    """
    Health check endpoint.
    """
    return {"status": "ok", "timestamp": to_utc_z(utc_now())}
