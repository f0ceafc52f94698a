from fastapi import APIRouter

from td_device_probe.core.config import settings

router = APIRouter()

@router.get("/health")
def health():
    return {"status": "ok", "upstream": settings.td_api_base_url}
