from fastapi import APIRouter

from app.shared.api.utils import ApiSuccess

router = APIRouter(tags=["Health"])


@router.get("/api/health", response_model=ApiSuccess)
async def health():
    return ApiSuccess(results={"status": "ok"})
