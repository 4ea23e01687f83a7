from fastapi import APIRouter, Query

from app.api.v1.dependency import S3Svc
from app.api.v1.schemas.base import ApiOut, error_responses
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode

router = APIRouter(prefix="/api", tags=["Assets"])


@router.get("/s3-assets", responses=error_responses(400, 500))
async def list_s3_assets(
    service: S3Svc,
    region: str | None = Query(None, description="Region of the asset bucket"),
) -> ApiOut[list[str]]:
    """MP4 keys usable as sources of file-backed inputs."""
    if not region:
        raise AppError(
            errcode=AppErrorCode.E_INVALID_REQUEST,
            errmesg="Region not specified.",
            status_code=HttpStatusCode.BAD_REQUEST,
        )
    assets = await service.list_mp4_assets(region)
    return ApiOut[list[str]](results=assets)
