"""AWS S3 helper service.

This module provides a thin wrapper around aioboto3 S3 operations for the MP4
assets that file-backed inputs read from.

Usage:
    from app.services.integrations.s3_storage import s3_service

    # Keys of the MP4 files under the configured prefix
    keys = await s3_service.list_mp4_assets(region="eu-west-1")

    # URL handed to MediaLive for an asset key
    url = s3_service.get_asset_url("events/opening.mp4")
"""

from __future__ import annotations

from botocore.exceptions import ClientError
from loguru import logger

from app.app_config import AppEnvironConfig, get_app_environ_config
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode

from .aws_session import AwsSessionProvider, collect_pages

MP4_SUFFIX = ".mp4"


class S3Service:
    """Service wrapper for AWS S3 operations on the asset bucket."""

    def __init__(
        self,
        cfg: AppEnvironConfig | None = None,
        sessions: AwsSessionProvider | None = None,
    ) -> None:
        self._cfg = cfg or get_app_environ_config()
        self._sessions = sessions or AwsSessionProvider(self._cfg)

    def _get_bucket_name(self) -> str:
        """Get S3 bucket name from config."""
        bucket = self._cfg.S3_ASSET_BUCKET
        if not bucket:
            raise AppError(
                errcode=AppErrorCode.E_CONFIG_MISSING,
                errmesg="S3_ASSET_BUCKET is not configured",
                status_code=HttpStatusCode.BAD_REQUEST,
            )
        return bucket

    def get_asset_url(self, key: str) -> str:
        """Generate the `s3://` URL of an asset key.

        Args:
            key: Object key (e.g., "events/opening.mp4")

        Returns:
            S3 URL (e.g., "s3://assets-bucket/events/opening.mp4")
        """
        return f"s3://{self._get_bucket_name()}/{key}"

    async def list_mp4_assets(self, region: str) -> list[str]:
        """List MP4 object keys under the configured prefix.

        Args:
            region: Region used for the S3 client

        Returns:
            Object keys ending in ".mp4" (case-insensitive), excluding the prefix itself

        Raises:
            AppError: If the bucket is not configured
            ClientError: If listing fails
        """
        bucket = self._get_bucket_name()
        prefix = self._cfg.S3_ASSET_PREFIX

        try:
            async with self._sessions.client("s3", region) as client:
                contents = await collect_pages(client, "list_objects_v2", "Contents", Bucket=bucket, Prefix=prefix)
        except ClientError as e:
            logger.error(f"Failed to list S3 assets in {bucket}/{prefix}: {e}")
            raise

        return filter_mp4_keys((item["Key"] for item in contents), prefix)


def filter_mp4_keys(keys, prefix: str) -> list[str]:
    return [key for key in keys if key.lower().endswith(MP4_SUFFIX) and key != prefix]


# Singleton instance
s3_service = S3Service()
