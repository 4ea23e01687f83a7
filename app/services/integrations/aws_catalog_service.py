"""Lookups against the AWS services that feed the dashboard pickers.

Regions come from EC2, flows from MediaConnect, output destinations from
MediaPackage and the account id from STS.
"""

from __future__ import annotations

from typing import Any

from botocore.exceptions import ClientError
from loguru import logger

from .aws_session import AwsSessionProvider, collect_pages

REGION_LOOKUP_REGION = "us-east-1"


class AwsCatalogService:
    def __init__(self, sessions: AwsSessionProvider | None = None) -> None:
        self._sessions = sessions or AwsSessionProvider()

    async def list_regions(self) -> list[str]:
        """Sorted names of the regions enabled for the account."""
        try:
            async with self._sessions.client("ec2", REGION_LOOKUP_REGION) as client:
                response = await client.describe_regions()
        except ClientError as e:
            logger.error(f"Error fetching available regions: {e}")
            raise
        return sorted(r["RegionName"] for r in response.get("Regions") or [])

    async def list_mediaconnect_flows(self, region: str) -> list[dict[str, Any]]:
        try:
            async with self._sessions.client("mediaconnect", region) as client:
                return await collect_pages(client, "list_flows", "Flows")
        except ClientError as e:
            logger.error(f"Error listing MediaConnect flows in {region}: {e}")
            raise

    async def list_mediapackage_channels(self, region: str) -> list[dict[str, Any]]:
        try:
            async with self._sessions.client("mediapackage", region) as client:
                return await collect_pages(client, "list_channels", "Channels")
        except ClientError as e:
            logger.error(f"Error listing MediaPackage channels in {region}: {e}")
            raise

    async def get_account_id(self, region: str) -> str:
        try:
            async with self._sessions.client("sts", region) as client:
                identity = await client.get_caller_identity()
        except ClientError as e:
            logger.error(f"Error resolving caller identity: {e}")
            raise
        return identity["Account"]


# Singleton instance
aws_catalog_service = AwsCatalogService()
