"""AWS Elemental MediaLive helper service.

This module provides a thin wrapper around the aioboto3 `medialive` client.
Every method opens its own client for the requested region.

Usage:
    from app.services.integrations.medialive_service import medialive_service

    channels = await medialive_service.list_channels("eu-west-1")
    channel = await medialive_service.describe_channel("eu-west-1", "1234567")
    await medialive_service.start_channel("eu-west-1", "1234567")
"""

from __future__ import annotations

from typing import Any

from botocore.exceptions import ClientError
from loguru import logger

from .aws_session import AwsSessionProvider, collect_pages

# Response metadata is not useful to callers or to the HTML views
_STRIP_KEYS = {"ResponseMetadata"}


def _clean(response: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in response.items() if k not in _STRIP_KEYS}


class MediaLiveService:
    """Service wrapper for MediaLive channel/input operations."""

    def __init__(self, sessions: AwsSessionProvider | None = None) -> None:
        self._sessions = sessions or AwsSessionProvider()

    # ==================== LISTING ====================

    async def list_channels(self, region: str) -> list[dict[str, Any]]:
        try:
            async with self._sessions.client("medialive", region) as client:
                return await collect_pages(client, "list_channels", "Channels")
        except ClientError as e:
            logger.error(f"Error listing MediaLive channels in {region}: {e}")
            raise

    async def list_channel_ids(self, region: str) -> set[str]:
        channels = await self.list_channels(region)
        return {c["Id"] for c in channels if c.get("Id")}

    async def list_inputs(self, region: str) -> list[dict[str, Any]]:
        try:
            async with self._sessions.client("medialive", region) as client:
                return await collect_pages(client, "list_inputs", "Inputs")
        except ClientError as e:
            logger.error(f"Error listing MediaLive inputs in {region}: {e}")
            raise

    async def list_input_devices(self, region: str) -> list[dict[str, Any]]:
        try:
            async with self._sessions.client("medialive", region) as client:
                return await collect_pages(client, "list_input_devices", "InputDevices")
        except ClientError as e:
            logger.error(f"Error listing input devices in {region}: {e}")
            raise

    async def list_input_security_groups(self, region: str) -> list[dict[str, Any]]:
        try:
            async with self._sessions.client("medialive", region) as client:
                return await collect_pages(client, "list_input_security_groups", "InputSecurityGroups")
        except ClientError as e:
            logger.error(f"Error listing input security groups in {region}: {e}")
            raise

    # ==================== DESCRIBE ====================

    async def describe_channel(self, region: str, channel_id: str) -> dict[str, Any]:
        try:
            async with self._sessions.client("medialive", region) as client:
                return _clean(await client.describe_channel(ChannelId=channel_id))
        except ClientError as e:
            logger.error(f"Error describing channel {channel_id}: {e}")
            raise

    async def describe_input(self, region: str, input_id: str) -> dict[str, Any]:
        try:
            async with self._sessions.client("medialive", region) as client:
                return _clean(await client.describe_input(InputId=input_id))
        except ClientError as e:
            logger.error(f"Error describing input {input_id}: {e}")
            raise

    # ==================== CREATE ====================

    async def create_input(self, region: str, params: dict[str, Any]) -> dict[str, Any]:
        """Create an input and return the `Input` description."""
        try:
            async with self._sessions.client("medialive", region) as client:
                response = await client.create_input(**params)
        except ClientError as e:
            logger.error(f"Error creating {params.get('Type')} input {params.get('Name')}: {e}")
            raise
        created = response["Input"]
        logger.info(f"Created {created.get('Type')} input {created.get('Id')} in {region}")
        return created

    async def create_channel(self, region: str, params: dict[str, Any]) -> dict[str, Any]:
        """Create a channel and return the `Channel` description."""
        try:
            async with self._sessions.client("medialive", region) as client:
                response = await client.create_channel(**params)
        except ClientError as e:
            logger.error(f"Error creating channel {params.get('Name')}: {e}")
            raise
        created = response["Channel"]
        logger.info(f"Created channel {created.get('Id')} in {region}")
        return created

    # ==================== MANAGE ====================

    async def start_channel(self, region: str, channel_id: str) -> dict[str, Any]:
        try:
            async with self._sessions.client("medialive", region) as client:
                return _clean(await client.start_channel(ChannelId=channel_id))
        except ClientError as e:
            logger.error(f"Error starting channel {channel_id}: {e}")
            raise

    async def stop_channel(self, region: str, channel_id: str) -> dict[str, Any]:
        try:
            async with self._sessions.client("medialive", region) as client:
                return _clean(await client.stop_channel(ChannelId=channel_id))
        except ClientError as e:
            logger.error(f"Error stopping channel {channel_id}: {e}")
            raise

    async def delete_channel(self, region: str, channel_id: str) -> dict[str, Any]:
        try:
            async with self._sessions.client("medialive", region) as client:
                return _clean(await client.delete_channel(ChannelId=channel_id))
        except ClientError as e:
            logger.error(f"Error deleting channel {channel_id}: {e}")
            raise

    async def delete_input(self, region: str, input_id: str) -> None:
        try:
            async with self._sessions.client("medialive", region) as client:
                await client.delete_input(InputId=input_id)
        except ClientError as e:
            logger.error(f"Error deleting input {input_id}: {e}")
            raise


# Singleton instance
medialive_service = MediaLiveService()
