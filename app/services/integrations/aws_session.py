"""Shared aioboto3 session handling for the AWS service wrappers."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import aioboto3
from botocore.exceptions import ClientError

from app.app_config import AppEnvironConfig, get_app_environ_config
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode

_NOT_FOUND_CODES = {"NotFoundException", "NotFound", "ResourceNotFoundException", "NoSuchKey"}


def is_not_found(exc: BaseException) -> bool:
    """True when a botocore error reports a missing resource."""
    if not isinstance(exc, ClientError):
        return False
    error = exc.response.get("Error", {})
    if error.get("Code") in _NOT_FOUND_CODES:
        return True
    return exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode") == 404


def client_error_message(exc: ClientError) -> str:
    error = exc.response.get("Error", {})
    return error.get("Message") or error.get("Code") or str(exc)


class AwsSessionProvider:
    """Builds aioboto3 clients from the configured credential pair.

    A session is created per call; nothing is pooled across requests.
    """

    def __init__(self, cfg: AppEnvironConfig | None = None) -> None:
        self._cfg = cfg or get_app_environ_config()

    def _get_session(self) -> aioboto3.Session:
        if not self._cfg.AWS_ACCESS_KEY_ID or not self._cfg.AWS_SECRET_ACCESS_KEY:
            raise AppError(
                errcode=AppErrorCode.E_CONFIG_MISSING,
                errmesg="AWS credentials (AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY) are not configured",
                status_code=HttpStatusCode.BAD_REQUEST,
            )
        return aioboto3.Session(
            aws_access_key_id=self._cfg.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=self._cfg.AWS_SECRET_ACCESS_KEY,
        )

    @asynccontextmanager
    async def client(self, service_name: str, region: str) -> AsyncIterator[Any]:
        session = self._get_session()
        async with session.client(service_name, region_name=region) as client:  # type: ignore[attr-defined]
            yield client


async def collect_pages(client: Any, operation: str, result_key: str, **kwargs: Any) -> list[dict]:
    """Run a paginated list operation and flatten `result_key` across pages."""
    items: list[dict] = []
    paginator = client.get_paginator(operation)
    async for page in paginator.paginate(**kwargs):
        items.extend(page.get(result_key) or [])
    return items
