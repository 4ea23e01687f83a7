"""File-backed event ledger.

The ledger is a single JSON document `{"events": {<channel_id>: <EventRecord>}}`
that is always rewritten in full. Corrupt or missing files are replaced with an
empty ledger instead of failing the request.

Usage:
    store = get_ledger_store()

    root = await store.load()

    async with store.mutate() as root:
        root.events[record.channel_id] = record
"""

from __future__ import annotations

import asyncio
import os
import tempfile
from collections.abc import AsyncIterator, Callable, Iterable
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import orjson
from loguru import logger
from pydantic import ValidationError

from app.app_config import get_app_environ_config
from app.schemas.event import EventRecord, LedgerRoot

_DUMP_OPTIONS = orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS


class LedgerStore:
    """Owner of the on-disk ledger.

    Callers receive fresh model copies from `load()`; changes are persisted
    only through `save()` or `mutate()`. Every access, including the repair
    writes done by `load()`, is serialized within the process.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> LedgerRoot:
        """Load the ledger, repairing it when absent or malformed.

        Raises:
            OSError: On I/O failures other than a missing file
        """
        async with self._lock:
            return await self._load_locked()

    async def save(self, root: LedgerRoot) -> None:
        """Serialize the whole ledger and atomically replace the file."""
        async with self._lock:
            await self._save_locked(root)

    async def _load_locked(self) -> LedgerRoot:
        try:
            raw = await asyncio.to_thread(self._path.read_bytes)
        except FileNotFoundError:
            logger.info("Ledger {} not found, creating an empty one", self._path)
            root = LedgerRoot()
            await self._save_locked(root)
            return root

        try:
            data = orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            logger.warning("Ledger {} is not valid JSON ({}), resetting", self._path, e)
            return await self._reset()

        if not isinstance(data, dict) or not isinstance(data.get("events"), dict):
            logger.warning("Ledger {} has an unexpected shape, resetting", self._path)
            return await self._reset()

        root, dropped = self._parse_events(data["events"])
        if dropped:
            logger.warning("Dropped {} malformed ledger entries: {}", len(dropped), dropped)
            await self._save_locked(root)
        return root

    async def _save_locked(self, root: LedgerRoot) -> None:
        payload = orjson.dumps(root.to_ledger(), option=_DUMP_OPTIONS)
        await asyncio.to_thread(self._write_atomic, payload)

    @asynccontextmanager
    async def mutate(self) -> AsyncIterator[LedgerRoot]:
        """Serialized read-modify-write; the root is saved when the block exits cleanly."""
        async with self._lock:
            root = await self._load_locked()
            yield root
            await self._save_locked(root)

    async def get_event(self, channel_id: str) -> EventRecord | None:
        root = await self.load()
        return root.events.get(channel_id)

    async def put_event(self, record: EventRecord) -> EventRecord:
        async with self.mutate() as root:
            root.events[record.channel_id] = record
        return record

    async def remove_event(self, channel_id: str) -> bool:
        removed = await self.prune(lambda events: [channel_id] if channel_id in events else [])
        return bool(removed)

    async def prune(self, select: Callable[[dict[str, EventRecord]], Iterable[str]]) -> list[str]:
        """Delete the keys chosen by `select`; the file is written only if something was removed."""
        async with self._lock:
            root = await self._load_locked()
            removed = [key for key in select(root.events) if key in root.events]
            if not removed:
                return []
            for key in removed:
                del root.events[key]
            await self._save_locked(root)
            return removed

    async def _reset(self) -> LedgerRoot:
        root = LedgerRoot()
        await self._save_locked(root)
        return root

    @staticmethod
    def _parse_events(events: dict[str, Any]) -> tuple[LedgerRoot, list[str]]:
        parsed: dict[str, EventRecord] = {}
        dropped: list[str] = []
        for key, value in events.items():
            try:
                parsed[key] = EventRecord.model_validate(value)
            except ValidationError as e:
                logger.warning("Ledger entry {} is invalid: {}", key, e.errors(include_url=False))
                dropped.append(key)
        return LedgerRoot(events=parsed), dropped

    def _write_atomic(self, payload: bytes) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp", delete=False
        ) as handle:
            tmp_path = Path(handle.name)
            try:
                handle.write(payload)
            except OSError:
                handle.close()
                tmp_path.unlink(missing_ok=True)
                raise
        try:
            os.replace(tmp_path, self._path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise


_ledger_store: LedgerStore | None = None


def get_ledger_store() -> LedgerStore:
    """Process-wide ledger store for the configured path."""
    global _ledger_store
    if _ledger_store is None:
        _ledger_store = LedgerStore(get_app_environ_config().EVENTS_LEDGER_PATH)
    return _ledger_store
