"""JSON file storage for enrollment records.

The file holds one object keyed by the decimal user ID:

    {"42": {"user_id": 42, "user_name": "alice", "name": "Alice B", ...}}

Saves are serialized through a single asyncio lock and written with an
atomic replace, so concurrent enrollments never drop each other's entries.
"""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
from pathlib import Path

from pydantic import TypeAdapter

from enrollbot.config.logging import get_logger
from enrollbot.core.models import EnrollmentRecord

logger = get_logger("store")

_RECORDS = TypeAdapter(dict[str, EnrollmentRecord])


class EnrollmentStore:
    """Single-writer store over one JSON file."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self._lock = asyncio.Lock()

    async def save(self, record: EnrollmentRecord) -> None:
        """Insert or overwrite the record for `record.user_id`.

        Raises:
            OSError: the file could not be read or written
            ValueError: the existing file is not a valid enrollment map
        """
        loop = asyncio.get_running_loop()
        async with self._lock:
            await loop.run_in_executor(None, self._save_sync, record)
        logger.info(f"Saved enrollment for {record.user_name}", extra={"user_id": record.user_id})

    async def load(self) -> dict[str, EnrollmentRecord]:
        loop = asyncio.get_running_loop()
        async with self._lock:
            return await loop.run_in_executor(None, self._read)

    async def get(self, user_id: int) -> EnrollmentRecord | None:
        records = await self.load()
        return records.get(str(user_id))

    def _read(self) -> dict[str, EnrollmentRecord]:
        try:
            data = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        return _RECORDS.validate_json(data)

    def _save_sync(self, record: EnrollmentRecord) -> None:
        records = self._read()
        records[str(record.user_id)] = record
        self._write(records)

    def _write(self, records: dict[str, EnrollmentRecord]) -> None:
        payload = json.dumps(_RECORDS.dump_python(records, mode="json"), indent=2)

        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.path)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except FileNotFoundError:
                pass
            raise
