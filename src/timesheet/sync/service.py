from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Union

from ..attendance.store import AttendanceStore
from ..common.datetime_utils import now_local
from ..core.enums import SyncStatus
from ..core.exceptions import SyncFormatError
from .codec import (
    backup_filename,
    build_payload,
    decode_backup_file,
    decode_sync_code,
    encode_backup_file,
    encode_sync_code,
    parse_dataset,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackupFile:
    filename: str
    content: bytes
    mimetype: str = "application/json"


@dataclass(frozen=True)
class SyncResult:
    status: SyncStatus
    message: str
    workers: int = 0
    records: int = 0
    synced_at: Optional[datetime] = None


class SyncService:
    """Moves the whole dataset between devices; imports always overwrite."""

    def __init__(self, store: AttendanceStore, *, clock: Callable[[], datetime] = now_local):
        self._store = store
        self._clock = clock

    def generate_sync_code(self) -> str:
        return encode_sync_code(build_payload(self._store.snapshot(), timestamp=self._clock()))

    def import_sync_code(self, code: str) -> SyncResult:
        return self._import(lambda: decode_sync_code(code), source="sync code")

    def export_backup(self) -> BackupFile:
        now = self._clock()
        content = encode_backup_file(build_payload(self._store.snapshot(), timestamp=now))
        self._store.repository.set_last_sync(now)
        logger.info("backup exported (%d bytes)", len(content))
        return BackupFile(filename=backup_filename(now.date()), content=content)

    def import_backup(self, content: Union[bytes, str]) -> SyncResult:
        return self._import(lambda: decode_backup_file(content), source="backup file")

    def clear_all_data(self) -> None:
        self._store.clear()
        logger.warning("all attendance data cleared")

    def last_sync_time(self) -> Optional[datetime]:
        return self._store.repository.get_last_sync()

    def _import(self, decode: Callable[[], object], *, source: str) -> SyncResult:
        try:
            dataset = parse_dataset(decode())
        except SyncFormatError as e:
            logger.error("%s import failed: %s", source, e)
            return SyncResult(status=SyncStatus.ERROR, message=str(e))

        self._store.replace(dataset.workers, dataset.work_records)
        now = self._clock()
        self._store.repository.set_last_sync(now)
        snapshot = self._store.snapshot()
        return SyncResult(
            status=SyncStatus.SUCCESS,
            message=f"Imported {len(snapshot.workers)} workers and {len(snapshot.work_records)} records",
            workers=len(snapshot.workers),
            records=len(snapshot.work_records),
            synced_at=now,
        )
