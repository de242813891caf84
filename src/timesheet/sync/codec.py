"""Whole-dataset serialization for the sync code and backup file channels.

Both channels carry the same canonical payload; they differ only in the
outer encoding (base64 text for copy-paste, pretty JSON for files).
"""

from __future__ import annotations

import base64
import binascii
import json
from datetime import date, datetime
from typing import Any, Mapping, Union

from ..attendance.mapping import record_from_dict, record_to_dict, worker_from_dict, worker_to_dict
from ..attendance.model import Dataset
from ..common.datetime_utils import to_iso_timestamp
from ..core.constants import APP_NAME, BACKUP_FILENAME_PATTERN, BACKUP_FORMAT_VERSION
from ..core.exceptions import SyncFormatError


def build_payload(dataset: Dataset, *, timestamp: datetime) -> dict[str, Any]:
    return {
        "workers": [worker_to_dict(w) for w in dataset.workers],
        "workRecords": [record_to_dict(r) for r in dataset.work_records],
        "timestamp": to_iso_timestamp(timestamp),
        "version": BACKUP_FORMAT_VERSION,
        "appName": APP_NAME,
    }


def parse_dataset(payload: Any) -> Dataset:
    """Validate the payload shape and build entities; nothing is applied here."""
    if not isinstance(payload, Mapping):
        raise SyncFormatError("Sync data must be a JSON object")
    workers = payload.get("workers")
    records = payload.get("workRecords")
    if not isinstance(workers, list) or not isinstance(records, list):
        raise SyncFormatError("Sync data must contain 'workers' and 'workRecords' lists")

    try:
        return Dataset(
            workers=tuple(worker_from_dict(w) for w in workers),
            work_records=tuple(record_from_dict(r) for r in records),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise SyncFormatError(f"Invalid entry in sync data: {e}") from e


def encode_sync_code(payload: Mapping[str, Any]) -> str:
    raw = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def decode_sync_code(code: str) -> Any:
    text = "".join((code or "").split())
    if not text:
        raise SyncFormatError("Sync code is empty")
    try:
        raw = base64.b64decode(text, validate=True).decode("utf-8")
    except (binascii.Error, ValueError) as e:
        raise SyncFormatError("Sync code is not valid base64 text") from e
    return _loads(raw)


def encode_backup_file(payload: Mapping[str, Any]) -> bytes:
    return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")


def decode_backup_file(content: Union[bytes, str]) -> Any:
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise SyncFormatError("Backup file is not UTF-8 text") from e
    return _loads(content)


def backup_filename(day: date) -> str:
    return BACKUP_FILENAME_PATTERN.format(date=day.isoformat())


def _loads(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError as e:
        raise SyncFormatError("Sync data is not valid JSON") from e
