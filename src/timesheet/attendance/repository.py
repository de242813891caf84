from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Callable, Optional, Protocol, Sequence

from ..common.datetime_utils import now_local, parse_iso_timestamp, to_iso_timestamp
from ..core.constants import LAST_SYNC_KEY, WORK_RECORDS_KEY, WORKERS_KEY
from ..storage.key_value import KeyValueStore
from ..workers.model import Worker
from .mapping import record_from_dict, record_to_dict, worker_from_dict, worker_to_dict
from .model import Dataset, WorkRecord

logger = logging.getLogger(__name__)


def default_workers(created_at: datetime) -> tuple[Worker, ...]:
    """Seed workers written when nothing usable is stored yet."""
    return (
        Worker(id="1", name="Іван Петренко", position="Order picker", phone="+380501234567", created_at=created_at),
        Worker(id="2", name="Марія Коваленко", position="Order picker", phone="+380671234567", created_at=created_at),
        Worker(
            id="3",
            name="Олександр Сидоренко",
            position="Senior order picker",
            phone="+380931234567",
            created_at=created_at,
        ),
    )


def _dump_workers(workers: Sequence[Worker]) -> str:
    return json.dumps([worker_to_dict(w) for w in workers], ensure_ascii=False)


def _dump_records(records: Sequence[WorkRecord]) -> str:
    return json.dumps([record_to_dict(r) for r in records], ensure_ascii=False)


class DatasetRepository(Protocol):
    """Persistence interface for the attendance dataset.

    Note (DIP): the store depends on this interface, not on a concrete backend.
    """

    def load(self) -> Dataset:
        raise NotImplementedError

    def save_workers(self, workers: Sequence[Worker]) -> None:
        raise NotImplementedError

    def save_records(self, records: Sequence[WorkRecord]) -> None:
        raise NotImplementedError

    def save(self, dataset: Dataset) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def get_last_sync(self) -> Optional[datetime]:
        raise NotImplementedError

    def set_last_sync(self, when: datetime) -> None:
        raise NotImplementedError

    def stored_size(self) -> int:
        raise NotImplementedError


class KeyValueDatasetRepository(DatasetRepository):
    """Dataset kept as two JSON arrays in a key-value store."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        clock: Callable[[], datetime] = now_local,
        seed_default_workers: bool = True,
    ):
        self._store = store
        self._clock = clock
        self._seed_default_workers = seed_default_workers

    def load(self) -> Dataset:
        return Dataset(workers=self._load_workers(), work_records=self._load_records())

    def _load_workers(self) -> tuple[Worker, ...]:
        raw = self._store.get(WORKERS_KEY)
        if raw is not None:
            try:
                return tuple(worker_from_dict(item) for item in json.loads(raw))
            except (ValueError, TypeError, KeyError) as e:
                logger.warning("Stored workers are unreadable, restoring defaults: %s", e)

        workers = default_workers(self._clock()) if self._seed_default_workers else ()
        self.save_workers(workers)
        return workers

    def _load_records(self) -> tuple[WorkRecord, ...]:
        raw = self._store.get(WORK_RECORDS_KEY)
        if raw is None:
            return ()
        try:
            return tuple(record_from_dict(item) for item in json.loads(raw))
        except (ValueError, TypeError, KeyError) as e:
            logger.warning("Stored work records are unreadable, starting empty: %s", e)

        self.save_records(())
        return ()

    def save_workers(self, workers: Sequence[Worker]) -> None:
        self._store.set(WORKERS_KEY, _dump_workers(workers))

    def save_records(self, records: Sequence[WorkRecord]) -> None:
        self._store.set(WORK_RECORDS_KEY, _dump_records(records))

    def save(self, dataset: Dataset) -> None:
        self._store.set_many(
            [
                (WORKERS_KEY, _dump_workers(dataset.workers)),
                (WORK_RECORDS_KEY, _dump_records(dataset.work_records)),
            ]
        )

    def clear(self) -> None:
        for key in (WORKERS_KEY, WORK_RECORDS_KEY, LAST_SYNC_KEY):
            self._store.remove(key)

    def get_last_sync(self) -> Optional[datetime]:
        raw = self._store.get(LAST_SYNC_KEY)
        if not raw:
            return None
        try:
            return parse_iso_timestamp(raw)
        except ValueError:
            logger.warning("Ignoring unreadable last-sync timestamp %r", raw)
            return None

    def set_last_sync(self, when: datetime) -> None:
        self._store.set(LAST_SYNC_KEY, to_iso_timestamp(when))

    def stored_size(self) -> int:
        return sum(len(self._store.get(key) or "") for key in (WORKERS_KEY, WORK_RECORDS_KEY))
