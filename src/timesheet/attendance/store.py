from __future__ import annotations

import logging
import threading
from datetime import date
from typing import Iterable, Optional, Sequence

from ..workers.model import Worker
from .model import Dataset, SlotKey, WorkRecord
from .repository import DatasetRepository

logger = logging.getLogger(__name__)


class AttendanceStore:
    """In-memory workers and work records, mirrored to the repository.

    Records are keyed by slot, so one (worker, date, shift) holds at most one
    record. Every mutation writes the changed collection through immediately.
    All access goes through ``lock``; callers doing a lookup followed by a
    write hold it across both.
    """

    def __init__(self, repository: DatasetRepository):
        self._repository = repository
        self._lock = threading.RLock()
        self._workers: dict[str, Worker] = {}
        self._records: dict[SlotKey, WorkRecord] = {}
        self.reload()

    def reload(self) -> None:
        with self._lock:
            self._fill(self._repository.load())

    def _fill(self, dataset: Dataset) -> None:
        self._workers = {w.id: w for w in dataset.workers}
        self._records = {r.slot: r for r in dataset.work_records}

    @property
    def repository(self) -> DatasetRepository:
        return self._repository

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def snapshot(self) -> Dataset:
        with self._lock:
            return Dataset(workers=tuple(self._workers.values()), work_records=tuple(self._records.values()))

    # workers

    def workers(self) -> Sequence[Worker]:
        with self._lock:
            return list(self._workers.values())

    def get_worker(self, worker_id: str) -> Optional[Worker]:
        with self._lock:
            return self._workers.get(worker_id)

    def has_worker_id(self, worker_id: str) -> bool:
        with self._lock:
            return worker_id in self._workers

    def add_worker(self, worker: Worker) -> None:
        with self._lock:
            self._workers[worker.id] = worker
            self._repository.save_workers(list(self._workers.values()))

    def remove_worker(self, worker_id: str) -> int:
        """Remove a worker and all of its records; returns removed record count."""
        with self._lock:
            self._workers.pop(worker_id, None)
            doomed = [k for k in self._records if k.worker_id == worker_id]
            for key in doomed:
                del self._records[key]

            self._repository.save(
                Dataset(workers=tuple(self._workers.values()), work_records=tuple(self._records.values()))
            )
            return len(doomed)

    # records

    def records(self) -> Sequence[WorkRecord]:
        with self._lock:
            return list(self._records.values())

    def get_record(self, slot: SlotKey) -> Optional[WorkRecord]:
        with self._lock:
            return self._records.get(slot)

    def has_record_id(self, record_id: str) -> bool:
        with self._lock:
            return any(r.id == record_id for r in self._records.values())

    def put_record(self, record: WorkRecord) -> None:
        with self._lock:
            self._records[record.slot] = record
            self._repository.save_records(list(self._records.values()))

    def records_for_worker(self, worker_id: str) -> Sequence[WorkRecord]:
        with self._lock:
            return [r for r in self._records.values() if r.worker_id == worker_id]

    def records_for_date(self, work_date: date) -> Sequence[WorkRecord]:
        with self._lock:
            return [r for r in self._records.values() if r.work_date == work_date]

    # whole dataset

    def replace(self, workers: Iterable[Worker], records: Iterable[WorkRecord]) -> None:
        by_id = {w.id: w for w in workers}
        by_slot = {r.slot: r for r in records}
        with self._lock:
            self._repository.save(Dataset(workers=tuple(by_id.values()), work_records=tuple(by_slot.values())))
            self._workers = by_id
            self._records = by_slot
        logger.info("dataset replaced: %d workers, %d records", len(by_id), len(by_slot))

    def clear(self) -> None:
        with self._lock:
            self._repository.clear()
            self._workers = {}
            self._records = {}
