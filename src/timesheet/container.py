from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .attendance.repository import KeyValueDatasetRepository
from .attendance.service import AttendanceService
from .attendance.store import AttendanceStore
from .common.datetime_utils import now_local
from .payroll.calculator.standard_calculator import StandardWorkedHoursCalculator
from .shifts.repository import StaticShiftCatalog
from .statistics.service import StatisticsService
from .storage.connection import DBConfig, DatabaseConnection
from .storage.key_value import InMemoryKeyValueStore, KeyValueStore, SQLiteKeyValueStore
from .sync.service import SyncService


@dataclass(frozen=True)
class Container:
    kv_store: KeyValueStore
    shifts: StaticShiftCatalog
    dataset_repo: KeyValueDatasetRepository
    store: AttendanceStore
    clock: Callable[[], datetime]

    attendance_service: AttendanceService
    statistics_service: StatisticsService
    sync_service: SyncService


def build_kv_store(*, backend: str, path: str = "") -> KeyValueStore:
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "sqlite":
        return SQLiteKeyValueStore(DatabaseConnection(DBConfig(path=path)))
    raise ValueError(f"Unknown storage backend: {backend!r}")


def build_container(
    *,
    kv_store: KeyValueStore,
    clock: Callable[[], datetime] = now_local,
    seed_default_workers: bool = True,
    shifts: Optional[StaticShiftCatalog] = None,
) -> Container:
    shifts = shifts or StaticShiftCatalog()
    calculator = StandardWorkedHoursCalculator()

    dataset_repo = KeyValueDatasetRepository(kv_store, clock=clock, seed_default_workers=seed_default_workers)
    store = AttendanceStore(dataset_repo)

    attendance_service = AttendanceService(store, shifts, calculator=calculator, clock=clock)
    statistics_service = StatisticsService(store, shifts, calculator=calculator)
    sync_service = SyncService(store, clock=clock)

    return Container(
        kv_store=kv_store,
        shifts=shifts,
        dataset_repo=dataset_repo,
        store=store,
        clock=clock,
        attendance_service=attendance_service,
        statistics_service=statistics_service,
        sync_service=sync_service,
    )
