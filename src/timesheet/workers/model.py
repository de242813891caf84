from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Worker:
    """Domain entity: a person tracked for attendance.

    Note: Plain data object; persistence lives in the repository layer.
    """

    id: str
    name: str
    position: str
    phone: str
    created_at: datetime
