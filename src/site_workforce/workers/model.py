from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import WorkerStatus


@dataclass(frozen=True)
class Worker:
    """Domain entity: a worker on a site roster.

    `worker_id` is the human-facing code (e.g. "W001") and never changes once created.
    """

    worker_id: str
    name: str
    site_id: str
    daily_wage: float
    status: WorkerStatus = WorkerStatus.ACTIVE
    site_name: str = ""
    contact_number: str = ""
    address: Optional[str] = None
    skills: tuple[str, ...] = field(default_factory=tuple)
    joining_date: Optional[date] = None


def worker_matches(worker: Worker, *, site_id: Optional[str] = None, status: Optional[WorkerStatus] = None) -> bool:
    if site_id and worker.site_id != site_id:
        return False
    if status and worker.status != status:
        return False
    return True
