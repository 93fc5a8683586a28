from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..core.enums import WorkerStatus
from ..storage.local_store import LocalStore
from .model import Worker, worker_matches
from .repository import WorkerRepository

WORKERS_KEY = "workers"


def worker_to_dict(w: Worker) -> dict:
    return {
        "worker_id": w.worker_id,
        "name": w.name,
        "site_id": w.site_id,
        "site_name": w.site_name,
        "daily_wage": w.daily_wage,
        "status": w.status.value,
        "contact_number": w.contact_number,
        "address": w.address,
        "skills": list(w.skills),
        "joining_date": w.joining_date.isoformat() if w.joining_date else None,
    }


def worker_from_dict(d: dict) -> Worker:
    return Worker(
        worker_id=d["worker_id"],
        name=d["name"],
        site_id=d["site_id"],
        site_name=d.get("site_name") or "",
        daily_wage=float(d.get("daily_wage") or 0),
        status=WorkerStatus(d.get("status", WorkerStatus.ACTIVE.value)),
        contact_number=d.get("contact_number") or "",
        address=d.get("address"),
        skills=tuple(d.get("skills") or ()),
        joining_date=parse_iso_date(d["joining_date"]) if d.get("joining_date") else None,
    )


class LocalWorkerRepository(WorkerRepository):
    def __init__(self, store: LocalStore):
        self._store = store

    def _all(self) -> list[Worker]:
        return [worker_from_dict(d) for d in self._store.get(WORKERS_KEY, [])]

    def list_workers(self, *, site_id: Optional[str] = None, status: Optional[WorkerStatus] = None) -> Sequence[Worker]:
        return [w for w in self._all() if worker_matches(w, site_id=site_id, status=status)]

    def get_by_worker_id(self, worker_id: str) -> Optional[Worker]:
        return next((w for w in self._all() if w.worker_id == worker_id), None)

    def save_worker(self, worker: Worker) -> Worker:
        self.save_many([worker])
        return worker

    def save_many(self, workers: Sequence[Worker]) -> None:
        by_id = {w.worker_id: w for w in self._all()}
        for w in workers:
            by_id[w.worker_id] = w
        self._store.set(WORKERS_KEY, [worker_to_dict(w) for w in by_id.values()])
