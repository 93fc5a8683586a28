from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import WorkerStatus
from ..storage.tiered import TieredRepository
from .local_worker_repository import LocalWorkerRepository
from .model import Worker
from .repository import WorkerRepository


class TieredWorkerRepository(TieredRepository, WorkerRepository):
    name = "workers"

    def __init__(self, remote: WorkerRepository, local: LocalWorkerRepository):
        self._remote = remote
        self._local = local

    def list_workers(self, *, site_id: Optional[str] = None, status: Optional[WorkerStatus] = None) -> Sequence[Worker]:
        return self._remote_first(
            "list",
            lambda: self._remote.list_workers(site_id=site_id, status=status),
            self._local.save_many,
            lambda: self._local.list_workers(site_id=site_id, status=status),
        )

    def get_by_worker_id(self, worker_id: str) -> Optional[Worker]:
        return self._remote_first(
            "get",
            lambda: self._remote.get_by_worker_id(worker_id),
            lambda w: self._local.save_many([w] if w else []),
            lambda: self._local.get_by_worker_id(worker_id),
        )

    def save_worker(self, worker: Worker) -> Worker:
        return self._remote_first(
            "save",
            lambda: self._remote.save_worker(worker),
            lambda w: self._local.save_many([w]),
            lambda: self._local.save_worker(worker),
        )
