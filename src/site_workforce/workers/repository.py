from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import WorkerStatus
from .model import Worker


class WorkerRepository(Protocol):
    """Roster collaborator.

    Services depend on this interface, never on a concrete store.
    """

    def list_workers(self, *, site_id: Optional[str] = None, status: Optional[WorkerStatus] = None) -> Sequence[Worker]:
        raise NotImplementedError

    def get_by_worker_id(self, worker_id: str) -> Optional[Worker]:
        raise NotImplementedError

    def save_worker(self, worker: Worker) -> Worker:
        raise NotImplementedError
