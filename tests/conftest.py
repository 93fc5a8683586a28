from __future__ import annotations

from datetime import datetime
from typing import Optional

import pytest

from site_workforce.attendance.model import AttendanceFilter, AttendanceRecord, apply_patch
from site_workforce.core.enums import Role, WorkerStatus
from site_workforce.users.identity import StaticIdentityProvider
from site_workforce.users.model import CurrentUser
from site_workforce.workers.model import Worker, worker_matches


class InMemoryWorkers:
    def __init__(self, workers=()):
        self._by_id = {w.worker_id: w for w in workers}
        self.fail = False

    def list_workers(self, *, site_id: Optional[str] = None, status: Optional[WorkerStatus] = None):
        if self.fail:
            raise ConnectionError("roster store down")
        return [w for w in self._by_id.values() if worker_matches(w, site_id=site_id, status=status)]

    def get_by_worker_id(self, worker_id: str) -> Optional[Worker]:
        return self._by_id.get(worker_id)

    def save_worker(self, worker: Worker) -> Worker:
        self._by_id[worker.worker_id] = worker
        return worker


class InMemoryAttendance:
    def __init__(self, records=()):
        self._by_id = {r.record_id: r for r in records}
        self.fail_list = False
        self.fail_create_after: Optional[int] = None
        self.created = 0

    def list_attendance(self, criteria: Optional[AttendanceFilter] = None):
        if self.fail_list:
            raise ConnectionError("attendance store down")
        flt = criteria or AttendanceFilter()
        return [r for r in self._by_id.values() if flt.matches(r)]

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        return self._by_id.get(record_id)

    def create_attendance(self, record: AttendanceRecord) -> AttendanceRecord:
        if self.fail_create_after is not None and self.created >= self.fail_create_after:
            raise ConnectionError("insert failed")
        self.created += 1
        self._by_id[record.record_id] = record
        return record

    def update_attendance(self, record_id: str, patch):
        current = self._by_id.get(record_id)
        if current is None:
            return None
        self._by_id[record_id] = apply_patch(current, patch)
        return self._by_id[record_id]

    def delete_attendance(self, record_id: str) -> bool:
        return self._by_id.pop(record_id, None) is not None

    def all(self):
        return list(self._by_id.values())


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 4, 11, 9, 30, 0)


@pytest.fixture
def admin() -> StaticIdentityProvider:
    return StaticIdentityProvider(CurrentUser(user_id="u-admin", role=Role.ADMIN))


@pytest.fixture
def supervisor() -> StaticIdentityProvider:
    return StaticIdentityProvider(CurrentUser(user_id="u-sup", role=Role.SUPERVISOR))


@pytest.fixture
def anonymous() -> StaticIdentityProvider:
    return StaticIdentityProvider(None)


@pytest.fixture
def roster() -> InMemoryWorkers:
    return InMemoryWorkers(
        [
            Worker(worker_id="W001", name="Rajesh Kumar", site_id="1", site_name="Site A", daily_wage=800),
            Worker(worker_id="W002", name="Sunil Sharma", site_id="1", site_name="Site A", daily_wage=750),
            Worker(worker_id="W003", name="Priya Patel", site_id="2", site_name="Site B", daily_wage=900),
            Worker(
                worker_id="W004",
                name="Amit Singh",
                site_id="1",
                site_name="Site A",
                daily_wage=700,
                status=WorkerStatus.INACTIVE,
            ),
        ]
    )


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()
