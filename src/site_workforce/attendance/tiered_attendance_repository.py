from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..storage.tiered import TieredRepository
from .local_attendance_repository import LocalAttendanceRepository
from .model import AttendanceFilter, AttendanceRecord
from .repository import AttendanceRepository


class TieredAttendanceRepository(TieredRepository, AttendanceRepository):
    name = "attendance"

    def __init__(self, remote: AttendanceRepository, local: LocalAttendanceRepository):
        self._remote = remote
        self._local = local

    def _mirror_one(self, record: Optional[AttendanceRecord]) -> None:
        if record is not None:
            self._local.save_many([record])

    def list_attendance(self, criteria: Optional[AttendanceFilter] = None) -> Sequence[AttendanceRecord]:
        return self._remote_first(
            "list",
            lambda: self._remote.list_attendance(criteria),
            self._local.save_many,
            lambda: self._local.list_attendance(criteria),
        )

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        return self._remote_first(
            "get",
            lambda: self._remote.get_by_id(record_id),
            self._mirror_one,
            lambda: self._local.get_by_id(record_id),
        )

    def create_attendance(self, record: AttendanceRecord) -> AttendanceRecord:
        return self._remote_first(
            "create",
            lambda: self._remote.create_attendance(record),
            self._mirror_one,
            lambda: self._local.create_attendance(record),
        )

    def update_attendance(self, record_id: str, patch: Mapping[str, Any]) -> Optional[AttendanceRecord]:
        return self._remote_first(
            "update",
            lambda: self._remote.update_attendance(record_id, patch),
            self._mirror_one,
            lambda: self._local.update_attendance(record_id, patch),
        )

    def delete_attendance(self, record_id: str) -> bool:
        return self._remote_first(
            "delete",
            lambda: self._remote.delete_attendance(record_id),
            lambda _deleted: self._local.delete_attendance(record_id),
            lambda: self._local.delete_attendance(record_id),
        )
