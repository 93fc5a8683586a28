from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import AttendanceFilter, AttendanceRecord


class AttendanceRepository(Protocol):
    """Attendance store collaborator."""

    def list_attendance(self, criteria: Optional[AttendanceFilter] = None) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_attendance(self, record: AttendanceRecord) -> AttendanceRecord:
        raise NotImplementedError

    def update_attendance(self, record_id: str, patch: Mapping[str, Any]) -> Optional[AttendanceRecord]:
        """Apply `patch` and return the updated record, or None if the id is unknown."""

        raise NotImplementedError

    def delete_attendance(self, record_id: str) -> bool:
        raise NotImplementedError
