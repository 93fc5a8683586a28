from __future__ import annotations

import uuid
from dataclasses import dataclass, fields, replace
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError


def new_record_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one worker's attendance on one calendar date at one site.

    Invariant: at most one record per (worker_id, work_date, site_id).
    Clock times are free-form "HH:MM" strings, empty when not applicable.
    """

    record_id: str
    worker_id: str
    worker_name: str
    site_id: str
    site_name: str
    work_date: date
    status: AttendanceStatus
    check_in_time: str = ""
    check_out_time: str = ""
    overtime_hours: float = 0.0
    created_by: str = ""
    updated_by: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Fields an update may touch; identity (record/worker/site/date) is fixed.
PATCHABLE_FIELDS = frozenset(
    {"status", "check_in_time", "check_out_time", "overtime_hours", "worker_name", "site_name", "updated_by", "updated_at"}
)


def apply_patch(record: AttendanceRecord, patch: Mapping[str, Any]) -> AttendanceRecord:
    unknown = set(patch) - PATCHABLE_FIELDS
    if unknown:
        raise ValidationError(f"Unsupported attendance fields: {sorted(unknown)}")
    return replace(record, **dict(patch))


@dataclass(frozen=True)
class AttendanceFilter:
    site_id: Optional[str] = None
    work_date: Optional[date] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[AttendanceStatus] = None
    search_query: Optional[str] = None

    def matches(self, record: AttendanceRecord) -> bool:
        if self.site_id and record.site_id != self.site_id:
            return False
        if self.work_date and record.work_date != self.work_date:
            return False
        if self.start_date and record.work_date < self.start_date:
            return False
        if self.end_date and record.work_date > self.end_date:
            return False
        if self.status and record.status != self.status:
            return False
        if self.search_query:
            query = self.search_query.strip().lower()
            return query in record.worker_name.lower() or query in record.worker_id.lower()
        return True


@dataclass(frozen=True)
class AttendanceSummary:
    """Read-model for one date: counts per status and the attendance rate (%)."""

    total_workers: int = 0
    present: int = 0
    absent: int = 0
    leave: int = 0
    half_day: int = 0
    average_attendance: float = 0.0

    def as_dict(self) -> dict:
        return {
            "totalWorkers": self.total_workers,
            "present": self.present,
            "absent": self.absent,
            "leave": self.leave,
            "halfDay": self.half_day,
            "averageAttendance": self.average_attendance,
        }


def record_to_dict(r: AttendanceRecord) -> dict:
    out = {}
    for f in fields(r):
        value = getattr(r, f.name)
        if isinstance(value, AttendanceStatus):
            value = value.value
        elif isinstance(value, (date, datetime)):
            value = value.isoformat()
        out[f.name] = value
    return out


def record_from_dict(d: Mapping[str, Any]) -> AttendanceRecord:
    def _dt(value) -> Optional[datetime]:
        return datetime.fromisoformat(value) if value else None

    return AttendanceRecord(
        record_id=str(d["record_id"]),
        worker_id=str(d["worker_id"]),
        worker_name=d.get("worker_name") or "",
        site_id=str(d["site_id"]),
        site_name=d.get("site_name") or "",
        work_date=date.fromisoformat(d["work_date"]),
        status=AttendanceStatus(d["status"]),
        check_in_time=d.get("check_in_time") or "",
        check_out_time=d.get("check_out_time") or "",
        overtime_hours=float(d.get("overtime_hours") or 0),
        created_by=d.get("created_by") or "",
        updated_by=d.get("updated_by") or "",
        created_at=_dt(d.get("created_at")),
        updated_at=_dt(d.get("updated_at")),
    )
