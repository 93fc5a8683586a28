from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_date, to_float
from .model import PATCHABLE_FIELDS, AttendanceFilter, AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = (
    "record_id, worker_id, worker_name, site_id, site_name, work_date, check_in_time, check_out_time, "
    "status, overtime_hours, created_by, updated_by, created_at, updated_at"
)


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=r["record_id"],
        worker_id=r["worker_id"],
        worker_name=r.get("worker_name") or "",
        site_id=r["site_id"],
        site_name=r.get("site_name") or "",
        work_date=to_date(r["work_date"]),
        status=AttendanceStatus(r["status"]),
        check_in_time=r.get("check_in_time") or "",
        check_out_time=r.get("check_out_time") or "",
        overtime_hours=to_float(r.get("overtime_hours")),
        created_by=r.get("created_by") or "",
        updated_by=r.get("updated_by") or "",
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_attendance(self, criteria: Optional[AttendanceFilter] = None) -> Sequence[AttendanceRecord]:
        flt = criteria or AttendanceFilter()
        clauses = ["1=1"]
        params: list[object] = []

        if flt.site_id:
            clauses.append("site_id=%s")
            params.append(flt.site_id)
        if flt.work_date:
            clauses.append("work_date=%s")
            params.append(flt.work_date)
        if flt.start_date:
            clauses.append("work_date>=%s")
            params.append(flt.start_date)
        if flt.end_date:
            clauses.append("work_date<=%s")
            params.append(flt.end_date)
        if flt.status:
            clauses.append("status=%s")
            params.append(flt.status.value)
        if flt.search_query and flt.search_query.strip():
            clauses.append("(LOWER(worker_name) LIKE %s OR LOWER(worker_id) LIKE %s)")
            like = f"%{flt.search_query.strip().lower()}%"
            params.extend([like, like])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {' AND '.join(clauses)}
                ORDER BY work_date DESC, worker_id ASC
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE record_id=%s", (record_id,))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def create_attendance(self, record: AttendanceRecord) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO attendance_records({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.record_id,
                    record.worker_id,
                    record.worker_name,
                    record.site_id,
                    record.site_name,
                    record.work_date,
                    record.check_in_time,
                    record.check_out_time,
                    record.status.value,
                    record.overtime_hours,
                    record.created_by,
                    record.updated_by,
                    record.created_at,
                    record.updated_at,
                ),
            )
        return record

    def update_attendance(self, record_id: str, patch: Mapping[str, Any]) -> Optional[AttendanceRecord]:
        unknown = set(patch) - PATCHABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unsupported attendance fields: {sorted(unknown)}")
        if patch:
            assignments = ", ".join(f"{column}=%s" for column in patch)
            values = [v.value if isinstance(v, AttendanceStatus) else v for v in patch.values()]
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"UPDATE attendance_records SET {assignments} WHERE record_id=%s",
                    (*values, record_id),
                )
        return self.get_by_id(record_id)

    def delete_attendance(self, record_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE record_id=%s", (record_id,))
            return cur.rowcount > 0
