from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_date, to_float
from .model import PayrollFilter, PayrollRecord
from .repository import PayrollRepository

_COLUMNS = (
    "payroll_id, worker_id, worker_name, site_id, site_name, period, start_date, end_date, days_worked, "
    "overtime_hours, basic_pay, overtime_pay, deductions, total_pay, status, payment_date, processed_by, "
    "remarks, created_at, updated_at"
)


def _row_to_payroll(r: dict) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=r["payroll_id"],
        worker_id=r["worker_id"],
        worker_name=r.get("worker_name") or "",
        site_id=r["site_id"],
        site_name=r.get("site_name") or "",
        period=r["period"],
        start_date=to_date(r["start_date"]),
        end_date=to_date(r["end_date"]),
        days_worked=int(r.get("days_worked") or 0),
        overtime_hours=to_float(r.get("overtime_hours")),
        basic_pay=to_float(r.get("basic_pay")),
        overtime_pay=to_float(r.get("overtime_pay")),
        deductions=to_float(r.get("deductions")),
        total_pay=to_float(r.get("total_pay")),
        status=PayrollStatus(r["status"]),
        payment_date=to_date(r.get("payment_date")),
        processed_by=r.get("processed_by") or "",
        remarks=r.get("remarks"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_payroll(self, criteria: Optional[PayrollFilter] = None) -> Sequence[PayrollRecord]:
        flt = criteria or PayrollFilter()
        clauses = ["1=1"]
        params: list[object] = []

        if flt.site_id:
            clauses.append("site_id=%s")
            params.append(flt.site_id)
        if flt.period:
            clauses.append("period=%s")
            params.append(flt.period)
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
                FROM payroll_records
                WHERE {' AND '.join(clauses)}
                ORDER BY start_date DESC, worker_id ASC
                """,
                tuple(params),
            )
            return [_row_to_payroll(r) for r in fetchall(cur)]

    def get_by_id(self, payroll_id: str) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll_records WHERE payroll_id=%s", (payroll_id,))
            r = fetchone(cur)
            return _row_to_payroll(r) if r else None

    def replace_window(self, *, site_id: str, start_date: date, end_date: date, records: Sequence[PayrollRecord]) -> None:
        # One connection, one commit: old Pending rows disappear only if the new ones are stored.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM payroll_records WHERE site_id=%s AND start_date=%s AND end_date=%s AND status=%s",
                (site_id, start_date, end_date, PayrollStatus.PENDING.value),
            )
            if records:
                cur.executemany(
                    f"""
                    INSERT INTO payroll_records({_COLUMNS})
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    [
                        (
                            r.payroll_id,
                            r.worker_id,
                            r.worker_name,
                            r.site_id,
                            r.site_name,
                            r.period,
                            r.start_date,
                            r.end_date,
                            r.days_worked,
                            r.overtime_hours,
                            r.basic_pay,
                            r.overtime_pay,
                            r.deductions,
                            r.total_pay,
                            r.status.value,
                            r.payment_date,
                            r.processed_by,
                            r.remarks,
                            r.created_at,
                            r.updated_at,
                        )
                        for r in records
                    ],
                )

    def update_status(
        self,
        payroll_id: str,
        *,
        status: PayrollStatus,
        payment_date: Optional[date],
        updated_at: datetime,
    ) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payroll_records
                SET status=%s, payment_date=%s, updated_at=%s
                WHERE payroll_id=%s
                """,
                (status.value, payment_date, updated_at, payroll_id),
            )
        return self.get_by_id(payroll_id)
