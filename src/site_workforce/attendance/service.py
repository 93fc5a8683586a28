from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_clock, now_local
from ..common.notifications import ATTENDANCE_TABLE, ChangeNotifier
from ..common.validators import require_non_empty, require_non_negative
from ..core.constants import SYSTEM_ACTOR
from ..core.enums import AttendanceStatus, WorkerStatus
from ..core.exceptions import NotFoundError
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from ..users.identity import IdentityProvider, require_admin, require_user
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from .factory import StatusPolicyFactory
from .model import AttendanceFilter, AttendanceRecord, AttendanceSummary, new_record_id
from .repository import AttendanceRepository
from .summary import summarize_records

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use cases: reconcile a day's roster, mark/mutate records, summarize a day."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        workers: WorkerRepository,
        identity: IdentityProvider,
        *,
        policy_factory: StatusPolicyFactory | None = None,
        calculator: PayrollCalculator | None = None,
        notifier: ChangeNotifier | None = None,
    ):
        self._attendance = attendance
        self._workers = workers
        self._identity = identity
        self._policies = policy_factory or StatusPolicyFactory()
        self._calculator = calculator or StandardPayrollCalculator()
        self._notifier = notifier or ChangeNotifier()

    def _get_record(self, record_id: str) -> AttendanceRecord:
        record = self._attendance.get_by_id(record_id)
        if not record:
            raise NotFoundError("Attendance record not found")
        return record

    def _placeholder(self, worker: Worker, work_date: date, now: datetime) -> AttendanceRecord:
        return AttendanceRecord(
            record_id=new_record_id(),
            worker_id=worker.worker_id,
            worker_name=worker.name,
            site_id=worker.site_id,
            site_name=worker.site_name,
            work_date=work_date,
            status=AttendanceStatus.ABSENT,
            check_in_time="",
            check_out_time="",
            overtime_hours=0.0,
            created_by=SYSTEM_ACTOR,
            updated_by=SYSTEM_ACTOR,
            created_at=now,
            updated_at=now,
        )

    def reconcile(
        self,
        *,
        site_id: Optional[str] = None,
        work_date: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> list[AttendanceRecord]:
        """Give every active roster worker a record for `work_date` (Absent when missing).

        Best-effort: failures are logged and whatever was created so far is returned.
        Running it again for the same site/date creates nothing new.
        """
        now = now or now_local()
        work_date = work_date or now.date()
        created: list[AttendanceRecord] = []

        try:
            roster = self._workers.list_workers(site_id=site_id, status=WorkerStatus.ACTIVE)
            existing = self._attendance.list_attendance(AttendanceFilter(site_id=site_id, work_date=work_date))
            recorded = {r.worker_id for r in existing}

            for worker in roster:
                if worker.worker_id in recorded:
                    continue
                created.append(self._attendance.create_attendance(self._placeholder(worker, work_date, now)))
                recorded.add(worker.worker_id)
        except Exception:
            logger.exception("Attendance reconciliation failed (site=%s, date=%s)", site_id or "all", work_date)

        if created:
            logger.info("Reconciliation added %d absent record(s) (site=%s, date=%s)", len(created), site_id or "all", work_date)
            self._notifier.publish(ATTENDANCE_TABLE, "INSERT")
        return created

    def list_attendance(self, criteria: Optional[AttendanceFilter] = None) -> list[AttendanceRecord]:
        return list(self._attendance.list_attendance(criteria))

    def load_day(
        self,
        *,
        site_id: Optional[str] = None,
        work_date: Optional[date] = None,
        status: Optional[AttendanceStatus] = None,
        search_query: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> list[AttendanceRecord]:
        """What the daily attendance screen shows: reconcile first, then list."""
        now = now or now_local()
        work_date = work_date or now.date()
        self.reconcile(site_id=site_id, work_date=work_date, now=now)
        return self.list_attendance(
            AttendanceFilter(site_id=site_id, work_date=work_date, status=status, search_query=search_query)
        )

    def mark_attendance(
        self,
        worker_id: str,
        *,
        work_date: Optional[date] = None,
        check_in_time: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        """Mark a worker Present for a date, reusing that day's record when there is one."""
        user = require_user(self._identity)
        worker_id = require_non_empty(worker_id, "Worker id")
        now = now or now_local()
        work_date = work_date or now.date()

        worker = self._workers.get_by_worker_id(worker_id)
        if not worker:
            raise NotFoundError("Worker not found")

        existing = self._attendance.list_attendance(AttendanceFilter(site_id=worker.site_id, work_date=work_date))
        same_worker = [r for r in existing if r.worker_id == worker.worker_id]
        if same_worker:
            return self.update_status(same_worker[0].record_id, AttendanceStatus.PRESENT, check_in_time=check_in_time, now=now)

        record = AttendanceRecord(
            record_id=new_record_id(),
            worker_id=worker.worker_id,
            worker_name=worker.name,
            site_id=worker.site_id,
            site_name=worker.site_name,
            work_date=work_date,
            status=AttendanceStatus.PRESENT,
            check_in_time=check_in_time or format_clock(now),
            check_out_time="",
            overtime_hours=0.0,
            created_by=user.user_id,
            updated_by=user.user_id,
            created_at=now,
            updated_at=now,
        )
        created = self._attendance.create_attendance(record)
        self._notifier.publish(ATTENDANCE_TABLE, "INSERT")
        return created

    def update_status(
        self,
        record_id: str,
        status: AttendanceStatus,
        *,
        check_in_time: Optional[str] = None,
        check_out_time: Optional[str] = None,
        overtime_hours: Optional[float] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        user = require_user(self._identity)
        now = now or now_local()
        if status != AttendanceStatus.ABSENT:
            # Absent ignores supplied overtime.
            overtime_hours = require_non_negative(overtime_hours, "Overtime hours")
        record = self._get_record(record_id)

        decision = self._policies.for_status(status).decide(
            now=now,
            current=record,
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            overtime_hours=overtime_hours,
        )
        return self._save(
            record_id,
            {
                "status": status,
                "check_in_time": decision.check_in_time,
                "check_out_time": decision.check_out_time,
                "overtime_hours": decision.overtime_hours,
                "updated_by": user.user_id,
                "updated_at": now,
            },
        )

    def check_out(
        self,
        record_id: str,
        *,
        check_out_time: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        """Record check-out and derive overtime from the clock hours against an 8-hour day."""
        user = require_user(self._identity)
        now = now or now_local()
        record = self._get_record(record_id)

        out_time = check_out_time or format_clock(now)
        overtime = 0.0
        if record.check_in_time:
            overtime = self._calculator.checkout_overtime(record.check_in_time, out_time)

        return self._save(
            record_id,
            {
                "check_out_time": out_time,
                "overtime_hours": overtime,
                "updated_by": user.user_id,
                "updated_at": now,
            },
        )

    def _save(self, record_id: str, patch: dict) -> AttendanceRecord:
        updated = self._attendance.update_attendance(record_id, patch)
        if updated is None:
            raise NotFoundError("Attendance record not found")
        self._notifier.publish(ATTENDANCE_TABLE, "UPDATE")
        return updated

    def delete_attendance(self, record_id: str) -> None:
        require_admin(self._identity)
        if not self._attendance.delete_attendance(record_id):
            raise NotFoundError("Attendance record not found")
        self._notifier.publish(ATTENDANCE_TABLE, "DELETE")

    def summarize(
        self,
        *,
        work_date: Optional[date] = None,
        site_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceSummary:
        work_date = work_date or (now or now_local()).date()
        return summarize_records(self._attendance.list_attendance(AttendanceFilter(site_id=site_id, work_date=work_date)))
