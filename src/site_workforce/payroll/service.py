from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..attendance.model import AttendanceFilter, AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..common.notifications import PAYROLL_TABLE, ChangeNotifier
from ..common.validators import require_non_empty
from ..core.constants import PAYROLL_PROCESSED_BY
from ..core.enums import PayrollStatus, WorkerStatus
from ..core.exceptions import DataUnavailableError, NotFoundError, ValidationError
from ..users.identity import IdentityProvider, require_admin
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollFilter, PayrollRecord, PayrollSummary, format_period, new_payroll_id
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


class PayrollService:
    """Use cases: derive payroll from attendance history, store it, move it through Pending -> Paid/Cancelled."""

    def __init__(
        self,
        payroll: PayrollRepository,
        attendance: AttendanceRepository,
        workers: WorkerRepository,
        identity: IdentityProvider,
        *,
        calculator: Optional[PayrollCalculator] = None,
        notifier: Optional[ChangeNotifier] = None,
    ):
        self._payroll = payroll
        self._attendance = attendance
        self._workers = workers
        self._identity = identity
        self._calculator = calculator or StandardPayrollCalculator()
        self._notifier = notifier or ChangeNotifier()

    def generate(self, *, site_id: str, start: date, end: date, now: Optional[datetime] = None) -> list[PayrollRecord]:
        """Recompute payroll for every active worker on the site over [start, end].

        Read-only over attendance; all-or-nothing when the roster or history can't be fetched.
        """
        site_id = require_non_empty(site_id, "Site")
        if end < start:
            raise ValidationError("End date must be on or after start date")
        now = now or now_local()

        try:
            roster = self._workers.list_workers(site_id=site_id, status=WorkerStatus.ACTIVE)
            history = self._attendance.list_attendance(AttendanceFilter(site_id=site_id, start_date=start, end_date=end))
        except Exception as e:
            raise DataUnavailableError("Roster or attendance history is unavailable") from e

        by_worker: dict[str, list[AttendanceRecord]] = {}
        for r in history:
            by_worker.setdefault(r.worker_id, []).append(r)

        records = [self._build(worker, by_worker.get(worker.worker_id, []), start, end, now) for worker in roster]
        logger.info("Generated payroll for %d worker(s) (site=%s, %s)", len(records), site_id, format_period(start, end))
        return records

    def _build(self, worker: Worker, attendance: list[AttendanceRecord], start: date, end: date, now: datetime) -> PayrollRecord:
        calc = self._calculator
        days_worked = calc.days_worked(attendance)
        overtime_hours = calc.overtime_hours(attendance)
        basic_pay = calc.basic_pay(days_worked, worker.daily_wage)
        overtime_pay = calc.overtime_pay(overtime_hours, worker.daily_wage)
        deductions = 0.0

        return PayrollRecord(
            payroll_id=new_payroll_id(),
            worker_id=worker.worker_id,
            worker_name=worker.name,
            site_id=worker.site_id,
            site_name=worker.site_name,
            period=format_period(start, end),
            start_date=start,
            end_date=end,
            days_worked=days_worked,
            overtime_hours=overtime_hours,
            basic_pay=basic_pay,
            overtime_pay=overtime_pay,
            deductions=deductions,
            total_pay=basic_pay + overtime_pay - deductions,
            status=PayrollStatus.PENDING,
            payment_date=None,
            processed_by=PAYROLL_PROCESSED_BY,
            created_at=now,
            updated_at=now,
        )

    def generate_and_store(self, *, site_id: str, start: date, end: date, now: Optional[datetime] = None) -> list[PayrollRecord]:
        """Store a fresh Pending run for the window.

        Workers already Paid or Cancelled for this exact window keep their row and get no new one.
        """
        records = self.generate(site_id=site_id, start=start, end=end, now=now)
        stored = self._payroll.list_payroll(PayrollFilter(site_id=site_id, period=format_period(start, end)))
        settled = {r.worker_id for r in stored if r.status != PayrollStatus.PENDING}
        records = [r for r in records if r.worker_id not in settled]
        self._payroll.replace_window(site_id=site_id, start_date=start, end_date=end, records=records)
        self._notifier.publish(PAYROLL_TABLE, "INSERT")
        return records

    def list_payroll(self, criteria: Optional[PayrollFilter] = None) -> list[PayrollRecord]:
        return list(self._payroll.list_payroll(criteria))

    def summarize(self, criteria: Optional[PayrollFilter] = None) -> PayrollSummary:
        records = self.list_payroll(criteria)
        return PayrollSummary(
            total_workers=len(records),
            paid_workers=sum(1 for r in records if r.status == PayrollStatus.PAID),
            pending_workers=sum(1 for r in records if r.status == PayrollStatus.PENDING),
            total_amount=sum(r.total_pay for r in records),
            total_basic_pay=sum(r.basic_pay for r in records),
            total_overtime_pay=sum(r.overtime_pay for r in records),
            total_deductions=sum(r.deductions for r in records),
        )

    def update_status(
        self,
        payroll_id: str,
        status: PayrollStatus,
        *,
        payment_date: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> PayrollRecord:
        require_admin(self._identity)
        now = now or now_local()

        record = self._payroll.get_by_id(payroll_id)
        if not record:
            raise NotFoundError("Payroll record not found")
        if not record.can_move_to(status):
            raise ValidationError(f"Cannot move payroll from {record.status.value} to {status.value}")

        paid_on = (payment_date or now.date()) if status == PayrollStatus.PAID else None
        updated = self._payroll.update_status(payroll_id, status=status, payment_date=paid_on, updated_at=now)
        if updated is None:
            raise NotFoundError("Payroll record not found")
        self._notifier.publish(PAYROLL_TABLE, "UPDATE")
        return updated

    def mark_paid(self, payroll_id: str, *, payment_date: Optional[date] = None, now: Optional[datetime] = None) -> PayrollRecord:
        return self.update_status(payroll_id, PayrollStatus.PAID, payment_date=payment_date, now=now)

    def cancel(self, payroll_id: str, *, now: Optional[datetime] = None) -> PayrollRecord:
        return self.update_status(payroll_id, PayrollStatus.CANCELLED, now=now)
