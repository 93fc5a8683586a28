from __future__ import annotations

import uuid
from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..core.enums import PayrollStatus

# Pending is the only non-terminal state.
ALLOWED_TRANSITIONS: dict[PayrollStatus, frozenset[PayrollStatus]] = {
    PayrollStatus.PENDING: frozenset({PayrollStatus.PAID, PayrollStatus.CANCELLED}),
    PayrollStatus.PAID: frozenset(),
    PayrollStatus.CANCELLED: frozenset(),
}


def new_payroll_id() -> str:
    return uuid.uuid4().hex


def format_period(start: date, end: date) -> str:
    return f"{start.isoformat()} to {end.isoformat()}"


@dataclass(frozen=True)
class PayrollRecord:
    """Derived pay for one worker over one (site, start, end) window.

    Invariant: total_pay == basic_pay + overtime_pay - deductions.
    """

    payroll_id: str
    worker_id: str
    worker_name: str
    site_id: str
    site_name: str
    period: str
    start_date: date
    end_date: date
    days_worked: int
    overtime_hours: float
    basic_pay: float
    overtime_pay: float
    deductions: float
    total_pay: float
    status: PayrollStatus = PayrollStatus.PENDING
    payment_date: Optional[date] = None
    processed_by: str = ""
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def can_move_to(self, status: PayrollStatus) -> bool:
        return status in ALLOWED_TRANSITIONS[self.status]


@dataclass(frozen=True)
class PayrollFilter:
    site_id: Optional[str] = None
    period: Optional[str] = None
    status: Optional[PayrollStatus] = None
    search_query: Optional[str] = None

    def matches(self, record: PayrollRecord) -> bool:
        if self.site_id and record.site_id != self.site_id:
            return False
        if self.period and record.period != self.period:
            return False
        if self.status and record.status != self.status:
            return False
        if self.search_query:
            query = self.search_query.strip().lower()
            return query in record.worker_name.lower() or query in record.worker_id.lower()
        return True


@dataclass(frozen=True)
class PayrollSummary:
    total_workers: int = 0
    paid_workers: int = 0
    pending_workers: int = 0
    total_amount: float = 0.0
    total_basic_pay: float = 0.0
    total_overtime_pay: float = 0.0
    total_deductions: float = 0.0

    def as_dict(self) -> dict:
        return {
            "totalWorkers": self.total_workers,
            "paidWorkers": self.paid_workers,
            "pendingWorkers": self.pending_workers,
            "totalAmount": self.total_amount,
            "totalBasicPay": self.total_basic_pay,
            "totalOvertimePay": self.total_overtime_pay,
            "totalDeductions": self.total_deductions,
        }


def payroll_to_dict(r: PayrollRecord) -> dict:
    out = {}
    for f in fields(r):
        value = getattr(r, f.name)
        if isinstance(value, PayrollStatus):
            value = value.value
        elif isinstance(value, (date, datetime)):
            value = value.isoformat()
        out[f.name] = value
    return out


def payroll_from_dict(d: Mapping[str, Any]) -> PayrollRecord:
    def _d(value) -> Optional[date]:
        return date.fromisoformat(value) if value else None

    def _dt(value) -> Optional[datetime]:
        return datetime.fromisoformat(value) if value else None

    return PayrollRecord(
        payroll_id=str(d["payroll_id"]),
        worker_id=str(d["worker_id"]),
        worker_name=d.get("worker_name") or "",
        site_id=str(d["site_id"]),
        site_name=d.get("site_name") or "",
        period=d.get("period") or "",
        start_date=date.fromisoformat(d["start_date"]),
        end_date=date.fromisoformat(d["end_date"]),
        days_worked=int(d.get("days_worked") or 0),
        overtime_hours=float(d.get("overtime_hours") or 0),
        basic_pay=float(d.get("basic_pay") or 0),
        overtime_pay=float(d.get("overtime_pay") or 0),
        deductions=float(d.get("deductions") or 0),
        total_pay=float(d.get("total_pay") or 0),
        status=PayrollStatus(d.get("status", PayrollStatus.PENDING.value)),
        payment_date=_d(d.get("payment_date")),
        processed_by=d.get("processed_by") or "",
        remarks=d.get("remarks"),
        created_at=_dt(d.get("created_at")),
        updated_at=_dt(d.get("updated_at")),
    )
