from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import PayrollStatus
from ..storage.local_store import LocalStore
from .model import PayrollFilter, PayrollRecord, payroll_from_dict, payroll_to_dict
from .repository import PayrollRepository

PAYROLL_KEY = "payroll_records"


class LocalPayrollRepository(PayrollRepository):
    def __init__(self, store: LocalStore):
        self._store = store

    def _all(self) -> list[PayrollRecord]:
        return [payroll_from_dict(d) for d in self._store.get(PAYROLL_KEY, [])]

    def _save_all(self, records: Sequence[PayrollRecord]) -> None:
        self._store.set(PAYROLL_KEY, [payroll_to_dict(r) for r in records])

    def list_payroll(self, criteria: Optional[PayrollFilter] = None) -> Sequence[PayrollRecord]:
        flt = criteria or PayrollFilter()
        return [r for r in self._all() if flt.matches(r)]

    def get_by_id(self, payroll_id: str) -> Optional[PayrollRecord]:
        return next((r for r in self._all() if r.payroll_id == payroll_id), None)

    def replace_window(self, *, site_id: str, start_date: date, end_date: date, records: Sequence[PayrollRecord]) -> None:
        kept = [
            r
            for r in self._all()
            if not (
                r.site_id == site_id
                and r.start_date == start_date
                and r.end_date == end_date
                and r.status == PayrollStatus.PENDING
            )
        ]
        self._save_all(kept + list(records))

    def update_status(
        self,
        payroll_id: str,
        *,
        status: PayrollStatus,
        payment_date: Optional[date],
        updated_at: datetime,
    ) -> Optional[PayrollRecord]:
        records = self._all()
        for i, r in enumerate(records):
            if r.payroll_id == payroll_id:
                records[i] = replace(r, status=status, payment_date=payment_date, updated_at=updated_at)
                self._save_all(records)
                return records[i]
        return None
