from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import PayrollStatus
from .model import PayrollFilter, PayrollRecord


class PayrollRepository(Protocol):
    def list_payroll(self, criteria: Optional[PayrollFilter] = None) -> Sequence[PayrollRecord]:
        raise NotImplementedError

    def get_by_id(self, payroll_id: str) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def replace_window(self, *, site_id: str, start_date: date, end_date: date, records: Sequence[PayrollRecord]) -> None:
        """Drop stored Pending payroll for the exact (site, start, end) window, then store `records`.

        Paid and Cancelled rows in the window are kept.
        """

        raise NotImplementedError

    def update_status(
        self,
        payroll_id: str,
        *,
        status: PayrollStatus,
        payment_date: Optional[date],
        updated_at: datetime,
    ) -> Optional[PayrollRecord]:
        raise NotImplementedError
