from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..model import AttendanceRecord
from ...common.datetime_utils import format_clock
from .base import FieldDecision, StatusPolicy


class PresentPolicy(StatusPolicy):
    """Check-in defaults to now; check-out and overtime are taken as given."""

    def decide(
        self,
        *,
        now: datetime,
        current: AttendanceRecord,
        check_in_time: Optional[str],
        check_out_time: Optional[str],
        overtime_hours: Optional[float],
    ) -> FieldDecision:
        return FieldDecision(
            check_in_time=check_in_time or format_clock(now),
            check_out_time=current.check_out_time if check_out_time is None else check_out_time,
            overtime_hours=current.overtime_hours if overtime_hours is None else overtime_hours,
        )
