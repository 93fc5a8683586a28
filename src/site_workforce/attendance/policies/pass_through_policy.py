from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..model import AttendanceRecord
from .base import FieldDecision, StatusPolicy


class PassThroughPolicy(StatusPolicy):
    """Leave and HalfDay: supplied fields replace the current ones, nothing is forced."""

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
            check_in_time=current.check_in_time if check_in_time is None else check_in_time,
            check_out_time=current.check_out_time if check_out_time is None else check_out_time,
            overtime_hours=current.overtime_hours if overtime_hours is None else overtime_hours,
        )
