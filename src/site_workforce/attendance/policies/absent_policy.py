from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..model import AttendanceRecord
from .base import FieldDecision, StatusPolicy


class AbsentPolicy(StatusPolicy):
    """Absent clears both clock times and overtime, whatever was supplied."""

    def decide(
        self,
        *,
        now: datetime,
        current: AttendanceRecord,
        check_in_time: Optional[str],
        check_out_time: Optional[str],
        overtime_hours: Optional[float],
    ) -> FieldDecision:
        return FieldDecision(check_in_time="", check_out_time="", overtime_hours=0.0)
