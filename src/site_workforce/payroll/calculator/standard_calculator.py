from __future__ import annotations

from typing import Iterable

from ...attendance.model import AttendanceRecord
from ...common.datetime_utils import clock_hour
from ...core.constants import OVERTIME_RATE_MULTIPLIER, STANDARD_WORKDAY_HOURS
from ...core.enums import AttendanceStatus
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: 8-hour day, overtime paid at 1.5x the hourly share of the daily wage."""

    def __init__(self, *, workday_hours: int = STANDARD_WORKDAY_HOURS, overtime_multiplier: float = OVERTIME_RATE_MULTIPLIER):
        self._workday_hours = int(workday_hours)
        self._multiplier = float(overtime_multiplier)

    def checkout_overtime(self, check_in_time: str, check_out_time: str) -> float:
        # Whole clock hours only: minutes are ignored on both ends.
        hours_worked = clock_hour(check_out_time) - clock_hour(check_in_time)
        return float(max(0, hours_worked - self._workday_hours))

    def days_worked(self, records: Iterable[AttendanceRecord]) -> int:
        return sum(1 for r in records if r.status == AttendanceStatus.PRESENT)

    def overtime_hours(self, records: Iterable[AttendanceRecord]) -> float:
        # Summed over every status, not only Present.
        return float(sum(r.overtime_hours or 0 for r in records))

    def basic_pay(self, days_worked: int, daily_wage: float) -> float:
        return days_worked * daily_wage

    def overtime_pay(self, overtime_hours: float, daily_wage: float) -> float:
        return overtime_hours * (daily_wage / self._workday_hours) * self._multiplier
