from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from ...attendance.model import AttendanceRecord


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def checkout_overtime(self, check_in_time: str, check_out_time: str) -> float:
        raise NotImplementedError

    @abstractmethod
    def days_worked(self, records: Iterable[AttendanceRecord]) -> int:
        raise NotImplementedError

    @abstractmethod
    def overtime_hours(self, records: Iterable[AttendanceRecord]) -> float:
        raise NotImplementedError

    @abstractmethod
    def basic_pay(self, days_worked: int, daily_wage: float) -> float:
        raise NotImplementedError

    @abstractmethod
    def overtime_pay(self, overtime_hours: float, daily_wage: float) -> float:
        raise NotImplementedError
