from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..model import AttendanceRecord


@dataclass(frozen=True)
class FieldDecision:
    """Fully resolved clock/overtime fields for the target status."""

    check_in_time: str
    check_out_time: str
    overtime_hours: float


class StatusPolicy(ABC):
    """Strategy Pattern: how a status transition treats clock and overtime fields.

    `None` for a requested field means the caller did not supply it.
    """

    @abstractmethod
    def decide(
        self,
        *,
        now: datetime,
        current: AttendanceRecord,
        check_in_time: Optional[str],
        check_out_time: Optional[str],
        overtime_hours: Optional[float],
    ) -> FieldDecision:
        raise NotImplementedError
