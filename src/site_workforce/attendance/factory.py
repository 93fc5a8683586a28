from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AttendanceStatus
from .policies.absent_policy import AbsentPolicy
from .policies.base import StatusPolicy
from .policies.pass_through_policy import PassThroughPolicy
from .policies.present_policy import PresentPolicy


@dataclass
class StatusPolicyFactory:
    """Factory Pattern: choose the field policy for a target status."""

    def for_status(self, status: AttendanceStatus) -> StatusPolicy:
        if status == AttendanceStatus.PRESENT:
            return PresentPolicy()
        if status == AttendanceStatus.ABSENT:
            return AbsentPolicy()
        return PassThroughPolicy()
