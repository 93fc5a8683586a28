from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for screen and operation gating."""

    ADMIN = "admin"
    SUPERVISOR = "supervisor"
    SITE_MANAGER = "siteManager"


class WorkerStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class AttendanceStatus(str, Enum):
    """Daily attendance status stored on each record."""

    PRESENT = "Present"
    ABSENT = "Absent"
    LEAVE = "Leave"
    HALF_DAY = "HalfDay"


class PayrollStatus(str, Enum):
    PENDING = "Pending"
    PAID = "Paid"
    CANCELLED = "Cancelled"
