from __future__ import annotations

from collections import Counter
from typing import Iterable

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceSummary


def summarize_records(records: Iterable[AttendanceRecord]) -> AttendanceSummary:
    """Counts per status over the given day's records.

    `total_workers` is the number of records, not the roster size.
    """
    counts = Counter(r.status for r in records)
    total = sum(counts.values())
    present = counts[AttendanceStatus.PRESENT]
    return AttendanceSummary(
        total_workers=total,
        present=present,
        absent=counts[AttendanceStatus.ABSENT],
        leave=counts[AttendanceStatus.LEAVE],
        half_day=counts[AttendanceStatus.HALF_DAY],
        average_attendance=(present / total) * 100 if total > 0 else 0.0,
    )
