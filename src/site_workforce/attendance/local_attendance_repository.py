from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..storage.local_store import LocalStore
from .model import AttendanceFilter, AttendanceRecord, apply_patch, record_from_dict, record_to_dict
from .repository import AttendanceRepository

ATTENDANCE_KEY = "attendance_records"


def _natural_key(record: AttendanceRecord) -> tuple:
    return record.worker_id, record.work_date, record.site_id


class LocalAttendanceRepository(AttendanceRepository):
    def __init__(self, store: LocalStore):
        self._store = store

    def _all(self) -> list[AttendanceRecord]:
        return [record_from_dict(d) for d in self._store.get(ATTENDANCE_KEY, [])]

    def _save_all(self, records: Sequence[AttendanceRecord]) -> None:
        self._store.set(ATTENDANCE_KEY, [record_to_dict(r) for r in records])

    def list_attendance(self, criteria: Optional[AttendanceFilter] = None) -> Sequence[AttendanceRecord]:
        flt = criteria or AttendanceFilter()
        return [r for r in self._all() if flt.matches(r)]

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        return next((r for r in self._all() if r.record_id == record_id), None)

    def create_attendance(self, record: AttendanceRecord) -> AttendanceRecord:
        self.save_many([record])
        return record

    def save_many(self, records: Sequence[AttendanceRecord]) -> None:
        """Upsert by record id and by (worker, date, site).

        A record made here while the remote store was down is replaced by the
        remote record for the same worker and day once that one is mirrored.
        """
        incoming = {_natural_key(r): r for r in records}
        incoming_ids = {r.record_id for r in incoming.values()}
        kept = [r for r in self._all() if r.record_id not in incoming_ids and _natural_key(r) not in incoming]
        self._save_all(kept + list(incoming.values()))

    def update_attendance(self, record_id: str, patch: Mapping[str, Any]) -> Optional[AttendanceRecord]:
        records = self._all()
        for i, r in enumerate(records):
            if r.record_id == record_id:
                records[i] = apply_patch(r, patch)
                self._save_all(records)
                return records[i]
        return None

    def delete_attendance(self, record_id: str) -> bool:
        records = self._all()
        kept = [r for r in records if r.record_id != record_id]
        if len(kept) == len(records):
            return False
        self._save_all(kept)
        return True
