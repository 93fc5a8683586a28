import json
from datetime import date

import pytest

from site_workforce.attendance.local_attendance_repository import LocalAttendanceRepository
from site_workforce.attendance.model import AttendanceFilter, AttendanceRecord
from site_workforce.attendance.service import AttendanceService
from site_workforce.attendance.tiered_attendance_repository import TieredAttendanceRepository
from site_workforce.core.enums import AttendanceStatus, WorkerStatus
from site_workforce.core.exceptions import ValidationError
from site_workforce.storage.local_store import LocalStore
from site_workforce.workers.local_worker_repository import LocalWorkerRepository
from site_workforce.workers.tiered_worker_repository import TieredWorkerRepository

DAY = date(2025, 4, 11)


def _record(record_id="r1", worker_id="W001", status=AttendanceStatus.PRESENT) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=record_id,
        worker_id=worker_id,
        worker_name="Rajesh Kumar",
        site_id="1",
        site_name="Site A",
        work_date=DAY,
        status=status,
        check_in_time="08:00",
    )


def test_local_store_persists_with_prefix(tmp_path):
    path = tmp_path / "local.json"
    store = LocalStore(path)
    store.set("attendance_records", [{"a": 1}])

    assert json.loads(path.read_text(encoding="utf-8")) == {"sitewf_attendance_records": [{"a": 1}]}
    assert LocalStore(path).get("attendance_records") == [{"a": 1}]


def test_local_store_clear_only_touches_own_prefix(tmp_path):
    path = tmp_path / "shared.json"
    LocalStore(path, prefix="other_").set("k", 1)
    mine = LocalStore(path)
    mine.set("k", 2)

    mine.set("gone", 3)
    mine.remove("gone")
    assert mine.get("gone") is None

    mine.clear()

    assert LocalStore(path, prefix="other_").get("k") == 1
    assert LocalStore(path).get("k") is None


def test_local_attendance_round_trips_through_file(tmp_path):
    path = tmp_path / "local.json"
    LocalAttendanceRepository(LocalStore(path)).create_attendance(_record())

    reloaded = LocalAttendanceRepository(LocalStore(path)).get_by_id("r1")

    assert reloaded == _record()


def test_local_attendance_update_and_delete():
    repo = LocalAttendanceRepository(LocalStore())
    repo.create_attendance(_record())

    updated = repo.update_attendance("r1", {"status": AttendanceStatus.ABSENT, "check_in_time": ""})

    assert updated.status == AttendanceStatus.ABSENT
    assert repo.update_attendance("nope", {"status": AttendanceStatus.ABSENT}) is None
    assert repo.delete_attendance("r1") is True
    assert repo.delete_attendance("r1") is False


def test_tiered_read_mirrors_remote_into_local(attendance_repo):
    attendance_repo.create_attendance(_record())
    local = LocalAttendanceRepository(LocalStore())
    tiered = TieredAttendanceRepository(attendance_repo, local)

    rows = tiered.list_attendance(AttendanceFilter(work_date=DAY))

    assert [r.record_id for r in rows] == ["r1"]
    assert local.get_by_id("r1") == _record()


def test_tiered_read_falls_back_to_local(attendance_repo, caplog):
    local = LocalAttendanceRepository(LocalStore())
    local.create_attendance(_record(record_id="cached"))
    attendance_repo.fail_list = True
    tiered = TieredAttendanceRepository(attendance_repo, local)

    rows = tiered.list_attendance()

    assert [r.record_id for r in rows] == ["cached"]
    assert "using local store" in caplog.text


def test_tiered_write_goes_local_when_remote_fails(attendance_repo):
    attendance_repo.fail_create_after = 0
    local = LocalAttendanceRepository(LocalStore())
    tiered = TieredAttendanceRepository(attendance_repo, local)

    tiered.create_attendance(_record())

    assert attendance_repo.all() == []
    assert local.get_by_id("r1") is not None


def test_tiered_update_mirrors_result(attendance_repo):
    attendance_repo.create_attendance(_record())
    local = LocalAttendanceRepository(LocalStore())
    tiered = TieredAttendanceRepository(attendance_repo, local)

    tiered.update_attendance("r1", {"status": AttendanceStatus.LEAVE})

    assert attendance_repo.get_by_id("r1").status == AttendanceStatus.LEAVE
    assert local.get_by_id("r1").status == AttendanceStatus.LEAVE


def test_tiered_workers_fall_back_to_cached_roster(roster):
    local = LocalWorkerRepository(LocalStore())
    tiered = TieredWorkerRepository(roster, local)

    assert len(tiered.list_workers(site_id="1", status=WorkerStatus.ACTIVE)) == 2

    roster.fail = True
    cached = tiered.list_workers(site_id="1", status=WorkerStatus.ACTIVE)

    assert sorted(w.worker_id for w in cached) == ["W001", "W002"]


def test_local_fallback_rows_give_way_to_remote_rows(roster, attendance_repo, supervisor, fixed_now):
    local = LocalAttendanceRepository(LocalStore())
    svc = AttendanceService(TieredAttendanceRepository(attendance_repo, local), roster, supervisor)

    attendance_repo.fail_list = True
    attendance_repo.fail_create_after = 0
    svc.reconcile(site_id="1", work_date=DAY, now=fixed_now)

    attendance_repo.fail_list = False
    attendance_repo.fail_create_after = None
    svc.reconcile(site_id="1", work_date=DAY, now=fixed_now)

    assert sorted(r.worker_id for r in local.list_attendance()) == ["W001", "W002"]
    assert {r.record_id for r in local.list_attendance()} == {r.record_id for r in attendance_repo.all()}

    attendance_repo.fail_list = True
    assert svc.summarize(work_date=DAY, site_id="1").total_workers == 2


def test_local_apply_patch_rejects_unknown_fields():
    repo = LocalAttendanceRepository(LocalStore())
    repo.create_attendance(_record())

    with pytest.raises(ValidationError):
        repo.update_attendance("r1", {"worker_id": "W999"})

    assert repo.get_by_id("r1").worker_id == "W001"
