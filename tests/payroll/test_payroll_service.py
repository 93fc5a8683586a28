from datetime import date, timedelta

import pytest

from site_workforce.attendance.model import AttendanceRecord
from site_workforce.core.enums import AttendanceStatus, PayrollStatus
from site_workforce.core.exceptions import (
    AuthorizationError,
    DataUnavailableError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from site_workforce.payroll.local_payroll_repository import LocalPayrollRepository
from site_workforce.payroll.model import PayrollFilter
from site_workforce.payroll.service import PayrollService
from site_workforce.storage.local_store import LocalStore

START = date(2025, 4, 1)
END = date(2025, 4, 10)


def _seed_ten_days(repo, worker_id="W001", site_id="1", overtime_on_first=4.0):
    for i in range(10):
        repo.create_attendance(
            AttendanceRecord(
                record_id=f"{worker_id}-{i}",
                worker_id=worker_id,
                worker_name=worker_id,
                site_id=site_id,
                site_name="",
                work_date=START + timedelta(days=i),
                status=AttendanceStatus.PRESENT,
                overtime_hours=overtime_on_first if i == 0 else 0.0,
            )
        )


@pytest.fixture
def payroll_repo():
    return LocalPayrollRepository(LocalStore())


def _service(payroll_repo, attendance_repo, roster, identity):
    return PayrollService(payroll_repo, attendance_repo, roster, identity)


def test_generate_worked_example(payroll_repo, attendance_repo, roster, admin, fixed_now):
    _seed_ten_days(attendance_repo)
    svc = _service(payroll_repo, attendance_repo, roster, admin)

    records = {r.worker_id: r for r in svc.generate(site_id="1", start=START, end=END, now=fixed_now)}

    rajesh = records["W001"]
    assert rajesh.days_worked == 10
    assert rajesh.overtime_hours == 4
    assert rajesh.basic_pay == 8000
    assert rajesh.overtime_pay == 600
    assert rajesh.deductions == 0
    assert rajesh.total_pay == 8600
    assert rajesh.status == PayrollStatus.PENDING
    assert rajesh.processed_by == "System"
    assert rajesh.period == "2025-04-01 to 2025-04-10"


def test_generate_covers_active_site_roster_only(payroll_repo, attendance_repo, roster, admin, fixed_now):
    svc = _service(payroll_repo, attendance_repo, roster, admin)

    records = svc.generate(site_id="1", start=START, end=END, now=fixed_now)

    assert sorted(r.worker_id for r in records) == ["W001", "W002"]
    assert all(r.total_pay == 0 for r in records)


def test_generate_ignores_attendance_outside_window(payroll_repo, attendance_repo, roster, admin, fixed_now):
    _seed_ten_days(attendance_repo)
    svc = _service(payroll_repo, attendance_repo, roster, admin)

    records = {r.worker_id: r for r in svc.generate(site_id="1", start=date(2025, 4, 6), end=END, now=fixed_now)}

    assert records["W001"].days_worked == 5
    assert records["W001"].overtime_hours == 0


def test_generate_does_not_touch_store(payroll_repo, attendance_repo, roster, admin, fixed_now):
    svc = _service(payroll_repo, attendance_repo, roster, admin)

    svc.generate(site_id="1", start=START, end=END, now=fixed_now)

    assert payroll_repo.list_payroll() == []


def test_generate_validates_input(payroll_repo, attendance_repo, roster, admin):
    svc = _service(payroll_repo, attendance_repo, roster, admin)

    with pytest.raises(ValidationError):
        svc.generate(site_id="", start=START, end=END)
    with pytest.raises(ValidationError):
        svc.generate(site_id="1", start=END, end=START)


def test_generate_fails_whole_when_history_unavailable(payroll_repo, attendance_repo, roster, admin):
    attendance_repo.fail_list = True
    svc = _service(payroll_repo, attendance_repo, roster, admin)

    with pytest.raises(DataUnavailableError):
        svc.generate_and_store(site_id="1", start=START, end=END)

    assert payroll_repo.list_payroll() == []


def test_generate_and_store_replaces_same_window(payroll_repo, attendance_repo, roster, admin, fixed_now):
    svc = _service(payroll_repo, attendance_repo, roster, admin)

    svc.generate_and_store(site_id="1", start=START, end=END, now=fixed_now)
    _seed_ten_days(attendance_repo)
    svc.generate_and_store(site_id="1", start=START, end=END, now=fixed_now)
    svc.generate_and_store(site_id="2", start=START, end=END, now=fixed_now)

    site_one = svc.list_payroll(PayrollFilter(site_id="1"))
    assert len(site_one) == 2
    assert {r.worker_id: r.total_pay for r in site_one}["W001"] == 8600
    assert len(svc.list_payroll()) == 3


def test_summary_totals(payroll_repo, attendance_repo, roster, admin, fixed_now):
    _seed_ten_days(attendance_repo)
    svc = _service(payroll_repo, attendance_repo, roster, admin)
    records = svc.generate_and_store(site_id="1", start=START, end=END, now=fixed_now)
    svc.mark_paid(next(r.payroll_id for r in records if r.worker_id == "W001"), now=fixed_now)

    summary = svc.summarize(PayrollFilter(site_id="1"))

    assert summary.total_workers == 2
    assert summary.paid_workers == 1
    assert summary.pending_workers == 1
    assert summary.total_amount == 8600
    assert summary.total_overtime_pay == 600


def test_mark_paid_sets_payment_date(payroll_repo, attendance_repo, roster, admin, fixed_now):
    svc = _service(payroll_repo, attendance_repo, roster, admin)
    record = svc.generate_and_store(site_id="2", start=START, end=END, now=fixed_now)[0]

    paid = svc.mark_paid(record.payroll_id, now=fixed_now)

    assert paid.status == PayrollStatus.PAID
    assert paid.payment_date == fixed_now.date()
    assert payroll_repo.get_by_id(record.payroll_id).status == PayrollStatus.PAID


def test_terminal_states_cannot_move(payroll_repo, attendance_repo, roster, admin, fixed_now):
    svc = _service(payroll_repo, attendance_repo, roster, admin)
    first, second = svc.generate_and_store(site_id="1", start=START, end=END, now=fixed_now)

    svc.mark_paid(first.payroll_id, payment_date=date(2025, 4, 15), now=fixed_now)
    svc.cancel(second.payroll_id, now=fixed_now)

    with pytest.raises(ValidationError):
        svc.cancel(first.payroll_id, now=fixed_now)
    with pytest.raises(ValidationError):
        svc.mark_paid(second.payroll_id, now=fixed_now)
    assert payroll_repo.get_by_id(first.payroll_id).payment_date == date(2025, 4, 15)
    assert payroll_repo.get_by_id(second.payroll_id).payment_date is None


def test_pending_to_pending_is_rejected(payroll_repo, attendance_repo, roster, admin, fixed_now):
    svc = _service(payroll_repo, attendance_repo, roster, admin)
    record = svc.generate_and_store(site_id="2", start=START, end=END, now=fixed_now)[0]

    with pytest.raises(ValidationError):
        svc.update_status(record.payroll_id, PayrollStatus.PENDING, now=fixed_now)


def test_status_change_is_admin_only(payroll_repo, attendance_repo, roster, admin, supervisor, anonymous, fixed_now):
    record = _service(payroll_repo, attendance_repo, roster, admin).generate_and_store(
        site_id="2", start=START, end=END, now=fixed_now
    )[0]

    with pytest.raises(AuthorizationError):
        _service(payroll_repo, attendance_repo, roster, supervisor).mark_paid(record.payroll_id)
    with pytest.raises(UnauthenticatedError):
        _service(payroll_repo, attendance_repo, roster, anonymous).mark_paid(record.payroll_id)
    assert payroll_repo.get_by_id(record.payroll_id).status == PayrollStatus.PENDING


def test_status_change_unknown_record(payroll_repo, attendance_repo, roster, admin):
    with pytest.raises(NotFoundError):
        _service(payroll_repo, attendance_repo, roster, admin).mark_paid("missing")


def test_regenerating_keeps_paid_and_cancelled_rows(payroll_repo, attendance_repo, roster, admin, fixed_now):
    _seed_ten_days(attendance_repo)
    svc = _service(payroll_repo, attendance_repo, roster, admin)
    first = {r.worker_id: r for r in svc.generate_and_store(site_id="1", start=START, end=END, now=fixed_now)}
    svc.mark_paid(first["W001"].payroll_id, payment_date=date(2025, 4, 12), now=fixed_now)

    regenerated = svc.generate_and_store(site_id="1", start=START, end=END, now=fixed_now)

    assert [r.worker_id for r in regenerated] == ["W002"]
    rajesh = [r for r in svc.list_payroll(PayrollFilter(site_id="1")) if r.worker_id == "W001"]
    assert [(r.status, r.payment_date) for r in rajesh] == [(PayrollStatus.PAID, date(2025, 4, 12))]
    assert len(svc.list_payroll(PayrollFilter(site_id="1"))) == 2

    svc.cancel(regenerated[0].payroll_id, now=fixed_now)
    assert svc.generate_and_store(site_id="1", start=START, end=END, now=fixed_now) == []
    assert {r.status for r in svc.list_payroll(PayrollFilter(site_id="1"))} == {PayrollStatus.PAID, PayrollStatus.CANCELLED}
