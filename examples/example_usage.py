"""Example: drive the service layer directly (no Flask), on the in-memory side-store."""

from datetime import date, datetime

from site_workforce.container import build_container
from site_workforce.core.enums import AttendanceStatus, Role
from site_workforce.users.identity import StaticIdentityProvider
from site_workforce.users.model import CurrentUser
from site_workforce.workers.model import Worker


def main():
    identity = StaticIdentityProvider(CurrentUser(user_id="1", role=Role.ADMIN))
    container = build_container(remote_enabled=False, identity=identity)

    container.workers_repo.save_worker(Worker(worker_id="W001", name="Rajesh Kumar", site_id="1", daily_wage=800))
    container.workers_repo.save_worker(Worker(worker_id="W002", name="Sunil Sharma", site_id="1", daily_wage=750))

    day = date(2025, 4, 11)
    records = container.attendance_service.load_day(site_id="1", work_date=day)
    present = container.attendance_service.update_status(
        records[0].record_id, AttendanceStatus.PRESENT, check_in_time="08:00", now=datetime(2025, 4, 11, 8, 0)
    )
    container.attendance_service.check_out(present.record_id, check_out_time="18:00")

    print(container.attendance_service.summarize(work_date=day, site_id="1").as_dict())
    for row in container.payroll_service.generate_and_store(site_id="1", start=day, end=day):
        print(row.worker_id, row.days_worked, row.overtime_hours, row.total_pay)


if __name__ == "__main__":
    main()
