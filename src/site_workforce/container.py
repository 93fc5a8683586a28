from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import StatusPolicyFactory
from .attendance.local_attendance_repository import LocalAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .attendance.tiered_attendance_repository import TieredAttendanceRepository
from .common.notifications import ChangeNotifier
from .database.connection import DBConfig, DatabaseConnection
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.local_payroll_repository import LocalPayrollRepository
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .storage.local_store import LocalStore
from .users.identity import IdentityProvider, SessionIdentityProvider
from .workers.local_worker_repository import LocalWorkerRepository
from .workers.mysql_worker_repository import MySQLWorkerRepository
from .workers.repository import WorkerRepository
from .workers.tiered_worker_repository import TieredWorkerRepository


@dataclass(frozen=True)
class Container:
    local_store: LocalStore
    notifier: ChangeNotifier
    identity: IdentityProvider

    workers_repo: WorkerRepository
    attendance_repo: AttendanceRepository
    payroll_repo: PayrollRepository

    attendance_service: AttendanceService
    payroll_service: PayrollService


def build_container(
    *,
    db_config: Optional[dict] = None,
    remote_enabled: bool = True,
    local_store_path: Optional[str] = None,
    identity: Optional[IdentityProvider] = None,
) -> Container:
    local_store = LocalStore(local_store_path)
    local_workers = LocalWorkerRepository(local_store)
    local_attendance = LocalAttendanceRepository(local_store)

    workers_repo: WorkerRepository = local_workers
    attendance_repo: AttendanceRepository = local_attendance
    payroll_repo: PayrollRepository = LocalPayrollRepository(local_store)

    if remote_enabled and db_config:
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        workers_repo = TieredWorkerRepository(MySQLWorkerRepository(conn), local_workers)
        attendance_repo = TieredAttendanceRepository(MySQLAttendanceRepository(conn), local_attendance)
        payroll_repo = MySQLPayrollRepository(conn)

    identity = identity or SessionIdentityProvider()
    notifier = ChangeNotifier()
    calculator = StandardPayrollCalculator()

    attendance_service = AttendanceService(
        attendance_repo,
        workers_repo,
        identity,
        policy_factory=StatusPolicyFactory(),
        calculator=calculator,
        notifier=notifier,
    )
    payroll_service = PayrollService(
        payroll_repo,
        attendance_repo,
        workers_repo,
        identity,
        calculator=calculator,
        notifier=notifier,
    )

    return Container(
        local_store=local_store,
        notifier=notifier,
        identity=identity,
        workers_repo=workers_repo,
        attendance_repo=attendance_repo,
        payroll_repo=payroll_repo,
        attendance_service=attendance_service,
        payroll_service=payroll_service,
    )
