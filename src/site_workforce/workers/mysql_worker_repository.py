from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import WorkerStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_date, to_float
from .model import Worker
from .repository import WorkerRepository

_COLUMNS = "worker_id, name, contact_number, address, skills, daily_wage, joining_date, site_id, site_name, status"


def _row_to_worker(r: dict) -> Worker:
    skills = tuple(s for s in (r.get("skills") or "").split(",") if s)
    return Worker(
        worker_id=r["worker_id"],
        name=r["name"],
        site_id=r["site_id"],
        site_name=r.get("site_name") or "",
        daily_wage=to_float(r["daily_wage"]),
        status=WorkerStatus(r["status"]),
        contact_number=r.get("contact_number") or "",
        address=r.get("address"),
        skills=skills,
        joining_date=to_date(r.get("joining_date")),
    )


class MySQLWorkerRepository(WorkerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_workers(self, *, site_id: Optional[str] = None, status: Optional[WorkerStatus] = None) -> Sequence[Worker]:
        clauses = ["1=1"]
        params: list[object] = []
        if site_id:
            clauses.append("site_id=%s")
            params.append(site_id)
        if status:
            clauses.append("status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM workers WHERE {' AND '.join(clauses)} ORDER BY worker_id",
                tuple(params),
            )
            return [_row_to_worker(r) for r in fetchall(cur)]

    def get_by_worker_id(self, worker_id: str) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM workers WHERE worker_id=%s", (worker_id,))
            r = fetchone(cur)
            return _row_to_worker(r) if r else None

    def save_worker(self, worker: Worker) -> Worker:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO workers({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name), contact_number=VALUES(contact_number), address=VALUES(address),
                    skills=VALUES(skills), daily_wage=VALUES(daily_wage), joining_date=VALUES(joining_date),
                    site_id=VALUES(site_id), site_name=VALUES(site_name), status=VALUES(status)
                """,
                (
                    worker.worker_id,
                    worker.name,
                    worker.contact_number,
                    worker.address,
                    ",".join(worker.skills),
                    worker.daily_wage,
                    worker.joining_date,
                    worker.site_id,
                    worker.site_name,
                    worker.status.value,
                ),
            )
        return worker
