from __future__ import annotations

import importlib
import sys
from datetime import date
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(REPO_ROOT / "src"))

from dotenv import load_dotenv

from site_workforce.config import get_settings_module
from site_workforce.database.connection import DBConfig, DatabaseConnection
from site_workforce.workers.model import Worker
from site_workforce.workers.mysql_worker_repository import MySQLWorkerRepository

DEMO_ROSTER = (
    Worker(worker_id="W001", name="Rajesh Kumar", site_id="1", site_name="Skyline Towers", daily_wage=800,
           skills=("masonry",), joining_date=date(2024, 1, 15)),
    Worker(worker_id="W002", name="Sunil Sharma", site_id="1", site_name="Skyline Towers", daily_wage=750,
           skills=("carpentry",), joining_date=date(2024, 3, 1)),
    Worker(worker_id="W003", name="Priya Patel", site_id="2", site_name="Riverside Complex", daily_wage=900,
           skills=("electrical",), joining_date=date(2023, 11, 20)),
    Worker(worker_id="W004", name="Amit Singh", site_id="2", site_name="Riverside Complex", daily_wage=700,
           skills=("plumbing",), joining_date=date(2024, 6, 10)),
)


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    repo = MySQLWorkerRepository(DatabaseConnection.get_instance(DBConfig.from_dict(db_config)))
    for worker in DEMO_ROSTER:
        repo.save_worker(worker)

    print(
        "OK: Seeded demo roster -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(workers={len(DEMO_ROSTER)})"
    )


if __name__ == "__main__":
    main()
