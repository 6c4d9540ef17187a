"""Example: use the service layer directly (no Flask).

Controllers stay thin; the business rules live in the services.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.dtr_system.dtr_system.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        backend=getattr(settings, "STORAGE_BACKEND", "file"),
        data_file=getattr(settings, "DATA_FILE", None),
        db_config=settings.DB_CONFIG,
    )
    today = date.today()
    report = container.report_service.build_report(start=today.replace(day=1), end=today)
    for row in report.summary:
        print(row["name"], row["days"], row["total_hours"])


if __name__ == "__main__":
    main()
