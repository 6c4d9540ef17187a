"""Insert the demo departments, employees and projects into the configured backend."""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.dtr_system.dtr_system.container import build_container
from src.dtr_system.dtr_system.storage.seed import seed_demo_data


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        backend=getattr(settings, "STORAGE_BACKEND", "file"),
        data_file=getattr(settings, "DATA_FILE", None),
        db_config=dict(settings.DB_CONFIG),
    )
    seed_demo_data(container.departments_repo, container.employees_repo, container.projects_repo)


if __name__ == "__main__":
    main()
