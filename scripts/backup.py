"""Back up application data.

File backend: writes the JSON snapshot that /api/restore accepts.
MySQL backend: runs `mysqldump` (MySQL client tools must be installed).
"""

from __future__ import annotations

import importlib
import json
import logging
import subprocess
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.dtr_system.dtr_system.storage.state import AppState

_logger = logging.getLogger("backup")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    settings = importlib.import_module(get_settings_module())

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")

    if getattr(settings, "STORAGE_BACKEND", "file") == "file":
        state = AppState(settings.DATA_FILE)
        out_file = out_dir / f"dtr_backup_{ts}.json"
        out_file.write_text(json.dumps(state.snapshot(), indent=2), encoding="utf-8")
        _logger.info("Backup created: %s", out_file)
        return

    db = settings.DB_CONFIG
    out_file = out_dir / f"dtr_db_{ts}.sql"
    cmd = [
        "mysqldump",
        f"-h{db['host']}",
        f"-P{db.get('port', 3306)}",
        f"-u{db['user']}",
        f"-p{db['password']}",
        db["database"],
    ]
    try:
        with out_file.open("wb") as f:
            subprocess.run(cmd, stdout=f, stderr=subprocess.PIPE, check=True)
        _logger.info("Backup created: %s", out_file)
    except FileNotFoundError:
        raise SystemExit("`mysqldump` not found. Install the MySQL client tools or back up with Workbench.")


if __name__ == "__main__":
    main()
