from __future__ import annotations

import threading
from datetime import datetime

from src.dtr_system.dtr_system.attendance.position import PositionFix
from src.dtr_system.dtr_system.core.enums import Punch
from src.dtr_system.dtr_system.core.exceptions import ScanError

SCAN = {"type": "department_scan", "department": "Engineering"}


def test_simultaneous_scans_record_a_single_time_in(container):
    now = datetime(2023, 11, 6, 7, 30)
    fix = PositionFix(latitude=8.5735, longitude=124.7813)
    results, errors = [], []
    start = threading.Barrier(4)

    def scan():
        start.wait()
        try:
            results.append(container.attendance_service.record_scan("2002", SCAN, fix, now=now))
        except ScanError as e:
            errors.append(e)

    threads = [threading.Thread(target=scan) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert [r.punch for r in results] == [Punch.TIME_IN]
    assert {e.kind for e in errors} == {"OutsideAllowedWindow"}
    assert len(container.attendance_service.list_records(start_date=now.date(), end_date=now.date())) == 1
