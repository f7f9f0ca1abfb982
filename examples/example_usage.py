"""Example: use the engine directly (no Flask).

Controllers are a thin layer; the check-in rules live in AttendanceEngine.
"""

import importlib
from datetime import timedelta

from config import get_settings_module

from office_attendance.common.datetime_utils import now_local
from office_attendance.container import build_container_from_settings


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container_from_settings(settings)
    engine = container.attendance_engine

    print(engine.check_in(3, "Alice Smith").to_dict())
    print([p.to_dict() for p in engine.current_presence()])

    today = now_local().date()
    report = engine.report(today - timedelta(days=7), today)
    print(report.to_dict())


if __name__ == "__main__":
    main()
