"""Rebuild the Redis presence set from the attendance table.

Recovery tool for a flushed or restarted Redis; not part of normal operation.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from office_attendance.common.datetime_utils import parse_iso_date
from office_attendance.container import build_container_from_settings

logger = logging.getLogger("rebuild_presence")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--date", type=parse_iso_date, default=None, help="YYYY-MM-DD, defaults to today")
    args = parser.parse_args()

    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO)
    settings = importlib.import_module(get_settings_module())

    container = build_container_from_settings(settings)
    members = container.attendance_engine.rebuild_presence(as_of=args.date)
    logger.info(f"OK: {len(members)} employees in office: {sorted(members)}")


if __name__ == "__main__":
    main()
