"""Back up or restore attendance records.

    python scripts/backup.py              # write backups/attendance_<timestamp>.json
    python scripts/backup.py restore FILE # replace every record with FILE's contents

Works against whatever backend the active settings module selects.
"""

from __future__ import annotations

import importlib
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.school_attendance.school_attendance.attendance.json_snapshot_repository import JsonFileSnapshotRepository
from src.school_attendance.school_attendance.container import build_container


def main(argv: list[str]) -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        backend=settings.ATTENDANCE_BACKEND,
        data_file=getattr(settings, "ATTENDANCE_DATA_FILE", None),
        db_config=getattr(settings, "DB_CONFIG", None),
    )

    if argv[:1] == ["restore"]:
        if len(argv) != 2:
            raise SystemExit("Usage: backup.py restore FILE")
        records = JsonFileSnapshotRepository(argv[1]).load_all()
        count = container.attendance_service.import_backup(records)
        print(f"OK: Restored {count} attendance records from {argv[1]}")
        return

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"attendance_{ts}.json"

    JsonFileSnapshotRepository(out_file).save_all(container.store.snapshot())
    print(f"OK: Backup created: {out_file} ({len(container.store)} records)")


if __name__ == "__main__":
    main(sys.argv[1:])
