"""Write a JSON backup of the local attendance data.

Usage: ``python scripts/backup.py [output_dir]``; the file can be imported on
another device through the backup upload endpoint.
"""

from __future__ import annotations

import sys
from pathlib import Path

from dotenv import load_dotenv

from timesheet.container import build_container, build_kv_store
from timesheet.main import load_settings


def main() -> None:
    load_dotenv(override=False)
    settings = load_settings()

    container = build_container(
        kv_store=build_kv_store(
            backend=str(settings.get("STORAGE_BACKEND") or "sqlite"),
            path=str(settings.get("STORAGE_PATH") or ""),
        ),
        seed_default_workers=bool(settings.get("SEED_DEFAULT_WORKERS", True)),
    )

    out_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(__file__).resolve().parents[1] / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    backup = container.sync_service.export_backup()
    out_file = out_dir / backup.filename
    out_file.write_bytes(backup.content)
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
