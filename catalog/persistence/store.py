# catalog/persistence/store.py
from __future__ import annotations
import json, os
from pathlib import Path
from typing import Any

from catalog.domain.errors import StoreUnavailableError

class DiskStore:
    """
    Minimal fs-backed journal for snapshot + WAL with atomicity & fsync.
    Layout:
      <data_dir>/catalog.snapshot.json
      <data_dir>/catalog.wal.jsonl
    Write failures surface as StoreUnavailableError; nothing here retries.
    """
    def __init__(self, data_dir: str | None = None):
        base = data_dir or os.getenv("DATA_DIR", "./data")
        self.root = Path(base)
        self.root.mkdir(parents=True, exist_ok=True)
        self.snapshot_path = self.root / "catalog.snapshot.json"
        self.wal_path = self.root / "catalog.wal.jsonl"

    # -------- helpers
    def _fsync_file(self, f) -> None:
        f.flush()
        os.fsync(f.fileno())

    # -------- WAL
    def append_wal(self, entry: dict) -> None:
        """ Append one JSON line and fsync. """
        line = json.dumps(entry, separators=(",", ":"), ensure_ascii=False)
        try:
            with open(self.wal_path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
                self._fsync_file(f)
        except OSError as exc:
            raise StoreUnavailableError(f"WAL append failed: {exc}") from exc

    # -------- snapshot (atomic)
    def write_snapshot(self, image: dict) -> None:
        tmp = self.snapshot_path.with_suffix(".json.tmp")
        data = json.dumps(image, separators=(",", ":"), ensure_ascii=False)
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(data)
                self._fsync_file(f)
            os.replace(tmp, self.snapshot_path)  # atomic on same fs

            # snapshot now covers every WAL entry
            with open(self.wal_path, "w", encoding="utf-8") as f:
                self._fsync_file(f)
        except OSError as exc:
            raise StoreUnavailableError(f"Snapshot write failed: {exc}") from exc

    # -------- load
    def load(self) -> dict[str, Any]:
        """Return {'snapshot': dict|None, 'wal': list[dict]}"""
        snap = None
        if self.snapshot_path.exists():
            snap_text = self.snapshot_path.read_text(encoding="utf-8")
            if snap_text.strip():
                snap = json.loads(snap_text)

        wal_entries: list[dict] = []
        if self.wal_path.exists():
            with open(self.wal_path, "r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if not line:
                        continue
                    wal_entries.append(json.loads(line))
        return {"snapshot": snap, "wal": wal_entries}

    # -------- misc
    def stats(self) -> dict:
        def size(p: Path) -> int:
            return p.stat().st_size if p.exists() else 0
        return {
            "snapshot_bytes": size(self.snapshot_path),
            "wal_bytes": size(self.wal_path),
            "snapshot_path": str(self.snapshot_path),
            "wal_path": str(self.wal_path),
        }
