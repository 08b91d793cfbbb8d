from __future__ import annotations

from pathlib import Path
import os
import time

LOCK_NAME = ".newsflow.lock"


class RunLock:
    """One run per output directory; a lock older than the timeout is stale."""

    def __init__(self, out_dir: str | Path, timeout_seconds: int = 60 * 60):
        self.path = Path(out_dir) / LOCK_NAME
        self.timeout_seconds = timeout_seconds

    def __enter__(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)

        if self.path.exists():
            age = time.time() - self.path.stat().st_mtime
            if age < self.timeout_seconds:
                raise RuntimeError(f"Another run is already in progress (lock {self.path} exists).")
            # stale lock
            self.path.unlink(missing_ok=True)

        self.path.write_text(str(os.getpid()), encoding="utf-8")
        return self

    def __exit__(self, exc_type, exc, tb):
        self.path.unlink(missing_ok=True)
