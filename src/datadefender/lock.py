"""Single-instance application lock.

An exclusive, non-blocking `flock` on `<lock_dir>/<name>.lock`. The kernel drops
the lock when the holding process exits, so a crashed run never blocks the next one.

Lock directory: `lock_dir` argument, else $DATADEFENDER_LOCK_DIR, else the system temp dir.
POSIX only (fcntl).
"""

from __future__ import annotations
import fcntl
import logging
import os
import tempfile
from typing import IO, Optional

log = logging.getLogger(__name__)

LOCK_DIR_ENV = "DATADEFENDER_LOCK_DIR"

class ApplicationLock:
    def __init__(self, name: str, lock_dir: Optional[str] = None):
        lock_dir = lock_dir or os.environ.get(LOCK_DIR_ENV) or tempfile.gettempdir()
        os.makedirs(lock_dir, exist_ok=True)
        self.name = name
        self.path = os.path.join(lock_dir, f"{name}.lock")
        self._fh: Optional[IO[str]] = None

    @property
    def held(self) -> bool:
        return self._fh is not None

    def acquire(self) -> bool:
        """Try to take the lock; False if another process holds it."""
        if self._fh is not None:
            return True
        fh = open(self.path, "a+", encoding="utf-8")
        try:
            fcntl.flock(fh.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError:
            fh.close()
            return False
        fh.seek(0)
        fh.truncate()
        fh.write(str(os.getpid()))
        fh.flush()
        self._fh = fh
        log.debug("Acquired application lock %s", self.path)
        return True

    def is_app_active(self) -> bool:
        """True if another instance already holds the lock. Acquires it otherwise."""
        return not self.acquire()

    def release(self) -> None:
        if self._fh is None:
            return
        fcntl.flock(self._fh.fileno(), fcntl.LOCK_UN)
        self._fh.close()
        self._fh = None
        log.debug("Released application lock %s", self.path)

    def __enter__(self) -> "ApplicationLock":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
