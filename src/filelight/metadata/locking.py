"""Advisory locking for sidecar read-modify-write cycles."""

from __future__ import annotations

import fcntl
import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

LOGGER = logging.getLogger(__name__)


@contextmanager
def sidecar_lock(directory: Path) -> Iterator[None]:
    """Hold an exclusive lock on ``directory`` while its sidecar is rewritten.

    The lock lives on the directory, not the sidecar, since the sidecar inode
    is swapped out by rename on every save. Readers never lock.

    Args:
        directory: Directory whose sidecar file is being updated.

    Raises:
        OSError: If the directory cannot be opened or locked.
    """
    fd = os.open(directory, os.O_RDONLY)
    try:
        fcntl.flock(fd, fcntl.LOCK_EX)
        LOGGER.debug("Acquired sidecar lock for %s", directory)
        try:
            yield
        finally:
            fcntl.flock(fd, fcntl.LOCK_UN)
            LOGGER.debug("Released sidecar lock for %s", directory)
    finally:
        os.close(fd)


__all__ = ["sidecar_lock"]
