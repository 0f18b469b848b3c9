"""
On-disk store for the raw dataset documents.

Each dataset is one JSON file under the cache directory. The file's
modification time is the only staleness signal, so the store reports age
straight from filesystem metadata and never embeds timestamps in the payload.
"""
from __future__ import annotations

import logging
import os
import stat
import tempfile
import time
from datetime import timedelta
from pathlib import Path
from typing import Callable

from core.constants import CACHE_FILE_SUFFIX
from core.exceptions import CacheMissing, CacheUnreadable, CacheWriteFailed

logger = logging.getLogger(__name__)


class CacheStore:
    """
    Reads and writes named JSON documents in a cache directory.

    The directory is created lazily on the first write, so constructing a
    store has no side effects.
    """

    def __init__(self, cache_dir: Path, clock: Callable[[], float] = time.time):
        """
        Args:
            cache_dir: Directory holding the cache files
            clock: Returns the current wall-clock time in epoch seconds
        """
        self.cache_dir = Path(cache_dir)
        self._clock = clock

    def path_for(self, name: str) -> Path:
        """Get the file path for a dataset."""
        return self.cache_dir / f"{name}{CACHE_FILE_SUFFIX}"

    def exists(self, name: str) -> bool:
        """
        Whether a regular file holds the record.

        Raises:
            CacheUnreadable: If the record's metadata cannot be read for any
                reason other than it being absent
        """
        path = self.path_for(name)
        try:
            st = path.stat()
        except (FileNotFoundError, NotADirectoryError):
            return False
        except OSError as e:
            raise CacheUnreadable(name, f"cannot read metadata of {path}: {e}") from e
        return stat.S_ISREG(st.st_mode)

    def age(self, name: str) -> timedelta:
        """
        Time elapsed since the record was last written.

        Raises:
            CacheMissing: If the record does not exist
            CacheUnreadable: If its metadata cannot be read, or its mtime is
                in the future
        """
        path = self.path_for(name)
        try:
            mtime = path.stat().st_mtime
        except (FileNotFoundError, NotADirectoryError) as e:
            raise CacheMissing(name) from e
        except OSError as e:
            raise CacheUnreadable(name, f"cannot read metadata of {path}: {e}") from e

        elapsed = self._clock() - mtime
        if elapsed < 0:
            raise CacheUnreadable(
                name, f"modification time of {path} is {-elapsed:.0f}s in the future"
            )
        return timedelta(seconds=elapsed)

    def read(self, name: str) -> bytes:
        """
        Read the raw bytes of a record.

        Raises:
            CacheMissing: If the record does not exist
            CacheUnreadable: On any other I/O error
        """
        path = self.path_for(name)
        try:
            data = path.read_bytes()
        except FileNotFoundError as e:
            raise CacheMissing(name) from e
        except OSError as e:
            raise CacheUnreadable(name, f"cannot read {path}: {e}") from e

        logger.debug(f"Read {len(data)} bytes from {path}")
        return data

    def write(self, name: str, data: bytes) -> None:
        """
        Replace a record with new content.

        The content goes to a temporary file next to the record which is then
        renamed over it, so readers see either the old or the new document.

        Raises:
            CacheWriteFailed: If the directory or file cannot be written
        """
        path = self.path_for(name)
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise CacheWriteFailed(name, f"unable to save {path}: {e}") from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.warning(f"Could not remove temporary file {tmp_name}")

        logger.info(f"Cached {name} ({len(data)} bytes) to {path}")
