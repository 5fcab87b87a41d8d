"""Low-level helpers for writing note files."""

import logging
import os
import re
import time

import shortuuid


logger = logging.getLogger(__name__)

STALE_TEMP_AGE = 60 * 60

TEMP_NAME_RE = re.compile(r'^\.[0-9A-Za-z]+\.tmp$')


def temp_path(directory: str) -> str:
    """Returns a fresh, hidden path in the directory for staging a write."""
    return os.path.join(directory, f'.{shortuuid.uuid()}.tmp')


def is_temp_name(filename: str) -> bool:
    return bool(TEMP_NAME_RE.match(filename))


def atomic_write(path: str, text: str, fsync: bool = True) -> None:
    """Replaces the file at path with the given text, or creates it.

    The text is written to a temporary file in the same directory, which is then renamed over the target, so
    readers only ever see the complete old content or the complete new content. If fsync is True the data is
    flushed to disk before the rename.

    On failure the temporary file is removed and the exception propagates.
    """
    tmp = temp_path(os.path.dirname(path))
    try:
        with open(tmp, 'x', encoding='utf-8', newline='') as file:
            file.write(text)
            if fsync:
                file.flush()
                os.fsync(file.fileno())
        os.replace(tmp, path)
    except BaseException:
        try:
            os.remove(tmp)
        except FileNotFoundError:
            pass
        except OSError:
            logger.warning('Could not remove temporary file %s', tmp, exc_info=True)
        raise


def remove_stale_temp_files(directory: str, max_age: float = STALE_TEMP_AGE) -> int:
    """Deletes temporary files left behind in the directory by an interrupted :func:`atomic_write`.

    Only files not modified in the last max_age seconds are removed, so writes still in progress in another
    repo instance are left alone.

    Returns the number of files removed.
    """
    cutoff = time.time() - max_age
    count = 0
    for entry in os.scandir(directory):
        if not (entry.is_file(follow_symlinks=False) and is_temp_name(entry.name)):
            continue
        if entry.stat(follow_symlinks=False).st_mtime < cutoff:
            os.remove(entry.path)
            logger.info('Removed stale temporary file %s', entry.path)
            count += 1
    return count
