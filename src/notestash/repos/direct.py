"""Provides the :class:`DirectRepo` class."""

from contextlib import contextmanager
import logging
import os
import os.path
from typing import List

from notestash.conf import RepoConf
from notestash.files import atomic_write, is_temp_name, remove_stale_temp_files
from notestash.locks import LockTable
from notestash.models import Note
from notestash.repos.base import Repo, AlreadyExists, InvalidIdentifier, IOFailure, NotFound, check_name,\
    check_text


logger = logging.getLogger(__name__)


class DirectRepo(Repo):
    """Stores each note as a file directly inside :attr:`RepoConf.root_path`, with no caching.

    Changes to a single note (create, update, delete) are serialized by a per-name lock, so the check for
    whether the note exists and the change itself happen as one step. Writes go through
    :func:`notestash.files.atomic_write`, so reads never need the lock.

    .. attribute:: conf
       :type: RepoConf

    .. attribute:: locks
       :type: notestash.locks.LockTable
    """
    def __init__(self, conf: RepoConf):
        self.conf = conf
        if not os.path.isdir(conf.root_path):
            raise ValueError(f'Root directory does not exist: {conf.root_path}')
        self.locks = LockTable()
        remove_stale_temp_files(conf.root_path)

    def _path(self, name: str) -> str:
        check_name(name)
        root = self.conf.root_path
        if self.conf.ignore(root, name):
            raise InvalidIdentifier('Note name is reserved', name)
        path = os.path.join(root, name)
        if not os.path.dirname(path) == os.path.normpath(root):
            raise InvalidIdentifier('Note name does not refer to a file in the root directory', name)
        return path

    def _check_root(self, name: str = None) -> None:
        if not os.path.isdir(self.conf.root_path):
            raise IOFailure(f'Root directory is missing: {self.conf.root_path}', name)

    @contextmanager
    def _io(self, name: str = None):
        try:
            yield
        except OSError as e:
            logger.exception('Filesystem error for note %r', name)
            raise IOFailure(f'Filesystem error: {e}', name, e) from e

    def _listable(self, filename: str) -> bool:
        try:
            check_name(filename)
        except InvalidIdentifier:
            return False
        return True

    def _exists(self, path: str) -> bool:
        return os.path.isfile(path) and not os.path.islink(path)

    def _read_text(self, path: str) -> str:
        with open(path, 'r', encoding='utf-8', errors='replace', newline='') as file:
            return file.read()

    def create(self, name: str, text: str) -> Note:
        path = self._path(name)
        check_text(name, text)
        with self.locks.hold(name), self._io(name):
            self._check_root(name)
            if os.path.lexists(path):
                raise AlreadyExists('Note already exists', name)
            atomic_write(path, text, fsync=self.conf.fsync)
        logger.info('Created note %r', name)
        return Note(name, text)

    def read(self, name: str) -> Note:
        path = self._path(name)
        with self._io(name):
            if not self._exists(path):
                self._check_root(name)
                raise NotFound('Note not found', name)
            try:
                text = self._read_text(path)
            except FileNotFoundError as e:
                self._check_root(name)
                raise NotFound('Note not found', name, e) from e
        logger.debug('Read note %r', name)
        return Note(name, text)

    def update(self, name: str, text: str) -> Note:
        path = self._path(name)
        with self.locks.hold(name), self._io(name):
            if not self._exists(path):
                self._check_root(name)
                raise NotFound('Note not found', name)
            check_text(name, text)
            atomic_write(path, text, fsync=self.conf.fsync)
        logger.info('Updated note %r', name)
        return Note(name, text)

    def delete(self, name: str) -> None:
        path = self._path(name)
        with self.locks.hold(name), self._io(name):
            if not self._exists(path):
                self._check_root(name)
                raise NotFound('Note not found', name)
            os.remove(path)
        logger.info('Deleted note %r', name)

    def list(self) -> List[Note]:
        root = self.conf.root_path
        result = []
        with self._io():
            entries = sorted(os.scandir(root), key=lambda e: e.name)
            for entry in entries:
                if entry.is_symlink() or is_temp_name(entry.name) or self.conf.ignore(root, entry.name):
                    continue
                if not entry.is_file() or not self._listable(entry.name):
                    continue
                try:
                    text = self._read_text(entry.path)
                except FileNotFoundError:
                    # deleted since the directory was scanned
                    continue
                result.append(Note(entry.name, text))
        logger.debug('Listed %d notes', len(result))
        return result
