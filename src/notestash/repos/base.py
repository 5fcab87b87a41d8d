"""Defines the API for accessing a collection of notes.

The most important class is :class:`Repo`.
"""

import os
from typing import List

from notestash.models import Note


MAX_NAME_BYTES = 255


class NoteError(Exception):
    """Base class for errors raised by :class:`Repo` operations."""
    def __init__(self, message: str, name: str = None, cause: BaseException = None):
        super().__init__(message)
        self.message = message
        self.name = name
        self.cause = cause


class InvalidIdentifier(NoteError):
    """Raised when a note name is empty, could escape the repo's directory, or is otherwise unusable."""


class InvalidContent(NoteError):
    """Raised when note text is empty or contains only whitespace."""


class NotFound(NoteError):
    """Raised when no note exists with the requested name."""


class AlreadyExists(NoteError):
    """Raised when creating a note whose name is already taken."""


class IOFailure(NoteError):
    """Raised when the underlying filesystem operation fails.

    The original :exc:`OSError` is available as :attr:`cause` and is also chained as ``__cause__``.
    """


def check_name(name: str) -> None:
    """Raises :exc:`InvalidIdentifier` unless the name can only refer to a direct child of a directory.

    This does not touch the filesystem.
    """
    if not isinstance(name, str) or not name:
        raise InvalidIdentifier('Note name must be a non-empty string', name)
    if name in ('.', '..') or name.startswith('.'):
        raise InvalidIdentifier('Note name must not start with a period', name)
    separators = {'/', os.sep, os.altsep} - {None}
    if any(sep in name for sep in separators):
        raise InvalidIdentifier('Note name must not contain a path separator', name)
    if '\0' in name:
        raise InvalidIdentifier('Note name must not contain NUL', name)
    try:
        encoded = name.encode('utf-8')
    except UnicodeEncodeError as e:
        raise InvalidIdentifier('Note name must be valid unicode', name, e) from e
    if len(encoded) > MAX_NAME_BYTES:
        raise InvalidIdentifier(f'Note name must be at most {MAX_NAME_BYTES} bytes', name)


def check_text(name: str, text: str) -> None:
    """Raises :exc:`InvalidContent` unless the text is a non-blank string that can be stored as UTF-8."""
    if not isinstance(text, str) or not text.strip():
        raise InvalidContent('Note content must not be empty', name)
    try:
        text.encode('utf-8')
    except UnicodeEncodeError as e:
        raise InvalidContent('Note content must be valid unicode', name, e) from e


class Repo:
    """Base class for repos, which are responsible for reading and changing a collection of notes.

    Every operation validates the note name before doing anything else, raising :exc:`InvalidIdentifier`
    for unsafe names. Implementations must be safe to call from multiple threads at once.

    Repos can be used as context managers, which will call :meth:`close` on exit.
    """
    def create(self, name: str, text: str) -> Note:
        """Creates a new note.

        Raises :exc:`InvalidContent` if the text is empty or whitespace-only, and :exc:`AlreadyExists`
        if a note (or anything else) already exists with that name. Of several concurrent calls with the same
        name, at most one succeeds.
        """
        raise NotImplementedError()

    def read(self, name: str) -> Note:
        """Returns the current content of the note.

        Raises :exc:`NotFound` if it does not exist.
        """
        raise NotImplementedError()

    def update(self, name: str, text: str) -> Note:
        """Replaces the content of an existing note.

        Raises :exc:`NotFound` if it does not exist, or :exc:`InvalidContent` if the new text is empty or
        whitespace-only. Concurrent readers see either the old or the new content, never a mix.
        """
        raise NotImplementedError()

    def delete(self, name: str) -> None:
        """Removes the note. Raises :exc:`NotFound` if it does not exist."""
        raise NotImplementedError()

    def list(self) -> List[Note]:
        """Returns every note currently in the repo, sorted by name.

        The result is not a consistent snapshot if notes are changed while it is being built,
        but each individual note's text is complete.
        """
        raise NotImplementedError()

    def close(self) -> None:
        """Release any resources associated with the repo."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
