from __future__ import annotations
from dataclasses import dataclass, replace
import os.path
from typing import Callable


def default_ignore(parentpath: str, filename: str) -> bool:
    return filename.startswith('.')


@dataclass
class RepoConf:
    """Configures how notes are stored, via :class:`notestash.repos.direct.DirectRepo`."""

    root_path: str
    """Directory holding one file per note. Must already exist."""

    ignore: Callable[[str, str], bool] = default_ignore
    """Use this to indicate files in the root directory that are not notes.

    The first argument is the root directory, and the second argument is the filename.

    If this function returns True for a filename, that file is never returned by
    :meth:`notestash.repos.base.Repo.list`, and names it matches are rejected by every other operation.

    The default ignores every name beginning with a period (``.``), which includes the temporary files
    used while saving notes.
    """

    fsync: bool = True
    """If True, note content is flushed to disk before it replaces the previous version.

    Turning this off makes writes faster but less durable if the machine crashes.
    """

    def standardize(self):
        return replace(
            self,
            root_path=os.path.realpath(self.root_path)
        )

    def instantiate(self):
        from notestash.repos.direct import DirectRepo
        return DirectRepo(self.standardize())


@dataclass
class ServerConf:
    repo_conf: RepoConf
    """Configures where the served notes live."""

    host: str = '127.0.0.1'
    """Address to bind the HTTP server to."""

    port: int = 8800
    """Port to bind the HTTP server to."""

    def standardize(self) -> ServerConf:
        return replace(
            self,
            repo_conf=self.repo_conf.standardize()
        )

    def instantiate(self):
        """Returns the :class:`flask.Flask` application, backed by a newly instantiated repo."""
        from notestash.web import create_app
        return create_app(self.repo_conf.instantiate())
