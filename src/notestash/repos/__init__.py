"""Handles interaction with a collection of notes.

:class:`notestash.repos.base.Repo` defines an API, and the errors its operations raise.
:class:`notestash.repos.direct.DirectRepo` implements it on top of a directory in the local filesystem.
"""
