"""Stores notes as plain files in a directory and serves them over HTTP.

If you installed via ``pip``, run ``notestash -h`` to get help.
Or, run ``python3 -m notestash -h``.

To use the Python API, look at :class:`notestash.repos.base.Repo`
"""
