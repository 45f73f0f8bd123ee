"""Repository path canonicalisation."""

from __future__ import annotations


def normalize_path(path: str) -> str:
    """Strip one leading ``/``; the root itself stays ``/``.

    >>> normalize_path("/trunk/README.txt")
    'trunk/README.txt'
    """
    if path == "/":
        return path
    if path.startswith("/"):
        return path[1:]
    return path
