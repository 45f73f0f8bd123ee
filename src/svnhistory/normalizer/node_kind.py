"""File-or-directory resolution for changed paths.

A filename heuristic answers first; when it has no opinion the backend is
asked. ``svn`` reports a path's kind *after* the revision, so a path deleted
in revision N is ``none`` at N and the resolver steps back once to N - 1.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Callable, Dict, Optional

from svnhistory.logger import get_logger
from svnhistory.svn.backend import Backend, BackendError
from svnhistory.svn.models import NodeKind

logger = get_logger(__name__)

KindHeuristic = Callable[[str], Optional[NodeKind]]

_BACKEND_KINDS: Dict[str, NodeKind] = {
    "file": NodeKind.FILE,
    "dir": NodeKind.DIRECTORY,
    "directory": NodeKind.DIRECTORY,
    "none": NodeKind.NONE,
}


def extension_heuristic(path: str) -> Optional[NodeKind]:
    """Treat any basename containing a dot as a file."""
    if "." in PurePosixPath(path).name:
        return NodeKind.FILE
    return None


def no_heuristic(path: str) -> Optional[NodeKind]:
    """Always defer to the backend."""
    return None


HEURISTICS: Dict[str, KindHeuristic] = {
    "extension": extension_heuristic,
    "backend": no_heuristic,
}


def backend_kind(token: object, *, path: str, revision: int) -> NodeKind:
    """Map a backend kind token (``file`` / ``dir`` / ``none``) onto NodeKind."""
    key = str(token).strip().lower()
    try:
        return _BACKEND_KINDS[key]
    except KeyError:
        raise BackendError(
            f"unknown node kind {token!r}", operation="check_path", revision=revision, path=path
        ) from None


class NodeKindResolver:
    """Resolve :class:`NodeKind` for a path at a revision."""

    def __init__(self, backend: Backend, heuristic: KindHeuristic = extension_heuristic) -> None:
        self.backend = backend
        self.heuristic = heuristic

    def _query(self, path: str, revision: int) -> NodeKind:
        return backend_kind(self.backend.check_path(path, revision), path=path, revision=revision)

    def resolve(self, path: str, revision: int) -> NodeKind:
        guess = self.heuristic(path)
        if guess is not None:
            return guess

        kind = self._query(path, revision)
        if kind is not NodeKind.NONE:
            return kind

        # -1 would mean HEAD to the backend, so revision 0 has nowhere to step back to
        previous = revision - 1
        if previous < 0:
            logger.warning("%s does not exist at r%d and cannot step back", path, revision)
            return kind

        kind = self._query(path, previous)
        if kind is NodeKind.NONE:
            logger.warning("%s does not exist at r%d or r%d", path, revision, previous)
        return kind


def resolve_kind(
    backend: Backend,
    path: str,
    revision: int,
    heuristic: KindHeuristic = extension_heuristic,
) -> NodeKind:
    """Return the node kind of *path* at *revision* (see module docstring)."""
    return NodeKindResolver(backend, heuristic).resolve(path, revision)
