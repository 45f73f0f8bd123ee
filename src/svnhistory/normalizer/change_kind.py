"""Classify raw per-path change tokens into :class:`ChangeKind`."""

from __future__ import annotations

from typing import Dict, Optional

from svnhistory.svn.models import ChangeKind, RawPathChange

# Long-form tokens come from the repository filesystem layer,
# single letters from the log protocol and ``svn log --xml``.
CHANGE_TOKENS: Dict[str, ChangeKind] = {
    "add": ChangeKind.ADD,
    "A": ChangeKind.ADD,
    "modify": ChangeKind.EDIT,
    "M": ChangeKind.EDIT,
    "delete": ChangeKind.DELETE,
    "D": ChangeKind.DELETE,
    "replace": ChangeKind.REPLACE,
    "R": ChangeKind.REPLACE,
    "reset": ChangeKind.RESET,
}


class UnrecognizedChangeKindError(Exception):
    """Raised when a change token is not in :data:`CHANGE_TOKENS`."""

    def __init__(self, token: str, revision: Optional[int] = None, path: Optional[str] = None) -> None:
        self.token = token
        self.revision = revision
        self.path = path
        where = f" at r{revision}" if revision is not None else ""
        if path is not None:
            where += f" for {path}"
        super().__init__(f"unrecognized change kind {token!r}{where}")


def classify(
    raw_change: RawPathChange,
    *,
    revision: Optional[int] = None,
    path: Optional[str] = None,
) -> ChangeKind:
    """Return the change kind; copy-source metadata wins over the token."""
    if raw_change.copy_from_path:
        return ChangeKind.COPY
    try:
        return CHANGE_TOKENS[str(raw_change.action)]
    except KeyError:
        raise UnrecognizedChangeKindError(str(raw_change.action), revision, path) from None
