"""Repository backend capability — the two queries the normalizer needs."""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence, runtime_checkable

from svnhistory.svn.models import RawLogEntry

HEAD = -1


class BackendError(Exception):
    """Raised when the backend cannot answer a log or path-kind query."""

    def __init__(
        self,
        message: str,
        *,
        operation: Optional[str] = None,
        revision: Optional[int] = None,
        path: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.revision = revision
        self.path = path

    def __str__(self) -> str:
        context = []
        if self.operation:
            context.append(f"operation={self.operation}")
        if self.revision is not None:
            context.append(f"revision={self.revision}")
        if self.path is not None:
            context.append(f"path={self.path}")
        base = super().__str__()
        return f"{base} ({', '.join(context)})" if context else base


@runtime_checkable
class Backend(Protocol):
    """Anything that can serve raw log entries and node kinds.

    ``HEAD`` (-1) stands for the repository's latest revision wherever a
    revision number is accepted.
    """

    def get_log(
        self,
        paths: Sequence[str],
        start_revision: int,
        end_revision: int,
        discover_changed_paths: bool = True,
        stop_on_copy: bool = False,
    ) -> List[RawLogEntry]:
        """Return entries for the inclusive range, oldest first."""
        ...

    def check_path(self, path: str, revision: int) -> str:
        """Return ``'file'``, ``'dir'`` / ``'directory'`` or ``'none'``."""
        ...
