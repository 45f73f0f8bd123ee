"""Data models for raw log entries and normalized revision records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Mapping, NamedTuple, Optional, Tuple, Union


class NodeKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    NONE = "none"  # only returned at the resolver's stepback boundary


class ChangeKind(str, Enum):
    ADD = "add"
    EDIT = "edit"
    DELETE = "delete"
    REPLACE = "replace"
    COPY = "copy"
    RESET = "reset"


class CopyPath(NamedTuple):
    """Path payload of a copy: destination, source path and source revision."""

    path: str
    copy_from_path: str
    copy_from_revision: int


class ChangeRecord(NamedTuple):
    """A single changed path: ``(node_kind, path, change_kind)``.

    ``path`` is a :class:`CopyPath` when ``change_kind`` is ``COPY`` and a
    plain string otherwise.
    """

    node_kind: NodeKind
    path: Union[str, CopyPath]
    change_kind: ChangeKind

    @property
    def is_copy(self) -> bool:
        return self.change_kind is ChangeKind.COPY

    @property
    def target_path(self) -> str:
        """The changed path itself, whatever the payload form."""
        if isinstance(self.path, CopyPath):
            return self.path.path
        return self.path


@dataclass(frozen=True)
class RevisionRecord:
    """Normalized, immutable description of one committed revision."""

    revision: int
    author: Optional[str]
    time: Optional[datetime]
    message: str = ""
    changes: Tuple[ChangeRecord, ...] = ()

    @property
    def summary(self) -> str:
        """First line of the commit message."""
        return self.message.splitlines()[0] if self.message else ""


# --- Raw backend data (read-only to the normalizer) ---


@dataclass(frozen=True, slots=True)
class RawPathChange:
    """Per-path change metadata as reported by the backend."""

    action: str  # 'A' / 'add', 'M' / 'modify', 'D', 'R', 'reset', ...
    copy_from_path: Optional[str] = None
    copy_from_revision: Optional[int] = None


@dataclass(frozen=True)
class RawLogEntry:
    """One ``svn log`` entry before normalization.

    ``changed_paths`` is keyed by the raw (absolute) repository path and is
    treated as unordered.
    """

    revision: int
    author: Optional[str] = None
    date: Optional[datetime] = None
    message: Optional[str] = None
    changed_paths: Mapping[str, RawPathChange] = field(default_factory=dict)
