"""Revision log normalizer — turns raw backend log entries into RevisionRecords.

Errors are never swallowed: backend failures propagate as ``BackendError``,
unknown change tokens as ``UnrecognizedChangeKindError``.
"""

from __future__ import annotations

from typing import List, Tuple, Union

from svnhistory.logger import get_logger
from svnhistory.normalizer.builder import build_change
from svnhistory.normalizer.node_kind import KindHeuristic, NodeKindResolver, extension_heuristic
from svnhistory.svn.backend import HEAD, Backend
from svnhistory.svn.models import ChangeRecord, RawLogEntry, RevisionRecord

logger = get_logger(__name__)


class NotFoundError(Exception):
    """Raised when the backend has no log entry for a requested revision."""

    def __init__(self, revision: int) -> None:
        self.revision = revision
        super().__init__(f"revision {revision} not found")


def _coerce_revision(revision: Union[int, str]) -> int:
    number = int(revision)
    if number < 0:
        raise ValueError(f"revision must be non-negative, got {revision!r}")
    return number


class RevisionLogNormalizer:
    """Build :class:`RevisionRecord` objects from a backend.

    ``sort_changes`` orders each record's changes by normalized path instead
    of the backend's enumeration order.
    """

    def __init__(
        self,
        backend: Backend,
        *,
        heuristic: KindHeuristic = extension_heuristic,
        sort_changes: bool = False,
    ) -> None:
        self.backend = backend
        self.resolver = NodeKindResolver(backend, heuristic)
        self.sort_changes = sort_changes

    def _changes(self, entry: RawLogEntry) -> Tuple[ChangeRecord, ...]:
        if entry.revision == 0:
            return ()
        changes = [
            build_change(self.backend, entry.revision, raw_path, raw_change, self.resolver)
            for raw_path, raw_change in entry.changed_paths.items()
        ]
        if self.sort_changes:
            changes.sort(key=lambda c: c.target_path)
        return tuple(changes)

    def record(self, entry: RawLogEntry) -> RevisionRecord:
        """Normalize a single raw entry."""
        message = "" if entry.message is None else str(entry.message)
        return RevisionRecord(
            revision=entry.revision,
            author=entry.author,
            time=entry.date,
            message=message.strip(),
            changes=self._changes(entry),
        )

    def all_revisions(self) -> List[RevisionRecord]:
        """Every revision from r1 to HEAD, oldest first."""
        entries = self.backend.get_log(
            [], 1, HEAD, discover_changed_paths=True, stop_on_copy=False
        )
        records = [self.record(entry) for entry in entries]
        logger.info("normalized %d revisions", len(records))
        return records

    def single_revision(self, revision: Union[int, str]) -> RevisionRecord:
        """The record for exactly one revision. Raises NotFoundError."""
        number = _coerce_revision(revision)
        entries = self.backend.get_log(
            [], number, number, discover_changed_paths=True, stop_on_copy=False
        )
        if not entries:
            raise NotFoundError(number)
        return self.record(entries[0])


def all_revisions(
    backend: Backend,
    *,
    heuristic: KindHeuristic = extension_heuristic,
    sort_changes: bool = False,
) -> List[RevisionRecord]:
    """Return all revision records in the repository."""
    return RevisionLogNormalizer(
        backend, heuristic=heuristic, sort_changes=sort_changes
    ).all_revisions()


def single_revision(
    backend: Backend,
    revision: Union[int, str],
    *,
    heuristic: KindHeuristic = extension_heuristic,
    sort_changes: bool = False,
) -> RevisionRecord:
    """Return one revision record.

    Example record for a copied directory::

        RevisionRecord(revision=6, author="railsmonk", message="copied directory",
                       changes=(("directory", ("new-dir", "old-dir", 5), "copy"),))
    """
    return RevisionLogNormalizer(
        backend, heuristic=heuristic, sort_changes=sort_changes
    ).single_revision(revision)
