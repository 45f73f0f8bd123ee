"""Assemble a :class:`ChangeRecord` from one raw changed path."""

from __future__ import annotations

from typing import Optional

from svnhistory.normalizer.change_kind import classify
from svnhistory.normalizer.node_kind import NodeKindResolver
from svnhistory.normalizer.paths import normalize_path
from svnhistory.svn.backend import Backend, BackendError
from svnhistory.svn.models import ChangeKind, ChangeRecord, CopyPath, RawPathChange


def build_change(
    backend: Backend,
    revision: int,
    raw_path: str,
    raw_change: RawPathChange,
    resolver: Optional[NodeKindResolver] = None,
) -> ChangeRecord:
    """Normalize, resolve node kind, classify; copies carry their source."""
    resolver = resolver or NodeKindResolver(backend)
    path = normalize_path(raw_path)
    node_kind = resolver.resolve(path, revision)
    change_kind = classify(raw_change, revision=revision, path=path)

    if change_kind is ChangeKind.COPY:
        if raw_change.copy_from_revision is None:
            raise BackendError(
                "copy without a source revision", operation="log", revision=revision, path=path
            )
        payload = CopyPath(
            path,
            normalize_path(raw_change.copy_from_path or ""),
            raw_change.copy_from_revision,
        )
        return ChangeRecord(node_kind, payload, change_kind)

    return ChangeRecord(node_kind, path, change_kind)
