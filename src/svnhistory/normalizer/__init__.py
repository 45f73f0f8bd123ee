"""Normalizer — path canonicalisation, node kind, change kind, revision records."""

from svnhistory.normalizer.builder import build_change
from svnhistory.normalizer.change_kind import (
    CHANGE_TOKENS,
    UnrecognizedChangeKindError,
    classify,
)
from svnhistory.normalizer.engine import (
    NotFoundError,
    RevisionLogNormalizer,
    all_revisions,
    single_revision,
)
from svnhistory.normalizer.node_kind import (
    HEURISTICS,
    NodeKindResolver,
    extension_heuristic,
    no_heuristic,
    resolve_kind,
)
from svnhistory.normalizer.paths import normalize_path

__all__ = [
    "CHANGE_TOKENS",
    "HEURISTICS",
    "NodeKindResolver",
    "NotFoundError",
    "RevisionLogNormalizer",
    "UnrecognizedChangeKindError",
    "all_revisions",
    "build_change",
    "classify",
    "extension_heuristic",
    "no_heuristic",
    "normalize_path",
    "resolve_kind",
    "single_revision",
]
