"""Subversion interface layer — backend protocol, svn CLI adapter, log parsing, models."""

from svnhistory.svn.adapter import SvnCliBackend, repo_for
from svnhistory.svn.backend import HEAD, Backend, BackendError
from svnhistory.svn.log_parser import parse_log
from svnhistory.svn.models import (
    ChangeKind,
    ChangeRecord,
    CopyPath,
    NodeKind,
    RawLogEntry,
    RawPathChange,
    RevisionRecord,
)

__all__ = [
    "HEAD",
    "Backend",
    "BackendError",
    "ChangeKind",
    "ChangeRecord",
    "CopyPath",
    "NodeKind",
    "RawLogEntry",
    "RawPathChange",
    "RevisionRecord",
    "SvnCliBackend",
    "parse_log",
    "repo_for",
]
