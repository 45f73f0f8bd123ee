"""``svn log --xml`` / ``svn info --xml`` parser.

Turns the XML the ``svn`` client prints into :class:`RawLogEntry` objects.
Handles entries without author (revision 0, anonymous commits), without
message, without a ``<paths>`` block (log run without ``-v``), and copy
sources on added or replaced paths.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import Dict, List, Optional

from svnhistory.svn.backend import BackendError
from svnhistory.svn.models import RawLogEntry, RawPathChange

# svn prints microseconds: 2012-05-30T10:20:30.123456Z
_DATE_FORMATS = ("%Y-%m-%dT%H:%M:%S.%fZ", "%Y-%m-%dT%H:%M:%SZ")


def _parse_xml(xml_text: str, operation: str) -> ET.Element:
    try:
        return ET.fromstring(xml_text)
    except ET.ParseError as exc:
        raise BackendError(f"malformed svn XML output: {exc}", operation=operation) from exc


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """Parse an svn timestamp into an aware UTC datetime."""
    if not value:
        return None
    value = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    raise BackendError(f"unrecognised svn date: {value!r}", operation="log")


def _text(element: Optional[ET.Element]) -> Optional[str]:
    if element is None:
        return None
    return "".join(element.itertext())


def _parse_paths(entry: ET.Element, revision: int) -> Dict[str, RawPathChange]:
    changed: Dict[str, RawPathChange] = {}
    paths = entry.find("paths")
    if paths is None:
        return changed
    for path_elem in paths.findall("path"):
        path = _text(path_elem) or ""
        copy_rev = path_elem.get("copyfrom-rev")
        try:
            copy_from_revision = int(copy_rev) if copy_rev is not None else None
        except ValueError as exc:
            raise BackendError(
                f"bad copyfrom-rev {copy_rev!r}", operation="log", revision=revision, path=path
            ) from exc
        changed[path] = RawPathChange(
            action=path_elem.get("action", ""),
            copy_from_path=path_elem.get("copyfrom-path"),
            copy_from_revision=copy_from_revision,
        )
    return changed


def parse_log(xml_text: str) -> List[RawLogEntry]:
    """Parse ``svn log --xml`` output, preserving document order."""
    root = _parse_xml(xml_text, "log")
    if root.tag != "log":
        raise BackendError(f"expected <log> root, got <{root.tag}>", operation="log")

    entries: List[RawLogEntry] = []
    for entry in root.findall("logentry"):
        try:
            revision = int(entry.get("revision", ""))
        except ValueError as exc:
            raise BackendError("log entry without a revision number", operation="log") from exc
        entries.append(
            RawLogEntry(
                revision=revision,
                author=_text(entry.find("author")),
                date=parse_date(_text(entry.find("date"))),
                message=_text(entry.find("msg")),
                changed_paths=_parse_paths(entry, revision),
            )
        )
    return entries


def parse_info_kind(xml_text: str) -> str:
    """Return the ``kind`` attribute of the first ``svn info`` entry."""
    root = _parse_xml(xml_text, "check_path")
    entry = root.find("entry")
    if entry is None:
        return "none"
    return entry.get("kind", "none")


def parse_info_revision(xml_text: str) -> int:
    """Return the revision reported by ``svn info`` for a repository URL."""
    root = _parse_xml(xml_text, "info")
    entry = root.find("entry")
    if entry is None or entry.get("revision") is None:
        raise BackendError("svn info returned no entry", operation="info")
    return int(entry.get("revision", "0"))
