"""JSON / YAML serialisation of revision records."""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Union

import yaml

from svnhistory.svn.models import ChangeRecord, CopyPath, RevisionRecord


def change_to_list(change: ChangeRecord) -> List[Any]:
    """``[node_kind, path, change_kind]``; copies nest ``[path, from_path, from_rev]``."""
    payload: Union[str, List[Any]]
    if isinstance(change.path, CopyPath):
        payload = list(change.path)
    else:
        payload = change.path
    return [change.node_kind.value, payload, change.change_kind.value]


def to_dict(record: RevisionRecord) -> Dict[str, Any]:
    """Convert a RevisionRecord to a JSON-serialisable dict."""
    return {
        "revision": record.revision,
        "author": record.author,
        "time": record.time.isoformat() if record.time else None,
        "message": record.message,
        "changes": [change_to_list(c) for c in record.changes],
    }


def render(records: Union[RevisionRecord, Iterable[RevisionRecord]]) -> str:
    """Return formatted JSON: an object for one record, an array for many."""
    if isinstance(records, RevisionRecord):
        return json.dumps(to_dict(records), indent=2)
    return json.dumps([to_dict(r) for r in records], indent=2)


def render_yaml(records: Union[RevisionRecord, Iterable[RevisionRecord]]) -> str:
    """Same structure as :func:`render`, as YAML."""
    if isinstance(records, RevisionRecord):
        data: Any = to_dict(records)
    else:
        data = [to_dict(r) for r in records]
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
