"""Shared test fixtures — fake backend, sample svn XML, temp svn repos."""

from __future__ import annotations

import shutil
import subprocess
import textwrap
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from svnhistory.svn.backend import HEAD
from svnhistory.svn.models import RawLogEntry, RawPathChange


class FakeBackend:
    """In-memory Backend: canned log entries and node kinds, records queries."""

    def __init__(
        self,
        entries: Sequence[RawLogEntry] = (),
        kinds: Optional[Dict[Tuple[str, int], str]] = None,
    ) -> None:
        self.entries = {e.revision: e for e in entries}
        self.kinds = kinds or {}
        self.log_calls: List[tuple] = []
        self.kind_calls: List[Tuple[str, int]] = []

    def get_log(self, paths, start_revision, end_revision,
                discover_changed_paths=True, stop_on_copy=False) -> List[RawLogEntry]:
        self.log_calls.append(
            (list(paths), start_revision, end_revision, discover_changed_paths, stop_on_copy)
        )
        head = max(self.entries, default=0)
        end = head if end_revision == HEAD else end_revision
        return [self.entries[r] for r in sorted(self.entries) if start_revision <= r <= end]

    def check_path(self, path: str, revision: int) -> str:
        self.kind_calls.append((path, revision))
        return self.kinds.get((path, revision), "none")


@pytest.fixture
def commit_time() -> datetime:
    return datetime(2012, 5, 30, 10, 20, 30, tzinfo=timezone.utc)


@pytest.fixture
def copy_entry(commit_time) -> RawLogEntry:
    """Revision 6: a directory copied from /old-dir@5."""
    return RawLogEntry(
        revision=6,
        author="railsmonk",
        date=commit_time,
        message="copied directory\n",
        changed_paths={
            "/new-dir": RawPathChange("A", copy_from_path="/old-dir", copy_from_revision=5),
        },
    )


@pytest.fixture
def edit_entry(commit_time) -> RawLogEntry:
    """Revision 11: two files modified."""
    return RawLogEntry(
        revision=11,
        author="railsmonk",
        date=commit_time,
        message="  editing files  ",
        changed_paths={
            "/commit1": RawPathChange("modify"),
            "/commit3": RawPathChange("modify"),
        },
    )


@pytest.fixture
def fake_backend(copy_entry, edit_entry) -> FakeBackend:
    """Backend holding r0, r6 and r11."""
    root = RawLogEntry(revision=0, author=None, date=None, message=None,
                       changed_paths={"/": RawPathChange("A")})
    return FakeBackend(
        [root, copy_entry, edit_entry],
        kinds={
            ("new-dir", 6): "dir",
            ("commit1", 11): "file",
            ("commit3", 11): "file",
        },
    )


@pytest.fixture
def sample_log_xml() -> str:
    """``svn log --xml -v`` output for r0, a copy, and an edit/delete revision."""
    return textwrap.dedent("""\
        <?xml version="1.0" encoding="UTF-8"?>
        <log>
        <logentry
           revision="0">
        <date>2012-05-01T09:00:00.000000Z</date>
        </logentry>
        <logentry
           revision="6">
        <author>railsmonk</author>
        <date>2012-05-30T10:20:30.123456Z</date>
        <paths>
        <path
           prop-mods="false"
           text-mods="false"
           kind="dir"
           copyfrom-path="/old-dir"
           copyfrom-rev="5"
           action="A">/new-dir</path>
        </paths>
        <msg>copied directory
        </msg>
        </logentry>
        <logentry
           revision="7">
        <author>railsmonk</author>
        <date>2012-05-31T08:00:00.000000Z</date>
        <paths>
        <path
           kind="file"
           action="M">/trunk/README.txt</path>
        <path
           kind="dir"
           action="D">/old-dir</path>
        </paths>
        <msg></msg>
        </logentry>
        </log>
    """)


@pytest.fixture
def sample_info_xml() -> str:
    """``svn info --xml`` output for a directory at r6."""
    return textwrap.dedent("""\
        <?xml version="1.0" encoding="UTF-8"?>
        <info>
        <entry
           kind="dir"
           path="new-dir"
           revision="6">
        <url>file:///storage/repo/new-dir</url>
        <repository>
        <root>file:///storage/repo</root>
        <uuid>0b3b4f64-7f6a-4c0a-9c8e-3a4c1f7f1a11</uuid>
        </repository>
        </entry>
        </info>
    """)


def _svn(*args: str, cwd: Optional[Path] = None) -> None:
    subprocess.run(
        ["svn", *args, "--non-interactive", "--username", "tester"],
        cwd=cwd, capture_output=True, check=True,
    )


@pytest.fixture
def tmp_svn_repo(tmp_path: Path) -> str:
    """Create a real repository: r1 mkdir, r2 copy, r3 delete, r4 add file."""
    if shutil.which("svnadmin") is None or shutil.which("svn") is None:
        pytest.skip("subversion is not installed")
    repo = tmp_path / "repo"
    subprocess.run(["svnadmin", "create", str(repo)], capture_output=True, check=True)
    url = repo.as_uri()

    _svn("mkdir", f"{url}/old-dir", "-m", "make dir")
    _svn("copy", f"{url}/old-dir", f"{url}/new-dir", "-m", "copied directory")
    _svn("rm", f"{url}/old-dir", "-m", "remove old dir")

    src = tmp_path / "README.txt"
    src.write_text("hello\n")
    _svn("import", str(src), f"{url}/new-dir/README.txt", "-m", "  add readme  ")
    return url
