"""svn subprocess wrapper — log, path kind and HEAD lookups against a URL."""

from __future__ import annotations

import re
import subprocess
from typing import List, Optional, Sequence
from urllib.parse import quote

from svnhistory.logger import get_logger
from svnhistory.svn.backend import HEAD, BackendError
from svnhistory.svn.log_parser import parse_info_kind, parse_info_revision, parse_log
from svnhistory.svn.models import RawLogEntry

logger = get_logger(__name__)

# svn error codes that mean "nothing there" rather than failure
_NO_SUCH_REVISION_RE = re.compile(r"\bE160006\b|No such revision", re.IGNORECASE)
_PATH_NOT_FOUND_RE = re.compile(
    r"\b(?:E160013|W170000|E200009)\b|non-existent", re.IGNORECASE
)

_TRUST_FAILURES = "unknown-ca,cn-mismatch,expired,not-yet-valid,other"


def _rev_token(revision: int) -> str:
    return "HEAD" if revision == HEAD else str(revision)


class SvnCliBackend:
    """Backend that shells out to the ``svn`` command line client.

    Works against any URL the client understands::

        SvnCliBackend("file:///storage/my-repo")
        SvnCliBackend("https://svn.example.com/repo", "login", "pass")
        SvnCliBackend("svn://internal-server:3122/repo")
    """

    def __init__(
        self,
        url: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        *,
        svn_binary: str = "svn",
        timeout: int = 60,
        trust_server_cert: bool = False,
    ) -> None:
        self.url = url.rstrip("/")
        self.username = username
        self.password = password
        self.svn_binary = svn_binary
        self.timeout = timeout
        self.trust_server_cert = trust_server_cert

    def __repr__(self) -> str:
        return f"SvnCliBackend({self.url!r}, username={self.username!r})"

    # ---- subprocess plumbing ----

    def _global_args(self) -> List[str]:
        args = ["--non-interactive", "--no-auth-cache"]
        if self.username:
            args += ["--username", self.username]
        if self.password:
            # password goes on stdin, never argv
            args.append("--password-from-stdin")
        if self.trust_server_cert:
            args.append(f"--trust-server-cert-failures={_TRUST_FAILURES}")
        return args

    def _run_svn(
        self,
        args: List[str],
        *,
        operation: str,
        revision: Optional[int] = None,
        path: Optional[str] = None,
    ) -> subprocess.CompletedProcess:
        """Run an svn command. Raises BackendError if it cannot be run at all."""
        cmd = [self.svn_binary, *args, *self._global_args()]
        logger.debug("running svn %s", " ".join(args))
        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                input=self.password or None,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError:
            raise BackendError(
                f"{self.svn_binary} is not installed or not on PATH",
                operation=operation, revision=revision, path=path,
            )
        except subprocess.TimeoutExpired:
            raise BackendError(
                f"svn command timed out after {self.timeout}s: svn {' '.join(args)}",
                operation=operation, revision=revision, path=path,
            )

    def _target(self, path: str, revision: int) -> str:
        """URL of *path* pegged at *revision*."""
        rel = quote(path.lstrip("/"), safe="/")
        base = f"{self.url}/{rel}" if rel else self.url
        return f"{base}@{_rev_token(revision)}"

    # ---- Backend protocol ----

    def get_log(
        self,
        paths: Sequence[str],
        start_revision: int,
        end_revision: int,
        discover_changed_paths: bool = True,
        stop_on_copy: bool = False,
    ) -> List[RawLogEntry]:
        args = ["log", "--xml", "-r", f"{_rev_token(start_revision)}:{_rev_token(end_revision)}"]
        if discover_changed_paths:
            args.append("-v")
        if stop_on_copy:
            args.append("--stop-on-copy")
        args.append(self.url)
        args.extend(p.lstrip("/") for p in paths)

        result = self._run_svn(args, operation="log", revision=start_revision)
        if result.returncode != 0:
            stderr = result.stderr.strip()
            if _NO_SUCH_REVISION_RE.search(stderr):
                logger.debug("no revisions in range %s:%s", start_revision, end_revision)
                return []
            raise BackendError(f"svn error: {stderr}", operation="log", revision=start_revision)

        entries = parse_log(result.stdout)
        logger.debug("svn log returned %d entries", len(entries))
        return entries

    def check_path(self, path: str, revision: int) -> str:
        args = ["info", "--xml", "--depth", "empty", self._target(path, revision)]
        result = self._run_svn(args, operation="check_path", revision=revision, path=path)
        if result.returncode != 0:
            stderr = result.stderr.strip()
            if _PATH_NOT_FOUND_RE.search(stderr):
                return "none"
            raise BackendError(
                f"svn error: {stderr}", operation="check_path", revision=revision, path=path
            )
        return parse_info_kind(result.stdout)

    # ---- extras ----

    def latest_revision(self) -> int:
        """Return the repository's HEAD revision number."""
        result = self._run_svn(["info", "--xml", f"{self.url}@HEAD"], operation="info")
        if result.returncode != 0:
            raise BackendError(f"svn error: {result.stderr.strip()}", operation="info")
        return parse_info_revision(result.stdout)


def repo_for(
    url: str,
    username: Optional[str] = None,
    password: Optional[str] = None,
    **options,
) -> SvnCliBackend:
    """Create a backend for a Subversion URL (``file://``, ``https://``, ``svn://``)."""
    if not re.match(r"^(?:file|https?|svn(?:\+\w+)?)://", url):
        raise BackendError(f"not a Subversion URL: {url!r}", operation="connect")
    return SvnCliBackend(url, username, password, **options)
