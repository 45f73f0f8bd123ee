"""svnhistory CLI — Typer application with log, show, and init commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from svnhistory import __version__

app = typer.Typer(
    name="svnhistory",
    help="Read normalized revision history from Subversion repositories.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _fail(label: str, exc: Exception, code: int = 2) -> typer.Exit:
    console.print(f"[bold red]{label}:[/bold red] {exc}")
    return typer.Exit(code=code)


def _load(
    config: Optional[str],
    url: Optional[str],
    username: Optional[str],
    password: Optional[str],
    format: Optional[str],
    sort: bool,
    no_heuristic: bool,
    verbose: bool,
    debug: bool,
):
    """Load config, apply CLI overrides, set up logging."""
    from svnhistory.config.loader import ConfigError, load_config, validate
    from svnhistory.logger import setup_logging

    try:
        cfg = load_config(Path.cwd(), config)
        if url:
            cfg.repository.url = url
        if username:
            cfg.repository.username = username
        if password:
            cfg.repository.password = password
        if format:
            cfg.output.format = format  # type: ignore[assignment]
        if sort:
            cfg.normalizer.sort_changes = True
        if no_heuristic:
            cfg.normalizer.node_kind_strategy = "backend"
        if debug:
            cfg.logging.level = "DEBUG"
        elif verbose:
            cfg.logging.level = "INFO"
        validate(cfg)
    except ConfigError as exc:
        raise _fail("Config error", exc) from exc

    if not cfg.repository.url:
        console.print("[bold red]Error:[/bold red] no repository URL given")
        raise typer.Exit(code=2)

    setup_logging(cfg.logging.level, cfg.logging.file or None)
    return cfg


def _normalizer(cfg):
    from svnhistory.normalizer.engine import RevisionLogNormalizer
    from svnhistory.normalizer.node_kind import HEURISTICS
    from svnhistory.svn.adapter import repo_for
    from svnhistory.svn.backend import BackendError

    try:
        backend = repo_for(
            cfg.repository.url,
            cfg.repository.username,
            cfg.repository.password,
            svn_binary=cfg.backend.svn_binary,
            timeout=cfg.backend.timeout,
            trust_server_cert=cfg.backend.trust_server_cert,
        )
    except BackendError as exc:
        raise _fail("Backend error", exc) from exc

    return RevisionLogNormalizer(
        backend,
        heuristic=HEURISTICS[cfg.normalizer.node_kind_strategy],
        sort_changes=cfg.normalizer.sort_changes,
    )


def _emit(records, cfg, output: Optional[str]) -> None:
    from svnhistory.output import json_report, terminal

    report_text: Optional[str] = None
    fmt = cfg.output.format

    if fmt == "terminal":
        terminal.render(records, show_paths=cfg.output.show_paths)
    elif fmt == "json":
        report_text = json_report.render(records)
        print(report_text)
    elif fmt == "yaml":
        report_text = json_report.render_yaml(records)
        print(report_text, end="")

    if output:
        if report_text is None:
            # terminal output requested alongside a file: write JSON
            report_text = json_report.render(records)
        Path(output).write_text(report_text, encoding="utf-8")
        console.print(f"[dim]Report written to {output}[/dim]")


# ── log ───────────────────────────────────────────────────────────────────────


@app.command()
def log(
    url: Optional[str] = typer.Argument(None, help="Repository URL (file://, https://, svn://)"),
    username: Optional[str] = typer.Option(None, "--username", "-u", help="Repository login"),
    password: Optional[str] = typer.Option(None, "--password", "-p", help="Repository password"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .svnhistory.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json | yaml"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write report to file"),
    sort: bool = typer.Option(False, "--sort", help="Order changes by path"),
    no_heuristic: bool = typer.Option(False, "--no-heuristic", help="Always ask svn for node kinds"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output (svn commands)"),
) -> None:
    """Print every revision in the repository, oldest first."""
    from svnhistory.normalizer.change_kind import UnrecognizedChangeKindError
    from svnhistory.svn.backend import BackendError

    cfg = _load(config, url, username, password, format, sort, no_heuristic, verbose, debug)
    normalizer = _normalizer(cfg)

    try:
        records = normalizer.all_revisions()
    except BackendError as exc:
        raise _fail("Backend error", exc) from exc
    except UnrecognizedChangeKindError as exc:
        raise _fail("Log error", exc) from exc

    _emit(records, cfg, output)


# ── show ──────────────────────────────────────────────────────────────────────


@app.command()
def show(
    url: str = typer.Argument(..., help="Repository URL (file://, https://, svn://)"),
    revision: int = typer.Argument(..., min=0, help="Revision number"),
    username: Optional[str] = typer.Option(None, "--username", "-u", help="Repository login"),
    password: Optional[str] = typer.Option(None, "--password", "-p", help="Repository password"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .svnhistory.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json | yaml"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write report to file"),
    sort: bool = typer.Option(False, "--sort", help="Order changes by path"),
    no_heuristic: bool = typer.Option(False, "--no-heuristic", help="Always ask svn for node kinds"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output (svn commands)"),
) -> None:
    """Print a single revision."""
    from svnhistory.normalizer.change_kind import UnrecognizedChangeKindError
    from svnhistory.normalizer.engine import NotFoundError
    from svnhistory.svn.backend import BackendError

    cfg = _load(config, url, username, password, format, sort, no_heuristic, verbose, debug)
    normalizer = _normalizer(cfg)

    try:
        record = normalizer.single_revision(revision)
    except NotFoundError as exc:
        raise _fail("Not found", exc, code=1) from exc
    except BackendError as exc:
        raise _fail("Backend error", exc) from exc
    except UnrecognizedChangeKindError as exc:
        raise _fail("Log error", exc) from exc

    if cfg.output.format == "terminal":
        _emit([record], cfg, output)
    else:
        _emit(record, cfg, output)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .svnhistory.toml in the current directory."""
    from svnhistory.config.defaults import DEFAULT_TOML
    from svnhistory.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"svnhistory {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """svnhistory — normalized Subversion revision history."""
