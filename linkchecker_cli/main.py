"""linkchecker CLI: entry-point for checking a build directory.

Usage:
    linkchecker --help
    linkchecker check build/ --ignore '^https://localhost' --attempts 1

Exit codes:
    0  no broken links
    1  broken links found (the report is printed)
    2  the check could not run (bad options, unreadable documents)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional

import typer

from linkchecker.config import LinkCheckOptions, deep_merge, load_options_file, settings
from linkchecker.documents import load_documents
from linkchecker.exceptions import SetupError
from linkchecker.runner import LinkChecker

app = typer.Typer(
    name="linkchecker",
    help="Find broken links in a directory of generated HTML.",
    no_args_is_help=True,
)

EXIT_BROKEN = 1
EXIT_SETUP = 2


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output."),
) -> None:
    """Configure logging for every sub-command."""
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="[%(levelname)s] %(name)s: %(message)s")


def _cli_overrides(
    pattern: Optional[str],
    ignore: Optional[List[str]],
    timeout: Optional[int],
    attempts: Optional[int],
    parallelism: Optional[int],
    user_agent: Optional[str],
) -> dict[str, Any]:
    """Return only the options that were given on the command line."""
    overrides: dict[str, Any] = {}
    if pattern is not None:
        overrides["html"] = {"pattern": pattern}
    if ignore:
        overrides["ignore"] = list(ignore)
    if timeout is not None:
        overrides["timeout"] = timeout
    if attempts is not None:
        overrides["attempts"] = attempts
    if parallelism is not None:
        overrides["parallelism"] = parallelism
    if user_agent is not None:
        overrides["userAgent"] = user_agent
    return overrides


@app.command("check")
def check(
    directory: Path = typer.Argument(..., help="Build directory holding the generated documents."),
    pattern: Optional[str] = typer.Option(None, help="Glob selecting documents to scan."),
    ignore: Optional[List[str]] = typer.Option(
        None, "--ignore", help="Regex of links to skip (repeatable)."
    ),
    timeout: Optional[int] = typer.Option(None, help="Per-request timeout in milliseconds."),
    attempts: Optional[int] = typer.Option(None, help="Retries for failing remote URLs."),
    parallelism: Optional[int] = typer.Option(None, help="Maximum concurrent validations."),
    user_agent: Optional[str] = typer.Option(None, "--user-agent", help="User-Agent header."),
    config: Optional[Path] = typer.Option(
        None, "--config", help="JSON options file; command-line flags take precedence."
    ),
) -> None:
    """Check every link in DIRECTORY and report the broken ones."""
    try:
        raw = load_options_file(config) if config is not None else {}
        raw = deep_merge(
            raw, _cli_overrides(pattern, ignore, timeout, attempts, parallelism, user_agent)
        )
        options = LinkCheckOptions.from_mapping(raw)
        documents = load_documents(directory)
        typer.echo(f"[check] Scanning {len(documents)} file(s) in {str(directory)!r} …")
        report = LinkChecker(options).run(documents)
    except SetupError as exc:
        typer.echo(f"[check] Error: {exc}")
        raise typer.Exit(EXIT_SETUP) from exc

    typer.echo(
        f"[check] Checked {report.checked} link(s) "
        f"({report.duplicates} duplicate, {report.ignored} ignored)."
    )
    if not report.ok:
        typer.echo(report.message)
        raise typer.Exit(EXIT_BROKEN)
    typer.echo("[check] No broken links found.")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
