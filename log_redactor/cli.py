"""
log-redactor command line tool.

Commands:
    - check [RULES]: validate a rules file
    - redact [RULES] [-i INPUT] [-o OUTPUT]: redact a log file line by line
    - profile NAME: print a bundled profile as a rules file

RULES defaults to the LOG_REDACTOR_RULES environment variable (.env aware).

Exit codes:
    0 on success, 1 on a rules configuration or I/O error, 2 on usage errors.
"""

import json
import logging
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Optional, TextIO

import typer

from . import __version__
from .engine import RedactionEngine
from .errors import RuleSetError
from .loader import load_file
from .logging_filter import RULES_ENV_VAR, rules_file_from_env
from .profiles import PROFILES, load_profile
from .rule import RuleSet

logger = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False,
    help="Redact sensitive data from log text with a JSON rules file.",
)

_RULES_ARGUMENT = typer.Argument(
    None,
    help=f"Rules file (default: ${RULES_ENV_VAR}).",
    show_default=False,
)


def _version_callback(value: bool):
    if value:
        typer.echo(f"log-redactor {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _fail(error: Exception) -> typer.Exit:
    typer.echo(f"error: {error}", err=True)
    return typer.Exit(code=1)


def _load_rules(path: Optional[Path]) -> RuleSet:
    path = path or rules_file_from_env()
    if path is None:
        raise typer.BadParameter(
            f"no rules file given and {RULES_ENV_VAR} is not set", param_hint="RULES"
        )
    logger.debug(f"Loading rules from {path}")
    try:
        return load_file(path)
    except RuleSetError as e:
        raise _fail(e) from e


def redact_stream(engine: RedactionEngine, source: TextIO, target: TextIO) -> tuple[int, int]:
    """
    Redact source into target one line at a time.

    Returns:
        A tuple of (lines_read, lines_redacted).
    """
    total = 0
    changed = 0
    for line in source:
        total += 1
        redacted = engine.redact(line)
        if redacted is not line:
            changed += 1
        target.write(redacted)
    return total, changed


@app.command()
def check(rules: Optional[Path] = _RULES_ARGUMENT):
    """Validate a rules file."""
    rule_set = _load_rules(rules)
    typer.echo(f"{rule_set.source}: {len(rule_set)} rules OK")


@app.command()
def redact(
    rules: Optional[Path] = _RULES_ARGUMENT,
    input_file: Optional[Path] = typer.Option(
        None, "--input", "-i", help="Input file (default: stdin)."
    ),
    output_file: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output file (default: stdout)."
    ),
    profile: Optional[str] = typer.Option(
        None, "--profile", help="Use a bundled profile instead of a rules file."
    ),
):
    """Redact a file or stdin line by line."""
    if profile is not None:
        if rules is not None:
            raise typer.BadParameter("give either RULES or --profile, not both", param_hint="--profile")
        if profile not in PROFILES:
            raise typer.BadParameter(
                f"unknown profile {profile!r}, available: {', '.join(sorted(PROFILES))}",
                param_hint="--profile",
            )
        engine = RedactionEngine(load_profile(profile))
    else:
        engine = RedactionEngine(_load_rules(rules))

    try:
        with ExitStack() as stack:
            source = (
                stack.enter_context(open(input_file, encoding="utf-8")) if input_file else sys.stdin
            )
            target = (
                stack.enter_context(open(output_file, "w", encoding="utf-8"))
                if output_file
                else sys.stdout
            )
            total, changed = redact_stream(engine, source, target)
    except OSError as e:
        raise _fail(e) from e
    logger.info(f"Redacted {changed} of {total} lines")


@app.command()
def profile(name: str = typer.Argument(..., help="Profile name, e.g. us_global.")):
    """Print a bundled profile as a rules file."""
    if name not in PROFILES:
        raise typer.BadParameter(
            f"unknown profile {name!r}, available: {', '.join(sorted(PROFILES))}",
            param_hint="NAME",
        )
    typer.echo(json.dumps(PROFILES[name], indent=2))


if __name__ == "__main__":
    app()
