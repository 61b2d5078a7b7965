# SPDX-License-Identifier: MIT
"""CLI entry point for the pep440 command."""

from __future__ import annotations

import json
import logging
import sys

import click

from .specifier import ConstraintError, parse_constraints
from .version import ParseError, Version, parse_version, sort_versions

logger = logging.getLogger(__name__)


def echo_error(message: str) -> None:
    """Print an error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(message)


def _describe(version: Version) -> dict:
    return {
        "version": str(version),
        "original": version.original,
        "epoch": version.epoch,
        "release": list(version.release),
        "pre": list(version.pre) if version.pre else None,
        "post": version.post[1] if version.post else None,
        "dev": version.dev[1] if version.dev else None,
        "local": version.local or None,
        "public": version.public,
        "base_version": version.base_version,
        "is_prerelease": version.is_prerelease,
        "is_postrelease": version.is_postrelease,
    }


@click.group()
@click.version_option(package_name="pep440-version")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output.",
)
def cli(verbose: bool) -> None:
    """PEP 440 version tool.

    Parse, compare and sort versions, and check them against constraints.

    \b
    Examples:
        pep440 parse 1.0.post1
        pep440 compare 1.0rc1 1.0
        pep440 sort 1.0 1.0a1 1.0.dev1
        pep440 check ">=1.0,<2.0" 0.9 1.5 2.0
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@cli.command()
@click.argument("version")
@click.option("--json", "as_json", is_flag=True, help="Print the parsed segments as JSON.")
def parse(version: str, as_json: bool) -> None:
    """Parse VERSION and print its canonical form and segments."""
    try:
        v = parse_version(version)
    except ParseError as e:
        echo_error(e.message)
        raise SystemExit(1)

    details = _describe(v)
    if as_json:
        echo_info(json.dumps(details, indent=2))
        return

    for name, value in details.items():
        if value is None:
            continue
        echo_info(f"{name}: {value}")


@cli.command()
@click.argument("left")
@click.argument("right")
def compare(left: str, right: str) -> None:
    """Compare two versions and print <, == or >."""
    try:
        result = parse_version(left).compare(parse_version(right))
    except ParseError as e:
        echo_error(e.message)
        raise SystemExit(1)

    symbol = {-1: "<", 0: "==", 1: ">"}[result]
    echo_info(f"{left} {symbol} {right}")


@cli.command(name="sort")
@click.argument("versions", nargs=-1, required=True)
@click.option("--reverse", "-r", is_flag=True, help="Sort in descending order.")
def sort_command(versions: tuple[str, ...], reverse: bool) -> None:
    """Print VERSIONS in PEP 440 order."""
    try:
        ordered = sort_versions(versions, reverse=reverse)
    except ParseError as e:
        echo_error(e.message)
        raise SystemExit(1)

    for v in ordered:
        echo_info(v.original)


@cli.command()
@click.argument("constraints")
@click.argument("versions", nargs=-1, required=True)
def check(constraints: str, versions: tuple[str, ...]) -> None:
    """Print the VERSIONS that satisfy CONSTRAINTS.

    Exits with status 1 when no version matches.

    \b
    Examples:
        pep440 check "~=2.2" 2.1 2.2 2.9 3.0
        pep440 check "<1.0 || >=2.0" 0.9 1.5 2.0
    """
    try:
        spec = parse_constraints(constraints)
        matched = list(spec.filter(versions))
    except (ConstraintError, ParseError) as e:
        echo_error(e.message)
        raise SystemExit(1)

    logger.debug("Matched %d of %d versions against %s", len(matched), len(versions), spec)

    for v in matched:
        echo_info(v.original)

    if not matched:
        raise SystemExit(1)


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()
    except Exception as e:
        echo_error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
