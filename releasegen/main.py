"""
releasegen — CLI entrypoint.

Usage:
    python -m releasegen.main --help
    python -m releasegen.main generate -d otelcol -d otelcol-contrib
    python -m releasegen.main check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from releasegen import __version__
from releasegen.core.observability.logging_config import (
    ENV_LOG_FILE,
    ENV_LOG_FILE_LEVEL,
    ENV_LOG_LEVEL,
    setup_logging,
)


def _split_dists(values: tuple[str, ...]) -> list[str] | None:
    """Flatten repeated and comma-separated --dist values."""
    dists = [d.strip() for v in values for d in v.split(",")]
    return dists or None


_dist_option = click.option(
    "--dist",
    "-d",
    "dists",
    multiple=True,
    help="Distribution to include (repeatable, or comma-separated).",
)
_prefix_option = click.option(
    "--image-prefix",
    "-p",
    "prefixes",
    multiple=True,
    help="Container image prefix (repeatable). Default: from policy.",
)
_output_option = click.option(
    "--output",
    "-o",
    "output",
    type=click.Path(dir_okay=False),
    default=None,
    help="Release config path (default: from release.yml, else .goreleaser.yaml).",
)
_json_option = click.option(
    "--json-output", "--json", "as_json", is_flag=True, help="Output as JSON."
)


@click.group()
@click.version_option(version=__version__, prog_name="releasegen")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to release.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """releasegen — generate release-engine config for every distribution."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get(ENV_LOG_LEVEL, "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get(ENV_LOG_FILE),
        log_file_level=os.environ.get(ENV_LOG_FILE_LEVEL),
    )


@cli.command()
@_dist_option
@_prefix_option
@_output_option
@click.option("--stdout", "to_stdout", is_flag=True, help="Print instead of writing the file.")
@_json_option
@click.pass_context
def generate(
    ctx: click.Context,
    dists: tuple[str, ...],
    prefixes: tuple[str, ...],
    output: str | None,
    to_stdout: bool,
    as_json: bool,
) -> None:
    """Generate the release config for all distributions.

    Examples:

        releasegen generate -d otelcol,otelcol-contrib

        releasegen generate -d otelcol -p otel -p ghcr.io/acme --stdout
    """
    from releasegen.core.use_cases.generate import run_generate

    result = run_generate(
        config_path=ctx.obj.get("config_path"),
        distributions=_split_dists(dists),
        image_prefixes=list(prefixes) if prefixes else None,
        output=Path(output) if output else None,
        write=not to_stdout,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if to_stdout:
        click.echo(result.content, nl=False)
        return

    if not ctx.obj.get("quiet"):
        assert result.file is not None  # written when not --stdout
        verb = "Updated" if result.file.overwrite else "Created"
        click.secho(f"✅ {verb} {result.file.path}", fg="green", bold=True)
        click.echo(f"   Distributions: {', '.join(result.distributions)}")
        click.echo(f"   Image prefixes: {', '.join(result.image_prefixes) or '(none)'}")


@cli.command()
@_dist_option
@_prefix_option
@_output_option
@_json_option
@click.pass_context
def check(
    ctx: click.Context,
    dists: tuple[str, ...],
    prefixes: tuple[str, ...],
    output: str | None,
    as_json: bool,
) -> None:
    """Check that the checked-in release config is up to date."""
    from releasegen.core.use_cases.generate import run_check

    result = run_check(
        config_path=ctx.obj.get("config_path"),
        distributions=_split_dists(dists),
        image_prefixes=list(prefixes) if prefixes else None,
        output=Path(output) if output else None,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.up_to_date else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    drift = result.drift
    assert drift is not None

    if drift.up_to_date:
        click.secho(f"✅ {drift.path} is up to date", fg="green", bold=True)
        return

    if not drift.exists:
        click.secho(f"❌ {drift.path} does not exist. Run 'releasegen generate'.", fg="red")
        sys.exit(1)

    click.secho(f"❌ {drift.path} is out of date:", fg="red", bold=True)
    if not ctx.obj.get("quiet"):
        click.echo(drift.diff)
    sys.exit(1)


if __name__ == "__main__":
    cli()
