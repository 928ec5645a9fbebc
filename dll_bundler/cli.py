"""CLI entry point: dll-bundler.

Usage:
    dll-bundler -L /mingw64/bin app/app.exe
    dll-bundler -L deps/x64 -L /mingw64/bin --dry-run app/plugin.dll
"""

from __future__ import annotations

import sys

import click
import structlog

from dll_bundler.core.config import LOG_FORMATS, BundlerConfig
from dll_bundler.core.logging import setup_logging
from dll_bundler.events import INSTALL, UNRESOLVED, BundleEvent, EventTracker
from dll_bundler.exceptions import RootUnreadableError, UsageError
from dll_bundler.installer import DependencyInstaller
from dll_bundler.reader.pe_reader import PeImportReader
from dll_bundler.resolver import ImportClosureResolver

log = structlog.get_logger("dll_bundler.cli")


def _echo_event(event: BundleEvent) -> None:
    """Print copy lines on stdout and diagnostics on stderr, as they happen."""
    if event.kind == UNRESOLVED:
        return
    click.echo(event.render(), err=event.kind != INSTALL)


def _validate(binaries: tuple[str, ...], search_paths: tuple[str, ...]) -> str:
    if len(binaries) != 1:
        raise UsageError("Please indicate the binary file.")
    if not search_paths:
        raise UsageError("Please indicate at least one DLL search path.")
    return binaries[0]


class _BundlerCommand(click.Command):
    """Remembers the raw arguments so a bare call can print help."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        ctx.meta["dll_bundler.argv"] = list(args)
        return super().parse_args(ctx, args)


@click.command(cls=_BundlerCommand, context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "-L",
    "search_paths",
    multiple=True,
    metavar="DIR",
    help="DLL search path; repeat to add more, earlier paths win",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMATS),
    default=None,
    help="Log renderer (default: $DLL_BUNDLER_LOG_FORMAT or console)",
)
@click.option("--dry-run", is_flag=True, help="Resolve dependencies without copying them")
@click.argument("binaries", nargs=-1, metavar="EXE_OR_DLL")
@click.pass_context
def main(
    ctx: click.Context,
    search_paths: tuple[str, ...],
    verbose: bool,
    log_format: str | None,
    dry_run: bool,
    binaries: tuple[str, ...],
) -> None:
    """Copy every DLL that EXE_OR_DLL transitively imports next to it."""
    if not ctx.meta.get("dll_bundler.argv"):
        click.echo(ctx.get_help())
        return

    try:
        binary = _validate(binaries, search_paths)
    except UsageError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    config = BundlerConfig.from_cli(
        binary, search_paths, verbose=verbose, log_format=log_format, dry_run=dry_run
    )
    setup_logging(config.log_level, config.log_format)

    events = EventTracker()
    events.callbacks.append(_echo_event)
    resolver = ImportClosureResolver(
        PeImportReader(),
        installer=DependencyInstaller(events, dry_run=config.dry_run),
        events=events,
    )

    try:
        report = resolver.resolve(config.root_binary, config.search_paths, config.destination)
    except RootUnreadableError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    log.info("cli.summary", dry_run=config.dry_run, **report.summary())


if __name__ == "__main__":
    main()
