"""Run configuration assembled from the command line and environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

LOG_FORMATS = ("console", "json")


def default_log_level() -> str:
    return os.environ.get("DLL_BUNDLER_LOG_LEVEL", "WARNING").upper()


def default_log_format() -> str:
    fmt = os.environ.get("DLL_BUNDLER_LOG_FORMAT", "console").lower()
    return fmt if fmt in LOG_FORMATS else "console"


@dataclass
class BundlerConfig:
    """Settings for one bundling run.

    Environment variables only provide logging defaults:
        DLL_BUNDLER_LOG_LEVEL  — log level (default: WARNING)
        DLL_BUNDLER_LOG_FORMAT — console | json (default: console)
    """

    root_binary: Path
    search_paths: list[Path]
    dry_run: bool = False
    log_level: str = field(default_factory=default_log_level)
    log_format: str = field(default_factory=default_log_format)

    @property
    def destination(self) -> Path:
        """Bundle directory: the directory holding the root binary."""
        return self.root_binary.parent

    @classmethod
    def from_cli(
        cls,
        binary: str,
        search_paths: tuple[str, ...] | list[str],
        *,
        verbose: bool = False,
        log_format: str | None = None,
        dry_run: bool = False,
    ) -> BundlerConfig:
        config = cls(
            root_binary=Path(binary),
            search_paths=[Path(p) for p in search_paths],
            dry_run=dry_run,
        )
        if verbose:
            config.log_level = "DEBUG"
        if log_format is not None:
            config.log_format = log_format
        return config
