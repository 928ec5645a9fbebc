"""Search path scanning — locate an import by name and architecture."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Sequence

import structlog

from dll_bundler.events import SKIPPED, EventTracker
from dll_bundler.exceptions import BinaryReadError
from dll_bundler.reader.base import ImportReader

log = structlog.get_logger("dll_bundler.scanner")


class SearchPathScanner:
    """Find the first architecture-matching file for an import name.

    Search order:
      1. search paths in the order given
      2. within a directory, entries sorted by name

    A name match with the wrong architecture (or one that cannot be read)
    is reported as skipped and the scan goes on.
    """

    def __init__(self, reader: ImportReader, events: EventTracker | None = None) -> None:
        self._reader = reader
        self.events = events or EventTracker()

    def find(
        self,
        name: str,
        architecture: str,
        search_paths: Sequence[str | Path],
    ) -> Path | None:
        """Return the path of the first matching candidate, or None."""
        wanted = name.lower()
        for directory in search_paths:
            for candidate in self._matching_entries(Path(directory), wanted):
                if self._has_architecture(candidate, architecture):
                    log.debug("scanner.found", name=name, path=str(candidate))
                    return candidate
                log.info("scanner.skipped", name=name, path=str(candidate))
                self.events.emit(SKIPPED, path=str(candidate))
        log.debug("scanner.not_found", name=name)
        return None

    @staticmethod
    def _matching_entries(directory: Path, wanted: str) -> list[Path]:
        try:
            with os.scandir(directory) as it:
                entries = [e for e in it if e.name.lower() == wanted]
        except OSError as e:
            log.debug("scanner.unlistable", directory=str(directory), error=str(e))
            return []
        entries.sort(key=lambda e: e.name)
        return [Path(e.path) for e in entries if e.is_file()]

    def _has_architecture(self, candidate: Path, architecture: str) -> bool:
        try:
            return self._reader.architecture(candidate) == architecture
        except BinaryReadError as e:
            log.debug("scanner.candidate_unreadable", path=str(candidate), error=e.reason)
            return False
