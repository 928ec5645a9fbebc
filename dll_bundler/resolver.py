"""Import closure resolution — breadth-first walk over discovered imports."""

from __future__ import annotations

from collections import deque
from pathlib import Path
from typing import Sequence

import structlog

from dll_bundler.events import (
    DEPENDENCY_UNREADABLE,
    ENTRY_UNREADABLE,
    SKIPPED,
    UNRESOLVED,
    EventTracker,
)
from dll_bundler.exceptions import BinaryReadError, RootUnreadableError
from dll_bundler.installer import DependencyInstaller
from dll_bundler.models.binary import BinaryImports, canonical_name
from dll_bundler.models.bundle import BundleReport
from dll_bundler.reader.base import ImportReader
from dll_bundler.scanner import SearchPathScanner

log = structlog.get_logger("dll_bundler.resolver")


class ImportClosureResolver:
    """Resolve and install the transitive imports of a root binary.

    Usage::

        resolver = ImportClosureResolver(PeImportReader())
        report = resolver.resolve("app/app.exe", ["/mingw64/bin"])

    Every distinct (case-insensitive) module name is searched at most once,
    so cyclic and diamond-shaped import graphs terminate. Only a failure to
    read the root binary is fatal; everything else is logged and skipped.
    """

    def __init__(
        self,
        reader: ImportReader,
        scanner: SearchPathScanner | None = None,
        installer: DependencyInstaller | None = None,
        events: EventTracker | None = None,
    ) -> None:
        self.events = events or EventTracker()
        self._reader = reader
        self._scanner = scanner or SearchPathScanner(reader, self.events)
        self._installer = installer or DependencyInstaller(self.events)

    def resolve(
        self,
        root: str | Path,
        search_paths: Sequence[str | Path],
        destination: str | Path | None = None,
    ) -> BundleReport:
        """Bundle every reachable dependency of *root*.

        Raises:
            RootUnreadableError: *root* cannot be opened or parsed.
        """
        root = Path(root)
        try:
            root_imports = self._reader.read(root)
        except BinaryReadError as e:
            log.info("resolver.root_unreadable", root=str(root), error=e.reason)
            raise RootUnreadableError(e) from e
        self._report_entry_warnings(root_imports)

        arch = root_imports.architecture
        dest = Path(destination) if destination is not None else root.parent
        report = BundleReport(root=str(root), architecture=arch, destination=str(dest))
        log.info(
            "resolver.start",
            root=str(root),
            architecture=arch,
            imports=len(root_imports.imports),
        )

        # Skips come from the scanner's tracker, which may not be ours
        scan_events = self._scanner.events
        first_skip = len(scan_events.events)
        pending: deque[str] = deque(root_imports.imports)
        processed: set[str] = set()

        while pending:
            name = canonical_name(pending.popleft())
            if name in processed:
                continue
            processed.add(name)
            report.searched.append(name)

            found = self._scanner.find(name, arch, search_paths)
            if found is None:
                log.info("resolver.unresolved", name=name)
                self.events.emit(UNRESOLVED, path=name)
                report.unresolved.append(name)
                continue

            report.installed.append(self._installer.install(found, dest))

            try:
                dep_imports = self._reader.read(found)
            except BinaryReadError as e:
                log.info("resolver.dependency_unreadable", path=str(found), error=e.reason)
                self.events.emit(DEPENDENCY_UNREADABLE, path=str(found), message=e.reason)
                report.unreadable.append(str(found))
                continue
            self._report_entry_warnings(dep_imports)
            pending.extend(dep_imports.imports)

        report.skipped = [
            e.path for e in scan_events.events[first_skip:] if e.kind == SKIPPED
        ]
        log.info("resolver.done", **report.summary())
        return report

    def _report_entry_warnings(self, imports: BinaryImports) -> None:
        for warning in imports.warnings:
            self.events.emit(ENTRY_UNREADABLE, path=imports.path, message=warning)
