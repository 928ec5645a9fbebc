"""Copy resolved dependencies next to the root binary."""

from __future__ import annotations

import shutil
from pathlib import Path

import structlog

from dll_bundler.events import COPY_FAILED, INSTALL, EventTracker
from dll_bundler.models.bundle import InstallResult

log = structlog.get_logger("dll_bundler.installer")


class DependencyInstaller:
    """Copy a dependency into the bundle directory.

    An existing file at the destination is overwritten. Copy failures are
    reported in the result, never raised.
    """

    def __init__(self, events: EventTracker | None = None, *, dry_run: bool = False) -> None:
        self._events = events or EventTracker()
        self.dry_run = dry_run

    def install(self, source: str | Path, destination_dir: str | Path) -> InstallResult:
        source = Path(source)
        destination = Path(destination_dir) / source.name
        result = InstallResult(source=str(source), destination=str(destination))

        self._events.emit(INSTALL, path=str(source), destination=str(destination))
        log.info("installer.install", source=str(source), destination=str(destination))

        if self.dry_run:
            result.dry_run = True
            return result

        try:
            shutil.copy(source, destination)
        except shutil.SameFileError:
            # Found in the bundle directory itself
            result.already_present = True
            return result
        except OSError as e:
            result.error = e.strerror or str(e)
            log.info(
                "installer.copy_failed",
                source=str(source),
                destination=str(destination),
                error=result.error,
            )
            self._events.emit(
                COPY_FAILED, path=str(source), destination=str(destination), message=result.error
            )
            return result

        result.copied = True
        return result
