"""Ordered diagnostics emitted while a bundle is being assembled."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)

INSTALL = "install"  # source -> destination, emitted before the copy
SKIPPED = "skipped"  # name matched, architecture did not (or unreadable)
ENTRY_UNREADABLE = "entry_unreadable"  # one import-table entry could not be decoded
DEPENDENCY_UNREADABLE = "dependency_unreadable"  # installed, imports unknown
COPY_FAILED = "copy_failed"
UNRESOLVED = "unresolved"


@dataclass
class BundleEvent:
    kind: str
    path: str = ""
    destination: str = ""
    message: str = ""

    def render(self) -> str:
        """Human-readable line as printed by the CLI."""
        if self.kind == INSTALL:
            return f"{self.path} -> {self.destination}"
        if self.kind == SKIPPED:
            return f"Skipped: {self.path}"
        if self.message:
            return f"{self.path}: {self.message}" if self.path else self.message
        return self.path


class EventTracker:
    """Collect bundle events and fan them out to callbacks as they happen."""

    def __init__(self) -> None:
        self.events: list[BundleEvent] = []
        self.callbacks: list[Callable[[BundleEvent], None]] = []

    def emit(
        self, kind: str, path: str = "", destination: str = "", message: str = ""
    ) -> BundleEvent:
        event = BundleEvent(kind=kind, path=path, destination=destination, message=message)
        self.events.append(event)
        self._notify(event)
        return event

    def of_kind(self, kind: str) -> list[BundleEvent]:
        return [e for e in self.events if e.kind == kind]

    def _notify(self, event: BundleEvent) -> None:
        for cb in self.callbacks:
            try:
                cb(event)
            except Exception:
                logger.debug("Event callback error for %s", event.kind, exc_info=True)
