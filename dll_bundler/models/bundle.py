"""Data models for a bundling run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class InstallResult:
    """Outcome of copying one dependency next to the root binary."""

    source: str
    destination: str
    copied: bool = False
    already_present: bool = False
    dry_run: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BundleReport:
    """Everything a closure resolution did, in the order it happened."""

    root: str
    architecture: str
    destination: str
    searched: list[str] = field(default_factory=list)
    installed: list[InstallResult] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    unresolved: list[str] = field(default_factory=list)
    unreadable: list[str] = field(default_factory=list)

    @property
    def failed(self) -> list[InstallResult]:
        return [r for r in self.installed if not r.ok]

    @property
    def ok(self) -> bool:
        return not self.failed

    def summary(self) -> dict[str, Any]:
        return {
            "root": self.root,
            "architecture": self.architecture,
            "searched": len(self.searched),
            "installed": len(self.installed) - len(self.failed),
            "skipped": len(self.skipped),
            "unresolved": len(self.unresolved),
            "unreadable": len(self.unreadable),
            "failed": len(self.failed),
        }
