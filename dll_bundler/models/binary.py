"""Data models for binary import tables."""

from __future__ import annotations

from dataclasses import dataclass, field


def canonical_name(name: str) -> str:
    """Case-folded module name used as the deduplication key."""
    return name.lower()


@dataclass
class BinaryImports:
    """Architecture and imported module names of one binary image."""

    path: str
    architecture: str  # e.g. "AMD64", "I386", "ARM64"
    imports: list[str] = field(default_factory=list)  # ordinary, then delay-loaded
    warnings: list[str] = field(default_factory=list)  # skipped import entries
