"""dll-bundler: copy the transitive DLL imports of a PE binary next to it."""

__version__ = "0.1.0"

from dll_bundler.events import BundleEvent, EventTracker
from dll_bundler.exceptions import (
    BinaryReadError,
    BundlerError,
    CannotOpenError,
    MalformedImageError,
    RootUnreadableError,
    UsageError,
)
from dll_bundler.installer import DependencyInstaller
from dll_bundler.models.binary import BinaryImports, canonical_name
from dll_bundler.models.bundle import BundleReport, InstallResult
from dll_bundler.reader.base import ImportReader
from dll_bundler.reader.pe_reader import PeImportReader
from dll_bundler.resolver import ImportClosureResolver
from dll_bundler.scanner import SearchPathScanner

__all__ = [
    "BinaryImports",
    "BinaryReadError",
    "BundleEvent",
    "BundleReport",
    "BundlerError",
    "CannotOpenError",
    "DependencyInstaller",
    "EventTracker",
    "ImportClosureResolver",
    "ImportReader",
    "InstallResult",
    "MalformedImageError",
    "PeImportReader",
    "RootUnreadableError",
    "SearchPathScanner",
    "UsageError",
    "canonical_name",
]
