"""Test doubles for dll_bundler — use in unit and CLI tests.

Usage::

    from dll_bundler.testing import FakeImportReader

    reader = FakeImportReader()
    reader.add(tmp_path / "app.exe", "AMD64", ["A.dll"])
    reader.add(tmp_path / "lib" / "A.dll", "AMD64", [])
    ImportClosureResolver(reader).resolve(tmp_path / "app.exe", [tmp_path / "lib"])
"""

from __future__ import annotations

from pathlib import Path

from dll_bundler.exceptions import CannotOpenError, MalformedImageError
from dll_bundler.models.binary import BinaryImports
from dll_bundler.reader.base import ImportReader


class FakeImportReader(ImportReader):
    """In-memory stand-in for PeImportReader.

    Binaries are registered with :meth:`add`; by default the file is also
    created on disk so directory scans can see it. Paths that were never
    registered raise ``CannotOpenError``.
    """

    def __init__(self) -> None:
        self._binaries: dict[str, BinaryImports] = {}
        self._malformed: set[str] = set()
        self._imports_unreadable: set[str] = set()
        self.reads: list[str] = []
        self.architecture_checks: list[str] = []

    @staticmethod
    def _key(path: str | Path) -> str:
        return str(Path(path))

    def add(
        self,
        path: str | Path,
        architecture: str,
        imports: list[str] | None = None,
        *,
        warnings: list[str] | None = None,
        create: bool = True,
    ) -> Path:
        path = Path(path)
        if create:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"MZ fake " + architecture.encode())
        self._binaries[self._key(path)] = BinaryImports(
            path=str(path),
            architecture=architecture,
            imports=list(imports or []),
            warnings=list(warnings or []),
        )
        return path

    def add_malformed(self, path: str | Path, *, create: bool = True) -> Path:
        """Register a file that is not a binary image at all."""
        path = Path(path)
        if create:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"not a PE image")
        self._malformed.add(self._key(path))
        return path

    def break_imports(self, path: str | Path) -> None:
        """Keep the architecture readable but make the full read fail."""
        self._imports_unreadable.add(self._key(path))

    def read(self, path: str | Path) -> BinaryImports:
        key = self._key(path)
        self.reads.append(key)
        if key in self._imports_unreadable:
            raise MalformedImageError(key, "corrupt import directory")
        return self._lookup(key)

    def architecture(self, path: str | Path) -> str:
        key = self._key(path)
        self.architecture_checks.append(key)
        return self._lookup(key).architecture

    def _lookup(self, key: str) -> BinaryImports:
        if key in self._malformed:
            raise MalformedImageError(key, "DOS Header magic not found.")
        binary = self._binaries.get(key)
        if binary is None:
            raise CannotOpenError(key, "No such file or directory")
        return binary
