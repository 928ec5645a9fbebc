"""Binary import reader abstract interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from dll_bundler.models.binary import BinaryImports


class ImportReader(ABC):
    """Read a binary's architecture tag and the module names it imports."""

    @abstractmethod
    def read(self, path: str | Path) -> BinaryImports:
        """Read *path* and return its architecture and import list.

        Raises:
            CannotOpenError: the file cannot be opened.
            MalformedImageError: the file is not a recognized binary image.
        """
        ...

    def architecture(self, path: str | Path) -> str:
        """Just the architecture tag, without the import list."""
        return self.read(path).architecture
