"""PE/COFF import reader built on pefile."""

from __future__ import annotations

from pathlib import Path

import pefile
import structlog

from dll_bundler.exceptions import CannotOpenError, MalformedImageError
from dll_bundler.models.binary import BinaryImports
from dll_bundler.reader.base import ImportReader

log = structlog.get_logger("dll_bundler.reader")

_MACHINE_PREFIX = "IMAGE_FILE_MACHINE_"

# pefile's placeholder for a name that fails its DOS filename check
_INVALID_NAME = b"*invalid*"

_IMPORT_DIRECTORIES = [
    pefile.DIRECTORY_ENTRY["IMAGE_DIRECTORY_ENTRY_IMPORT"],
    pefile.DIRECTORY_ENTRY["IMAGE_DIRECTORY_ENTRY_DELAY_IMPORT"],
]


def machine_tag(machine: int) -> str:
    """Map a FILE_HEADER.Machine value to a short tag like ``AMD64``."""
    name = pefile.MACHINE_TYPE.get(machine)
    if isinstance(name, str):
        return name[len(_MACHINE_PREFIX):] if name.startswith(_MACHINE_PREFIX) else name
    return f"0x{machine:04x}"


class PeImportReader(ImportReader):
    """Read ordinary and delay-loaded imports from a PE image."""

    def read(self, path: str | Path) -> BinaryImports:
        path = str(path)
        pe = self._load(path)

        try:
            pe.parse_data_directories(
                directories=_IMPORT_DIRECTORIES, import_dllnames_only=True
            )
            result = BinaryImports(path=path, architecture=machine_tag(pe.FILE_HEADER.Machine))
            for attr in ("DIRECTORY_ENTRY_IMPORT", "DIRECTORY_ENTRY_DELAY_IMPORT"):
                for index, entry in enumerate(getattr(pe, attr, [])):
                    name = self._entry_name(entry)
                    if name is None:
                        warning = f"unreadable {attr.lower()} entry #{index}"
                        log.info(
                            "reader.entry_unreadable", path=path, entry=index, table=attr
                        )
                        result.warnings.append(warning)
                        continue
                    result.imports.append(name)
            for warning in pe.get_warnings():
                log.debug("reader.pefile_warning", path=path, warning=warning)
        except pefile.PEFormatError as e:
            raise MalformedImageError(path, e.value) from e
        finally:
            pe.close()

        log.debug(
            "reader.read",
            path=path,
            architecture=result.architecture,
            imports=len(result.imports),
        )
        return result

    def architecture(self, path: str | Path) -> str:
        """Header-only read; import directories are left unparsed."""
        path = str(path)
        pe = self._load(path)
        try:
            return machine_tag(pe.FILE_HEADER.Machine)
        finally:
            pe.close()

    @staticmethod
    def _load(path: str) -> pefile.PE:
        # pefile wraps its own open/mmap failures in a bare Exception
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise CannotOpenError(path, e.strerror or str(e)) from e
        if not data:
            raise MalformedImageError(path, "The file is empty")
        try:
            return pefile.PE(data=data, fast_load=True)
        except pefile.PEFormatError as e:
            raise MalformedImageError(path, e.value) from e

    @staticmethod
    def _entry_name(entry) -> str | None:
        raw = getattr(entry, "dll", None)
        if not raw or raw == _INVALID_NAME:
            return None
        if isinstance(raw, str):
            return None if raw == _INVALID_NAME.decode() else raw
        try:
            return raw.decode("ascii")
        except UnicodeDecodeError:
            return None
