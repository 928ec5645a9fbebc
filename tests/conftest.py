"""Shared pytest fixtures for dll-bundler tests."""

from __future__ import annotations

import logging
import struct
from pathlib import Path
from typing import Sequence

import pytest
import structlog

from dll_bundler.testing import FakeImportReader


@pytest.fixture
def reader() -> FakeImportReader:
    return FakeImportReader()


@pytest.fixture
def app_dir(tmp_path: Path) -> Path:
    d = tmp_path / "app"
    d.mkdir()
    return d


@pytest.fixture
def p1(tmp_path: Path) -> Path:
    d = tmp_path / "p1"
    d.mkdir()
    return d


@pytest.fixture
def p2(tmp_path: Path) -> Path:
    d = tmp_path / "p2"
    d.mkdir()
    return d


@pytest.fixture(autouse=True)
def _reset_logging():
    """The CLI configures logging globally; undo it between tests."""
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


# ── minimal real PE images ──

_FILE_HEADER = struct.Struct("<HHIIIHH")
_OPTIONAL_HEADER64 = struct.Struct("<HBBIIIIIQIIHHHHHHIIIIHHQQQQII")
_IMPORT_DESCRIPTOR = struct.Struct("<IIIII")
_DELAY_DESCRIPTOR = struct.Struct("<IIIIIIII")
_NAME_SLOT = 0x40


def build_pe(
    imports: Sequence[bytes] = (),
    delay_imports: Sequence[bytes] = (),
    machine: int = 0x8664,
) -> bytes:
    """A section-less PE32+ image; RVAs equal file offsets past the headers."""
    imp_at = 0x200
    delay_at = imp_at + _IMPORT_DESCRIPTOR.size * (len(imports) + 1)
    thunks_at = delay_at + _DELAY_DESCRIPTOR.size * (len(delay_imports) + 1)
    names_at = thunks_at + 16
    size = names_at + _NAME_SLOT * (len(imports) + len(delay_imports)) + 0x40

    image = bytearray(size)
    image[0:2] = b"MZ"
    struct.pack_into("<I", image, 0x3C, 0x40)
    image[0x40:0x44] = b"PE\0\0"
    _FILE_HEADER.pack_into(image, 0x44, machine, 0, 0, 0, 0, 240, 0x2022)
    _OPTIONAL_HEADER64.pack_into(
        image, 0x58,
        0x20B, 14, 0, 0, 0, 0, 0, 0,
        0x140000000, 0x1000, 0x200,
        6, 0, 0, 0, 6, 0,
        0, size, 0x200, 0,
        3, 0x8160,
        0x100000, 0x1000, 0x100000, 0x1000,
        0, 16,
    )
    directories = 0x58 + _OPTIONAL_HEADER64.size
    if imports:
        struct.pack_into(
            "<II", image, directories + 1 * 8,
            imp_at, _IMPORT_DESCRIPTOR.size * (len(imports) + 1),
        )
    if delay_imports:
        struct.pack_into(
            "<II", image, directories + 13 * 8,
            delay_at, _DELAY_DESCRIPTOR.size * (len(delay_imports) + 1),
        )

    # one ordinal thunk, then the terminator
    struct.pack_into("<QQ", image, thunks_at, 0x8000000000000001, 0)

    name_at = names_at
    for index, name in enumerate(imports):
        _IMPORT_DESCRIPTOR.pack_into(
            image, imp_at + index * _IMPORT_DESCRIPTOR.size,
            thunks_at, 0, 0, name_at, thunks_at,
        )
        image[name_at:name_at + len(name)] = name
        name_at += _NAME_SLOT
    for index, name in enumerate(delay_imports):
        _DELAY_DESCRIPTOR.pack_into(
            image, delay_at + index * _DELAY_DESCRIPTOR.size,
            1, name_at, 0, thunks_at, thunks_at, 0, 0, 0,
        )
        image[name_at:name_at + len(name)] = name
        name_at += _NAME_SLOT
    return bytes(image)


@pytest.fixture
def pe_image():
    """Write a real PE image to a path: ``pe_image(path, [b"KERNEL32.dll"])``."""

    def _write(path: Path, imports=(), delay_imports=(), machine: int = 0x8664) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(build_pe(imports, delay_imports, machine))
        return path

    return _write
