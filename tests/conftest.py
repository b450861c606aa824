import struct
from pathlib import Path

import pytest


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


class NbtBytes:
    """Builds little-endian tag bytes for tests"""

    END = b"\x00"

    @staticmethod
    def text(s: str | bytes) -> bytes:
        raw = s.encode("utf-8") if isinstance(s, str) else s
        return struct.pack("<H", len(raw)) + raw

    @classmethod
    def tag(cls, type_code: int, key: str | bytes, payload: bytes) -> bytes:
        return bytes([type_code]) + cls.text(key) + payload

    @staticmethod
    def header(version: int = 10, payload_length: int = 0) -> bytes:
        return struct.pack("<ii", version, payload_length)

    @classmethod
    def compound(cls, *tags: bytes) -> bytes:
        """Compound payload: tags then END"""
        return b"".join(tags) + cls.END

    @staticmethod
    def list_payload(element_type: int, *items: bytes) -> bytes:
        return bytes([element_type]) + struct.pack("<I", len(items)) + b"".join(items)

    @classmethod
    def nested_lists(cls, levels: int) -> bytes:
        """List payload nested `levels` deep, innermost an empty Byte list"""
        if levels == 1:
            return cls.list_payload(1)
        return cls.list_payload(9, cls.nested_lists(levels - 1))

    @classmethod
    def nested_compounds(cls, levels: int) -> bytes:
        """Compound payload nested `levels` deep"""
        if levels == 1:
            return cls.compound()
        return cls.compound(cls.tag(10, "c", cls.nested_compounds(levels - 1)))


@pytest.fixture
def nbt() -> type[NbtBytes]:
    return NbtBytes


@pytest.fixture
def world_dir(tmp_path: Path) -> Path:
    """World directory with a small level.dat"""
    b = NbtBytes
    body = b.tag(
        10,
        "",
        b.compound(
            b.tag(8, "LevelName", b.text("My World")),
            b.tag(3, "GameType", struct.pack("<i", 1)),
            b.tag(10, "abilities", b.compound(b.tag(1, "flying", b"\x00"))),
        ),
    )
    path = tmp_path / "MyWorld"
    path.mkdir()
    # Bedrock files end right after the root compound, no trailing END
    (path / "level.dat").write_bytes(b.header(10, len(body)) + body)
    return path
