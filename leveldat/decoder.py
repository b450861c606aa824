"""level.dat tag-tree decoder

Layout, all integers little-endian:

    Document := version:int32 payload_length:int32 Tag* End
    Tag      := type:uint8 [key_len:uint16 key:utf8 Value(type)]   (no key/value for End)
    List     := element_type:uint8 count:uint32 Value(element_type){count}
    Compound := Tag* End

Strings and keys are decoded leniently: malformed UTF-8 is replaced with
U+FFFD instead of failing.
"""

import io
import logging
import struct
from typing import BinaryIO, Final

from .errors import InvalidFormatError, LevelDatError, ReadError
from .types import (
    Byte,
    Compound,
    Document,
    EndTag,
    Float32,
    Int32,
    Int64,
    List,
    String,
    Tag,
    TagType,
    Value,
)

LOG = logging.getLogger(__name__)

# Max List/Compound nesting. Each compound level costs two Python frames.
DEFAULT_MAX_DEPTH: Final[int] = 256

TEXT_ENCODING: Final[str] = "utf-8"
TEXT_ERRORS: Final[str] = "replace"

_U8: Final = struct.Struct("<B")
_U16: Final = struct.Struct("<H")
_U32: Final = struct.Struct("<I")
_I32: Final = struct.Struct("<i")
_I64: Final = struct.Struct("<q")
_F32: Final = struct.Struct("<f")


def _read_exact(stream: BinaryIO, n: int) -> bytes:
    """Read exactly n bytes or raise ReadError"""
    data = stream.read(n) if n else b""
    if len(data) != n:
        raise ReadError(n, len(data))
    return data


def _unpack(stream: BinaryIO, fmt: struct.Struct) -> int | float:
    value: int | float = fmt.unpack(_read_exact(stream, fmt.size))[0]
    return value


def _read_text(stream: BinaryIO) -> str:
    """uint16 byte length followed by lossy UTF-8"""
    length = int(_unpack(stream, _U16))
    return _read_exact(stream, length).decode(TEXT_ENCODING, errors=TEXT_ERRORS)


def _tag_type(code: int) -> TagType:
    try:
        return TagType(code)
    except ValueError:
        raise InvalidFormatError(f"Invalid tag type: {code}", value=code) from None


def decode_tag_type(stream: BinaryIO) -> TagType:
    """Read one type byte"""
    return _tag_type(int(_unpack(stream, _U8)))


def decode_value(
    stream: BinaryIO,
    tag_type: TagType,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    depth: int = 0,
) -> Value:
    """Read the payload for tag_type. depth is the current container nesting."""
    if tag_type == TagType.END:
        raise InvalidFormatError("Cannot decode a value for an End tag", value=0)
    if tag_type == TagType.BYTE:
        return Byte(int(_unpack(stream, _U8)))
    if tag_type == TagType.INT32:
        return Int32(int(_unpack(stream, _I32)))
    if tag_type == TagType.INT64:
        return Int64(int(_unpack(stream, _I64)))
    if tag_type == TagType.FLOAT32:
        return Float32(float(_unpack(stream, _F32)))
    if tag_type == TagType.STRING:
        return String(_read_text(stream))

    # Containers
    if depth >= max_depth:
        raise InvalidFormatError(f"Nesting exceeds max depth {max_depth}")

    try:
        if tag_type == TagType.LIST:
            element_type = decode_tag_type(stream)
            count = int(_unpack(stream, _U32))
            items: list[Value] = []
            for _ in range(count):
                items.append(
                    decode_value(
                        stream, element_type, max_depth=max_depth, depth=depth + 1
                    )
                )
            return List(element_type, tuple(items))

        if tag_type == TagType.COMPOUND:
            tags: list[Tag] = []
            while True:
                try:
                    tag = decode_tag(stream, max_depth=max_depth, depth=depth + 1)
                except LevelDatError as e:
                    LOG.debug(f"Error decoding compound child {len(tags)}: {e}")
                    raise
                if isinstance(tag, EndTag):
                    break
                tags.append(tag)
            return Compound(tuple(tags))
    except RecursionError:
        # max_depth is set higher than the interpreter stack allows
        raise InvalidFormatError(
            f"Nesting at depth {depth} exceeds the interpreter recursion limit"
        ) from None

    # Unreachable with a real TagType
    raise InvalidFormatError(f"Unsupported tag type: {tag_type!r}")


def _decode_tag_body(
    stream: BinaryIO, tag_type: TagType, max_depth: int, depth: int
) -> Tag | EndTag:
    """Key and value for an already read type"""
    if tag_type == TagType.END:
        return EndTag()
    key = _read_text(stream)
    value = decode_value(stream, tag_type, max_depth=max_depth, depth=depth)
    return Tag(key, value)


def decode_tag(
    stream: BinaryIO,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    depth: int = 0,
) -> Tag | EndTag:
    """Read a type byte, then unless it's END a key and a value"""
    return _decode_tag_body(stream, decode_tag_type(stream), max_depth, depth)


def read_document(
    source: BinaryIO,
    *,
    strict: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Document:
    """Read the header and the top-level tag stream.

    strict=False: any error in the top-level loop ends it and the tags read so
    far are returned. Bedrock files normally end right after the root compound
    with no END byte, so this is how ordinary files finish.
    strict=True: the error is raised. A missing END counts as an error.

    Header errors are always raised.
    """
    format_version = int(_unpack(source, _I32))
    payload_length = int(_unpack(source, _I32))
    LOG.debug(f"Header: version={format_version} payload_length={payload_length}")

    tags: list[Tag] = []
    while True:
        try:
            # Read the type byte here so EOF before a tag can be told apart
            # from EOF inside one
            code = source.read(1)
            if not code:
                if strict:
                    raise ReadError(1, 0)
                LOG.debug(f"End of stream after {len(tags)} tags")
                break
            tag = _decode_tag_body(source, _tag_type(code[0]), max_depth, 0)
        except (LevelDatError, OSError) as e:
            if strict:
                raise
            LOG.warning(f"Stopped reading after {len(tags)} tags: {e}")
            break
        if isinstance(tag, EndTag):
            break
        tags.append(tag)

    return Document(format_version, payload_length, tuple(tags))


def loads(
    data: bytes, *, strict: bool = False, max_depth: int = DEFAULT_MAX_DEPTH
) -> Document:
    """read_document() over an in-memory buffer"""
    return read_document(io.BytesIO(data), strict=strict, max_depth=max_depth)
