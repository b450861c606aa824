"""Convert decoded documents to plain data, CBOR or text"""

import logging
from typing import Any

import cbor2

from .types import Compound, Document, List, Tag, Value

LOG = logging.getLogger(__name__)


def to_plain(obj: Document | Tag | Value) -> Any:
    """Strip tag types and return plain Python data.
    Compounds become dicts. If a compound repeats a key, the first one wins.
    """
    if isinstance(obj, Document):
        return {
            "format_version": obj.format_version,
            "payload_length": obj.payload_length,
            "tags": _tags_to_dict(obj.tags),
        }
    elif isinstance(obj, Tag):
        return {obj.key: to_plain(obj.value)}
    elif isinstance(obj, Compound):
        return _tags_to_dict(obj.tags)
    elif isinstance(obj, List):
        return [to_plain(item) for item in obj.items]
    else:
        return obj.value


def _tags_to_dict(tags: tuple[Tag, ...]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for tag in tags:
        if tag.key in result:
            LOG.debug(f"Duplicate key ignored: {tag.key!r}")
            continue
        result[tag.key] = to_plain(tag.value)
    return result


def typed_asdict(obj: Document | Tag | Value) -> Any:
    """Like to_plain, but keeps tag type names so the tree can be rebuilt.
    Each tag becomes {"type": ..., "key": ..., "value": ...}.
    """
    if isinstance(obj, Document):
        return {
            "format_version": obj.format_version,
            "payload_length": obj.payload_length,
            "tags": [typed_asdict(tag) for tag in obj.tags],
        }
    elif isinstance(obj, Tag):
        return {
            "type": obj.type.name,
            "key": obj.key,
            "value": typed_asdict(obj.value),
        }
    elif isinstance(obj, Compound):
        return [typed_asdict(tag) for tag in obj.tags]
    elif isinstance(obj, List):
        return {
            "element_type": obj.element_type.name,
            "items": [typed_asdict(item) for item in obj.items],
        }
    else:
        return obj.value


def encode_cbor(document: Document) -> bytes:
    """Encode the typed tree to CBOR"""
    return cbor2.dumps(typed_asdict(document))


def format_document(document: Document, indent: str = "  ") -> str:
    """Human readable tree"""
    lines = [
        f"Version: {document.format_version}",
        f"Payload Length: {document.payload_length}",
        f"Tags: {len(document.tags)}",
    ]
    for tag in document.tags:
        _format_tag(tag.key, tag.value, lines, indent, 1)
    return "\n".join(lines)


def _format_tag(
    key: str | None, value: Value, lines: list[str], indent: str, level: int
) -> None:
    """Append lines for one value. key is None for list items."""
    indent_str = indent * level
    name = value.TAG_TYPE.name
    label = f'{name}("{key}")' if key is not None else name

    if isinstance(value, Compound):
        lines.append(f"{indent_str}{label} [{len(value)} entries]")
        for child in value.tags:
            _format_tag(child.key, child.value, lines, indent, level + 1)
    elif isinstance(value, List):
        lines.append(
            f"{indent_str}{label} [{len(value)} items of {value.element_type.name}]"
        )
        for i, item in enumerate(value.items):
            lines.append(f"{indent_str}{indent}[index {i}]")
            _format_tag(None, item, lines, indent, level + 2)
    else:
        lines.append(f"{indent_str}{label}: {value.value!r}")
