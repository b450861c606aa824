"""Defines the decoded tree types for the module"""

import enum
from dataclasses import dataclass
from typing import ClassVar, Final, Iterator, TypeAlias, Union


class TagType(enum.IntEnum):
    """One byte tag type code. Codes 2, 6, 7 and > 10 are not part of the grammar."""

    END = 0
    BYTE = 1
    INT32 = 3
    INT64 = 4
    FLOAT32 = 5
    STRING = 8
    LIST = 9
    COMPOUND = 10


# Path separator for Document.find()
PATH_SEP: Final[str] = "/"


##
# Value variants. One class per non-END TagType.


@dataclass(frozen=True)
class Byte:
    """Unsigned 8-bit"""

    TAG_TYPE: ClassVar[TagType] = TagType.BYTE
    value: int


@dataclass(frozen=True)
class Int32:
    TAG_TYPE: ClassVar[TagType] = TagType.INT32
    value: int


@dataclass(frozen=True)
class Int64:
    TAG_TYPE: ClassVar[TagType] = TagType.INT64
    value: int


@dataclass(frozen=True)
class Float32:
    """binary32 widened to a Python float"""

    TAG_TYPE: ClassVar[TagType] = TagType.FLOAT32
    value: float


@dataclass(frozen=True)
class String:
    TAG_TYPE: ClassVar[TagType] = TagType.STRING
    value: str


@dataclass(frozen=True)
class List:
    """Homogeneous list of bare values. Every item was decoded as element_type."""

    TAG_TYPE: ClassVar[TagType] = TagType.LIST
    element_type: TagType
    items: tuple["Value", ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator["Value"]:
        return iter(self.items)

    def __getitem__(self, index: int) -> "Value":
        return self.items[index]


@dataclass(frozen=True)
class Compound:
    """Ordered child tags. The terminating END is never stored."""

    TAG_TYPE: ClassVar[TagType] = TagType.COMPOUND
    tags: tuple["Tag", ...] = ()

    def __len__(self) -> int:
        return len(self.tags)

    def __iter__(self) -> Iterator["Tag"]:
        return iter(self.tags)

    def __getitem__(self, key: str) -> "Value":
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def __contains__(self, key: object) -> bool:
        return any(tag.key == key for tag in self.tags)

    def get(self, key: str) -> Union["Value", None]:
        """Value of the first child with this key, or None"""
        return _first_value(self.tags, key)

    def keys(self) -> list[str]:
        return [tag.key for tag in self.tags]


Value: TypeAlias = Union[Byte, Int32, Int64, Float32, String, List, Compound]

# Maps each TagType to its value class (END has none)
VALUE_CLASSES: Final[dict[TagType, type]] = {
    cls.TAG_TYPE: cls for cls in (Byte, Int32, Int64, Float32, String, List, Compound)
}


##
# Tags


@dataclass(frozen=True)
class Tag:
    """Keyed, typed node. The type comes from the value."""

    key: str
    value: Value

    @property
    def type(self) -> TagType:
        return self.value.TAG_TYPE


@dataclass(frozen=True)
class EndTag:
    """Terminator for a compound or the top-level stream. No key, no value."""

    type: ClassVar[TagType] = TagType.END
    key: ClassVar[str] = ""
    value: ClassVar[None] = None


def _first_value(tags: tuple[Tag, ...], key: str) -> Value | None:
    for tag in tags:
        if tag.key == key:
            return tag.value
    return None


##
# Document


@dataclass(frozen=True)
class Document:
    """Decoded level.dat. payload_length is as read from the header, never checked."""

    format_version: int
    payload_length: int
    tags: tuple[Tag, ...] = ()

    def __len__(self) -> int:
        return len(self.tags)

    def __iter__(self) -> Iterator[Tag]:
        return iter(self.tags)

    def __getitem__(self, key: str) -> Value:
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def get(self, key: str) -> Value | None:
        """Value of the first top-level tag with this key, or None"""
        return _first_value(self.tags, key)

    def find(self, path: str) -> Value | None:
        """Walk a slash separated key path through nested compounds.
        e.g. doc.find("Data/GameRules/doImmediateRespawn")
        Returns None if any step is missing or isn't a compound.

        Bedrock files usually hold a single unnamed root compound, so if the
        first key isn't a top-level tag the lookup starts inside that root.
        """
        keys = [k for k in path.split(PATH_SEP) if k]
        if not keys:
            return None
        value = self.get(keys[0])
        if value is None:
            root = self.get("")
            if isinstance(root, Compound):
                value = root.get(keys[0])
        for key in keys[1:]:
            if not isinstance(value, Compound):
                return None
            value = value.get(key)
        return value
