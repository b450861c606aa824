from . import (
    config,
    decoder,
    errors,
    export,
    types,
    util,
    world,
)
from .decoder import loads, read_document
from .errors import InvalidFormatError, LevelDatError, ReadError
from .types import Document, Tag, TagType

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "config",
    "decoder",
    "errors",
    "export",
    "types",
    "util",
    "world",
    "loads",
    "read_document",
    "Document",
    "Tag",
    "TagType",
    "InvalidFormatError",
    "LevelDatError",
    "ReadError",
]
