"""Persistent config - leveldat.yaml"""

import logging
import types
from dataclasses import asdict, dataclass, field
from io import StringIO
from pathlib import Path
from typing import Any, Final, Optional, TypeAlias

import dacite
from ruamel.yaml import YAML

from .decoder import DEFAULT_MAX_DEPTH

LOG = logging.getLogger(__name__)

##
# Global defines

DEFAULT_CONFIG_DIR: Final[Path] = Path("~/.leveldat/").expanduser()
DEFAULT_LEVEL_FILENAME: Final[str] = "level.dat"


##
# Configuration

CONFIG_FILENAME: Final[str] = "leveldat.yaml"
CONFIG_VERSION: Final[int] = 1
WorldName: TypeAlias = str


@dataclass
class DecoderConfig:
    # False keeps the tags read before a top-level decode error
    strict: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH


@dataclass
class WorldConfig:
    path: str = ""  # World directory, may use ~


@dataclass
class Config:
    config_version: int = CONFIG_VERSION
    decoder: DecoderConfig = field(default_factory=DecoderConfig)
    level_filename: str = DEFAULT_LEVEL_FILENAME
    worlds: dict[WorldName, WorldConfig] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> Optional["Config"]:
        try:
            rv = dacite.from_dict(data_class=cls, data=config_dict)
        except Exception as e:
            # This means the dict doesn't match Config
            LOG.error(f"Failed to parse config file: {e}")
            return None
        return rv

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class ConfigManager:
    def __init__(
        self, config_dir: Path | str | None = None, save: bool = False
    ) -> None:
        """Set save to true to save automatically on exiting"""
        self.save_on_exit = save
        config_dir = Path(config_dir or DEFAULT_CONFIG_DIR).expanduser()
        self.config_file = config_dir / CONFIG_FILENAME
        self.yaml = YAML(typ="rt")
        self.config: Config = Config()

    def load(self) -> None:
        if self.config_file.exists():
            with open(self.config_file) as f:
                # load() returns None if the file has no data.
                cfg_dict = self.yaml.load(f) or {}
                self.config = Config.from_dict(dict(cfg_dict)) or Config()
        else:
            self.config = Config()

    def pformat(self) -> str:
        """Pretty print the config"""
        string_stream = StringIO()
        self.yaml.dump(self.config.to_dict(), string_stream)
        return string_stream.getvalue()

    def save(self) -> None:
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w") as f:
            self.yaml.dump(self.config.to_dict(), f)

    def __enter__(self) -> "ConfigManager":
        self.load()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: types.TracebackType | None,
    ) -> bool | None:
        if exc_type is None:
            # Clean exit
            if self.save_on_exit:
                self.save()
        return None
