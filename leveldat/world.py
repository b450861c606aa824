from pathlib import Path

from . import config, decoder
from .types import Document


def level_dat_path(
    world_dir: Path | str, filename: str = config.DEFAULT_LEVEL_FILENAME
) -> Path:
    """Return the level.dat path for a world directory"""
    world_dir = Path(world_dir).expanduser()
    if not world_dir.is_dir():
        raise ValueError(f"World directory does not exist: {world_dir}")
    path = world_dir / filename
    if not path.is_file():
        raise ValueError(f"Missing {filename} in world: {world_dir}")
    return path


class WorldReader:
    """Loads level.dat files using the decoder settings in leveldat.yaml"""

    def __init__(
        self,
        config_dir: Path | str | None = None,
    ) -> None:
        self.config_dir = Path(config_dir or config.DEFAULT_CONFIG_DIR).expanduser()
        with config.ConfigManager(self.config_dir) as cm:
            self.config = cm.config

    def resolve(self, world: str) -> Path:
        """world is either a registered world name or a directory"""
        world_cfg = self.config.worlds.get(world)
        world_dir = Path(world_cfg.path) if world_cfg else Path(world)
        return level_dat_path(world_dir, self.config.level_filename)

    def load(
        self,
        world: str,
        strict: bool | None = None,
        max_depth: int | None = None,
    ) -> Document:
        """Decode the world's level.dat. Arguments that are None come from the config."""
        path = self.resolve(world)
        if strict is None:
            strict = self.config.decoder.strict
        if max_depth is None:
            max_depth = self.config.decoder.max_depth
        with open(path, "rb") as f:
            return decoder.read_document(f, strict=strict, max_depth=max_depth)

    def register(self, name: config.WorldName, world_dir: Path | str) -> None:
        """Save a named world in the config"""
        level_dat_path(world_dir, self.config.level_filename)
        with config.ConfigManager(self.config_dir, save=True) as cm:
            cm.config.worlds[name] = config.WorldConfig(path=str(world_dir))
            self.config = cm.config

    def world_exists(self, name: config.WorldName) -> bool:
        return name in self.config.worlds
