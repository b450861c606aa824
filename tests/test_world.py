from pathlib import Path

import pytest

from leveldat import config, world
from leveldat.errors import ReadError
from leveldat.types import Byte, Compound, Int32, String


def test_level_dat_path(world_dir: Path) -> None:
    assert world.level_dat_path(world_dir) == world_dir / "level.dat"


def test_level_dat_path_missing_dir(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="World directory does not exist"):
        world.level_dat_path(tmp_path / "nope")


def test_level_dat_path_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="Missing level.dat"):
        world.level_dat_path(tmp_path)


def test_load_by_path(world_dir: Path, tmp_path: Path) -> None:
    reader = world.WorldReader(config_dir=tmp_path / "cfg")
    doc = reader.load(str(world_dir))
    assert doc.format_version == 10
    assert len(doc.tags) == 1
    root = doc.tags[0]
    assert root.key == ""
    assert isinstance(root.value, Compound)
    assert root.value.keys() == ["LevelName", "GameType", "abilities"]
    assert doc.find("LevelName") == String("My World")
    assert doc.find("GameType") == Int32(1)
    assert doc.find("abilities/flying") == Byte(0)


def test_register_and_load_by_name(world_dir: Path, tmp_path: Path) -> None:
    config_dir = tmp_path / "cfg"
    reader = world.WorldReader(config_dir=config_dir)
    reader.register("mine", world_dir)
    assert reader.world_exists("mine")

    # A fresh reader sees the saved name
    reader = world.WorldReader(config_dir=config_dir)
    assert reader.resolve("mine") == world_dir / "level.dat"
    assert reader.load("mine").find("LevelName") == String("My World")


def test_register_bad_path(tmp_path: Path) -> None:
    config_dir = tmp_path / "cfg"
    reader = world.WorldReader(config_dir=config_dir)
    with pytest.raises(ValueError):
        reader.register("missing", tmp_path / "missing")
    assert not (config_dir / config.CONFIG_FILENAME).exists()


def test_load_uses_config_policy(world_dir: Path, tmp_path: Path) -> None:
    # The test world has no trailing END, which only strict mode rejects
    config_dir = tmp_path / "cfg"
    with config.ConfigManager(config_dir, save=True) as cm:
        cm.config.decoder.strict = True

    reader = world.WorldReader(config_dir=config_dir)
    with pytest.raises(ReadError):
        reader.load(str(world_dir))
    # Explicit argument overrides the config
    assert len(reader.load(str(world_dir), strict=False).tags) == 1


def test_load_custom_level_filename(world_dir: Path, tmp_path: Path) -> None:
    (world_dir / "level.dat").rename(world_dir / "level.dat_old")
    config_dir = tmp_path / "cfg"
    with config.ConfigManager(config_dir, save=True) as cm:
        cm.config.level_filename = "level.dat_old"

    reader = world.WorldReader(config_dir=config_dir)
    assert reader.load(str(world_dir)).find("GameType") == Int32(1)
