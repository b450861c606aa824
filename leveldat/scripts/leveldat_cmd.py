import argparse
import logging
import sys
import textwrap
from pathlib import Path
from typing import Any, Protocol

from leveldat import config, decoder, export, util, world
from leveldat.types import Compound, Document, List

LOG = logging.getLogger(__name__)


def _add_config_dir_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config-dir",
        "-c",
        type=str,
        default=config.DEFAULT_CONFIG_DIR,
        help=f"leveldat config directory (default: {config.DEFAULT_CONFIG_DIR})",
    )


def _add_world_args(parser: argparse.ArgumentParser) -> None:
    """world positional plus decoder overrides"""
    parser.add_argument(
        "world",
        type=str,
        help="Registered world name or world directory containing level.dat",
    )
    _add_config_dir_arg(parser)
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail on any decode error instead of keeping the tags read so far",
    )
    parser.add_argument(
        "--max-depth",
        type=util.positive_int,
        help=f"Max List/Compound nesting (default from config: {decoder.DEFAULT_MAX_DEPTH})",
    )


def _load(args: argparse.Namespace) -> Document:
    reader = world.WorldReader(config_dir=args.config_dir)
    return reader.load(args.world, strict=args.strict, max_depth=args.max_depth)


class Cmd(Protocol):
    CMD: str

    def cmd(self) -> str:
        return self.CMD

    def run(self, args: argparse.Namespace) -> None: ...
    def add(self, parent_subparsers: "argparse._SubParsersAction[Any]") -> None: ...


class ShowCmd(Cmd):
    CMD = "show"

    # Unfortunately, argparse is not set up for type hints
    def add(self, parent_subparsers: "argparse._SubParsersAction[Any]") -> None:
        show_parser = parent_subparsers.add_parser(
            self.CMD, help="Print the header and tag tree of a world's level.dat"
        )
        _add_world_args(show_parser)

    def run(self, args: argparse.Namespace) -> None:
        doc = _load(args)
        print(export.format_document(doc))


class DumpCmd(Cmd):
    CMD = "dump"

    def add(self, parent_subparsers: "argparse._SubParsersAction[Any]") -> None:
        dump_parser = parent_subparsers.add_parser(
            self.CMD,
            help="Write the decoded tree as CBOR",
            description=textwrap.dedent(
                """
                Writes the decoded level.dat as CBOR. Each tag is stored as
                {"type", "key", "value"} so the types survive the export.
                """
            ),
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        _add_world_args(dump_parser)
        dump_parser.add_argument(
            "--output",
            "-o",
            type=str,
            required=True,
            help="Output file, or - for stdout",
        )

    def run(self, args: argparse.Namespace) -> None:
        data = export.encode_cbor(_load(args))
        if args.output == "-":
            sys.stdout.buffer.write(data)
            sys.stdout.buffer.flush()
        else:
            Path(args.output).expanduser().write_bytes(data)
            LOG.info(f"Wrote {len(data)} bytes to {args.output}")


class GetCmd(Cmd):
    CMD = "get"

    def add(self, parent_subparsers: "argparse._SubParsersAction[Any]") -> None:
        get_parser = parent_subparsers.add_parser(
            self.CMD, help="Print one value by key path, e.g. Data/GameRules/keepInventory"
        )
        _add_world_args(get_parser)
        get_parser.add_argument(
            "path", type=str, help="Slash separated key path through compounds"
        )

    def run(self, args: argparse.Namespace) -> None:
        value = _load(args).find(args.path)
        if value is None:
            print(f"Not found: {args.path}")
            sys.exit(1)
        if isinstance(value, (Compound, List)):
            print(export.to_plain(value))
        else:
            print(value.value)


class WorldCmd(Cmd):
    CMD = "world"

    def run(self, args: argparse.Namespace) -> None:
        reader = world.WorldReader(config_dir=args.config_dir)
        if args.world_command == "add":
            if reader.world_exists(args.world_name) and not args.force:
                print(f"World already registered: {args.world_name} (use --force)")
                sys.exit(1)
            reader.register(args.world_name, args.world_dir)
            print(f"Added world {args.world_name}: {args.world_dir}")
        elif args.world_command == "ls":
            for name, world_cfg in reader.config.worlds.items():
                print(f"{name}: {world_cfg.path}")

    def add(self, parent_subparsers: "argparse._SubParsersAction[Any]") -> None:
        """Add the world command subparser"""
        world_parser = parent_subparsers.add_parser(
            self.CMD, help="Named world management"
        )
        world_subparsers = world_parser.add_subparsers(
            dest="world_command", metavar="world-command", required=True
        )

        add_parser = world_subparsers.add_parser("add", help="Register a world name")
        add_parser.add_argument(
            "world_name",
            metavar="world-name",
            type=str,
            help="Name to use for the world",
        )
        add_parser.add_argument(
            "world_dir",
            metavar="world-dir",
            type=str,
            help="World directory containing level.dat",
        )
        add_parser.add_argument(
            "--force",
            "-f",
            action="store_true",
            help="Replace an existing world with the same name",
        )
        _add_config_dir_arg(add_parser)

        ls_parser = world_subparsers.add_parser("ls", help="List registered worlds")
        _add_config_dir_arg(ls_parser)


class ConfigCmd(Cmd):
    CMD = "config"

    def add(self, parent_subparsers: "argparse._SubParsersAction[Any]") -> None:
        config_parser = parent_subparsers.add_parser(
            self.CMD, help="Show the current config"
        )
        _add_config_dir_arg(config_parser)

    def run(self, args: argparse.Namespace) -> None:
        config_dir = Path(args.config_dir).expanduser()
        print(f"Showing config for: {config_dir}\n")
        with config.ConfigManager(config_dir) as cm:
            print(cm.pformat())


def base_parse_args() -> tuple[argparse.Namespace, list[Any]]:
    parser = argparse.ArgumentParser(description="Bedrock level.dat reader")
    util.logging_add_arg(parser)

    subparsers = parser.add_subparsers(dest="command", metavar="command", required=True)

    cmd_objects: list[Any] = [
        ShowCmd(),
        DumpCmd(),
        GetCmd(),
        WorldCmd(),
        ConfigCmd(),
    ]

    for cmd in cmd_objects:
        cmd.add(subparsers)

    args = parser.parse_args()
    util.logging_init(args=args)
    return args, cmd_objects


def base_run(args: argparse.Namespace, cmd_objects: list[Any]) -> None:
    for cmd in cmd_objects:
        if args.command == cmd.cmd():
            cmd.run(args)
            return
    print(f"Unknown command: {args.command}")


def main() -> None:
    args, cmd_objects = base_parse_args()
    base_run(args, cmd_objects)


if __name__ == "__main__":
    main()
