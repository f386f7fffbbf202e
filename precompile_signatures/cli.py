"""CLI entrypoints for precompile_signatures."""

from __future__ import annotations

import argparse
import dataclasses
import importlib
import sys
from pathlib import Path
from types import ModuleType
from typing import List

from .config import Config, ConfigError, load_config
from .logging import configure_logging, get_logger, log_exception
from .orchestrator import Orchestrator
from .writer import serialize


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    kwargs["default"] = argparse.SUPPRESS if suppress_default else False
    parser.add_argument("-v", "--verbose", **kwargs)


def _add_config_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .precompile.yml file or the directory holding it.",
    )
    parser.add_argument(
        "--no-submodules",
        action="store_true",
        help="Only scan the named modules, not their sub-modules.",
    )
    parser.add_argument(
        "--no-split-unions",
        action="store_true",
        help="Drop union-typed signatures instead of expanding them.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="precompile-signatures",
        description="Generate precompile directives from annotated module signatures.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser(
        "list",
        help="Print the directives for one or more modules.",
    )
    _add_verbose_option(list_parser, suppress_default=True)
    _add_config_options(list_parser)
    list_parser.add_argument("modules", nargs="+", help="Dotted names of modules to import and scan.")

    write_parser = subparsers.add_parser(
        "write",
        help="Write the directives for one or more modules to a file.",
    )
    _add_verbose_option(write_parser, suppress_default=True)
    _add_config_options(write_parser)
    write_parser.add_argument("modules", nargs="+", help="Dotted names of modules to import and scan.")
    write_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        required=True,
        help="Destination file; existing content is replaced.",
    )

    generate_parser = subparsers.add_parser(
        "generate",
        help="Write the directives for a module to its scratch location and print the path.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_config_options(generate_parser)
    generate_parser.add_argument("module", help="Dotted name of the module to import and scan.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for precompile_signatures."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))
    logger = get_logger("cli")

    try:
        config = _resolve_config(args)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    orchestrator = Orchestrator(config)

    if args.command == "list":
        modules = _import_modules(parser, args.modules)
        for directive in orchestrator.precompilables(modules):
            print(serialize(directive))
    elif args.command == "write":
        modules = _import_modules(parser, args.modules)
        try:
            orchestrator.write_directives(args.output, modules)
        except OSError as exc:
            log_exception(logger, "Writing directives failed", exc)
            parser.exit(1, f"Cannot write {args.output}: {exc}\n")
        print(f"Directives written to {_relativize(args.output)}")
    elif args.command == "generate":
        (module,) = _import_modules(parser, [args.module])
        path = orchestrator.precompile_directives(module)
        print(path)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _resolve_config(args: argparse.Namespace) -> Config:
    config = load_config(args.config) if args.config is not None else Config()
    changes: dict[str, object] = {}
    if args.no_submodules:
        changes["include_submodules"] = False
    if args.no_split_unions:
        changes["split_unions"] = False
    return dataclasses.replace(config, **changes) if changes else config


def _import_modules(parser: argparse.ArgumentParser, names: List[str]) -> List[ModuleType]:
    modules: List[ModuleType] = []
    for name in names:
        try:
            modules.append(importlib.import_module(name))
        except ImportError as exc:
            parser.exit(1, f"Cannot import module '{name}': {exc}\n")
    return modules


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
