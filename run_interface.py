#!/usr/bin/env python3
"""
Swift module interface generator.

Runs SourceKitten over a Swift module, keeps the declarations at or above a
minimum access level and writes them, formatted, to ``<module>.swift``.

Usage:
    python run_interface.py generate --spm-module Yams
    python run_interface.py generate --module-name Mini --min-acl open -- -workspace Mini.xcworkspace -scheme Mini
    python run_interface.py generate --input-json docs.json --module-name Yams --no-format
    python run_interface.py clean Yams
    python run_interface.py version
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from typing import Optional, Sequence

from core.errors import ModuleInterfaceError
from core.settings import ToolSettings, load_settings
from core.structured_logging import configure_structured_logging, module_scope, set_run_id
from interface.access import AccessLevel
from interface.config import DEFAULT_SETTINGS, TOOL_NAME, TOOL_VERSION
from interface.formatter import SwiftFormatter, identity_formatter
from interface.generator import GenerateOptions, generate_interface, remove_module_interface
from interface.producer import SourceKittenProducer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser with its three subcommands."""
    parser = argparse.ArgumentParser(
        prog="moduleinterface",
        description="Generate the public interface of a Swift module.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  moduleinterface generate --spm-module Yams\n"
            "  moduleinterface generate --module-name Mini -- -scheme Mini\n"
            "  moduleinterface clean Yams\n"
        ),
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging.",
    )
    # Subcommand -v must not reset a top-level -v to False.
    verbosity = argparse.ArgumentParser(add_help=False)
    verbosity.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command")

    generate = subparsers.add_parser(
        "generate",
        parents=[verbosity],
        help="Generates the Swift Module Interface.",
    )
    generate.add_argument(
        "--spm-module",
        default=None,
        help="Generate documentation for Swift Package Manager module.",
    )
    generate.add_argument(
        "--module-name",
        default=None,
        help="Generate documentation for a Swift module.",
    )
    generate.add_argument(
        "--input-folder",
        default=None,
        help="Path to the input directory (defaults to the current directory).",
    )
    generate.add_argument(
        "--input-json",
        default=None,
        help="Read a saved 'sourcekitten doc' JSON file instead of running sourcekitten.",
    )
    generate.add_argument(
        "--output-folder",
        default=None,
        help=f"Output directory (defaults to {DEFAULT_SETTINGS.output_folder}).",
    )
    generate.add_argument(
        "--min-acl",
        default=None,
        help=(
            "The minimum access level to generate documentation. "
            f"Defaults to {DEFAULT_SETTINGS.min_acl}."
        ),
    )
    generate.add_argument(
        "-c", "--clean",
        action="store_true",
        default=False,
        help="Delete the existing interface before generating documentation.",
    )
    generate.add_argument(
        "--skip-unbalanced",
        action="store_true",
        default=None,
        help="Drop declarations whose brackets are unbalanced.",
    )
    generate.add_argument(
        "--no-format",
        action="store_true",
        default=False,
        help="Write the interface without running swiftformat.",
    )
    generate.add_argument(
        "--config",
        default=None,
        help="YAML or JSON settings file.",
    )
    generate.add_argument(
        "xcode_arguments",
        nargs="*",
        default=[],
        help="List of arguments to pass to xcodebuild (after '--').",
    )

    clean = subparsers.add_parser(
        "clean",
        parents=[verbosity],
        help="Deletes the module's interface and quits.",
    )
    clean.add_argument(
        "--output-folder",
        default=None,
        help=f"Output directory (defaults to {DEFAULT_SETTINGS.output_folder}).",
    )
    clean.add_argument(
        "--config",
        default=None,
        help="YAML or JSON settings file.",
    )
    clean.add_argument("module", help="The module's interface name to clean.")

    subparsers.add_parser(
        "version",
        help=f"Display the current version of {TOOL_NAME}",
    )
    return parser


def _generate_options(args: argparse.Namespace, settings: ToolSettings) -> GenerateOptions:
    arguments = list(args.xcode_arguments)
    if arguments and arguments[0] == "--":
        arguments = arguments[1:]

    skip_unbalanced = settings.skip_unbalanced
    if args.skip_unbalanced is not None:
        skip_unbalanced = args.skip_unbalanced

    options = GenerateOptions(
        output_folder=args.output_folder if args.output_folder is not None else settings.output_folder,
        minimum_access_level=AccessLevel.from_name(args.min_acl or settings.min_acl),
        clean=args.clean,
        spm_module=args.spm_module,
        module_name=args.module_name,
        input_json=args.input_json,
        compiler_arguments=tuple(arguments),
        skip_unbalanced=skip_unbalanced,
    )
    if args.input_folder is not None:
        options = dataclasses.replace(options, input_folder=args.input_folder)
    return options


def run_generate(args: argparse.Namespace) -> None:
    settings = load_settings(args.config, DEFAULT_SETTINGS)
    options = _generate_options(args, settings)
    producer = SourceKittenProducer(
        executable=settings.sourcekitten_path,
        timeout_s=settings.timeout_s,
    )
    if args.no_format:
        formatter = identity_formatter
    else:
        formatter = SwiftFormatter(
            executable=settings.swiftformat_path,
            arguments=settings.swiftformat_args,
            timeout_s=settings.timeout_s,
        )

    logger.info("Generating Module Interface...")
    with module_scope(options.target_module):
        result = generate_interface(options, producer=producer, formatter=formatter)
    logger.info(
        "Done: %s (%d top-level declarations)", result.output_path, result.block_count
    )


def run_clean(args: argparse.Namespace) -> None:
    settings = load_settings(args.config, DEFAULT_SETTINGS)
    output_folder = args.output_folder if args.output_folder is not None else settings.output_folder
    with module_scope(args.module):
        remove_module_interface(output_folder, args.module)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_structured_logging(level=logging.DEBUG if args.verbose else logging.INFO)
    set_run_id()

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "version":
        print(f"{TOOL_NAME} v{TOOL_VERSION}")
        return 0

    try:
        if args.command == "generate":
            run_generate(args)
        else:
            run_clean(args)
    except ModuleInterfaceError as exc:
        logger.error("%s", exc)
        return 1
    except Exception as exc:
        logger.error("%s failed: %s", args.command, exc, exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
