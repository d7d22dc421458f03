# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the SchemaGen command-line interface."""

import argparse
import logging
import os
import sys
from pathlib import Path

from yachalk import chalk

from schemagen.catalog.reflect import CatalogError
from schemagen.config.settings import (
    CONFIG_FILE_NAME,
    DEFAULT_OUTPUT_DIRECTORY,
    ConfigError,
    ConfigFile,
    GeneratorConfig,
    load_config,
)
from schemagen.generator.build import GenerationError, GenerationReport, run
from schemagen.generator.output import OutputError

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the SchemaGen CLI."""
    parser = argparse.ArgumentParser(
        prog="schemagen",
        description="SchemaGen - JSON Schema generation for Python data types",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress details to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate one JSON Schema per type of a package",
        description=(
            "Scan a package for dataclasses, pydantic models, TypedDicts and enums "
            "and write one JSON Schema document per type."
        ),
    )
    generate_parser.add_argument(
        "root_package",
        nargs="?",
        metavar="ROOT_PACKAGE",
        help="Dotted name of the package to scan (default: 'root-package' from the config file)",
    )
    generate_parser.add_argument(
        "--classpath",
        action="append",
        default=[],
        metavar="PATH",
        help=(
            "Import root searched for the package; may be repeated or contain "
            f"several paths separated by '{os.pathsep}'"
        ),
    )
    generate_parser.add_argument(
        "--output",
        metavar="DIR",
        help=f"Directory the schemas are written to (default: {DEFAULT_OUTPUT_DIRECTORY})",
    )
    generate_parser.add_argument(
        "--config",
        metavar="FILE",
        help=f"Configuration file (default: {CONFIG_FILE_NAME} in the current directory, if present)",
    )
    generate_parser.add_argument(
        "--fail-fast",
        action="store_true",
        default=None,
        help="Stop at the first type whose schema cannot be generated",
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "generate":
        return _cmd_generate(args)
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    if args.config is not None:
        config_path = Path(args.config)
    else:
        config_path = Path.cwd() / CONFIG_FILE_NAME

    file_config = ConfigFile()
    if args.config is not None or config_path.exists():
        try:
            file_config = load_config(config_path)
        except ConfigError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    config = _resolve_config(args, file_config, config_path.resolve().parent)
    if config is None:
        print(
            "Error: no root package given. Pass ROOT_PACKAGE or set 'root-package' in the config file.",
            file=sys.stderr,
        )
        return 1

    print(f"Generating schemas for '{config.root_package}' into '{config.output_directory}'...")
    try:
        report = run(config)
    except (CatalogError, OutputError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except GenerationError as exc:
        report = exc.report

    return _print_report(report)


def _resolve_config(args: argparse.Namespace, file_config: ConfigFile, base_dir: Path) -> GeneratorConfig | None:
    """Layer command line values over the config file.

    Relative paths from the config file are taken relative to the file's
    directory; relative paths from the command line are left to the current
    directory.
    """
    root_package = args.root_package or file_config.root_package
    if not root_package:
        return None

    if args.classpath:
        classpath = [entry for value in args.classpath for entry in value.split(os.pathsep) if entry]
    else:
        classpath = [str(base_dir / entry) for entry in file_config.classpath or []]

    if args.output is not None:
        output_directory = args.output
    elif file_config.output_directory is not None:
        output_directory = str(base_dir / file_config.output_directory)
    else:
        output_directory = DEFAULT_OUTPUT_DIRECTORY

    if args.fail_fast is not None:
        fail_fast = args.fail_fast
    else:
        fail_fast = bool(file_config.fail_fast)

    return GeneratorConfig(
        root_package=root_package,
        output_directory=output_directory,
        classpath=classpath,
        fail_fast=fail_fast,
    )


def _print_report(report: GenerationReport) -> int:
    """Print the outcome of a run and return the exit code."""
    for failure in report.failures:
        print(f"Error: {failure.qualified_name}: {failure.message}", file=sys.stderr)

    written = len(report.written)
    if report.ok:
        print(chalk.green(f"{written} schema(s) written."))
        return 0

    print(chalk.red(f"{written} schema(s) written, {len(report.failures)} failed."), file=sys.stderr)
    return 1
