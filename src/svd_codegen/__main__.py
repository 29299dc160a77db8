#
# Copyright (c) 2024 Nordic Semiconductor ASA
#
# SPDX-License-Identifier: Apache-2.0
#

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from textwrap import dedent
from typing import Optional, Sequence, TextIO

import svd_codegen
from svd_codegen.errors import CodegenError
from svd_codegen.layout import gen_peripheral
from svd_codegen.options import Options
from svd_codegen.parsing import parse
from svd_codegen.printer import RustPrinter

log = logging.getLogger("svd_codegen")


def cli(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        prog="svd-codegen",
        description=dedent(
            """\
            Generate Rust register maps (structs) from SVD files.

            Without a PATTERN, the base address of every peripheral in the device is printed.
            With a PATTERN, code is generated for the first peripheral whose name contains it.
            """
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument(
        "-i",
        "--input",
        metavar="FILE",
        required=True,
        type=Path,
        help="Input SVD file.",
    )
    parser.add_argument(
        "pattern",
        metavar="PATTERN",
        nargs="?",
        help="Pattern used to select a single peripheral (case-insensitive substring).",
    )
    parser.add_argument(
        "-o",
        "--output-file",
        type=Path,
        help="File to write the output to. If not given, output is written to stdout.",
    )
    parser.add_argument(
        "--options",
        type=json.loads,
        help=(
            "JSON object used to override fields in the Options object to customize code "
            'generation, e.g. \'{"sort_registers": true}\'.'
        ),
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Minimum level of diagnostics written to stderr.",
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Print diagnostics without level and logger name."
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {svd_codegen.__version__}"
    )

    args = parser.parse_args(argv)

    _setup_logging(args.log_level, args.quiet)

    options = Options()
    if args.options is not None:
        if not isinstance(args.options, dict):
            parser.error("invalid --options: expected a JSON object")
        try:
            options = options.with_overrides(args.options)
        except ValueError as e:
            parser.error(f"invalid --options: {e}")

    try:
        if args.output_file:
            with open(args.output_file, "w", encoding="utf-8") as output_file:
                cmd_generate(args.input, args.pattern, options, output_file)
        else:
            cmd_generate(args.input, args.pattern, options, sys.stdout)
    except (CodegenError, FileNotFoundError) as e:
        if e.__cause__ is not None:
            log.error("%s: %s", e, e.__cause__)
        else:
            log.error("%s", e)
        sys.exit(1)

    sys.exit(0)


def cmd_generate(
    svd_file: Path, pattern: Optional[str], options: Options, output_file: TextIO
) -> None:
    """Write either the peripheral base addresses or the code for one peripheral."""
    device = parse(svd_file)
    printer = RustPrinter()

    if pattern is None:
        for peripheral in device.peripherals:
            print(printer.render_base_address(peripheral), file=output_file)
        return

    peripheral = device.find_peripheral(pattern)
    if peripheral is None:
        raise CodegenError(f"No peripheral in {device.name} matches '{pattern}'")

    log.info("Generating %s", peripheral)
    fragments = gen_peripheral(peripheral, device.defaults, options)
    print(printer.render_all(fragments), file=output_file)


def _setup_logging(level: str, quiet: bool) -> None:
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Generated code goes to stdout, keep diagnostics separate
    handler = logging.StreamHandler(sys.stderr)
    fmt = "%(message)s" if quiet else "[%(levelname)s] %(name)s: %(message)s"
    handler.setFormatter(logging.Formatter(fmt))
    root.addHandler(handler)


# Entry point when running with python -m svd_codegen
if __name__ == "__main__":
    cli()
