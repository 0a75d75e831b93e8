"""Command-line entry point."""

from __future__ import annotations

import sys
from pathlib import Path

from .backend.channels import generate_channels
from .backend.writer import load_template, render_file, write_units
from .config import GeneratorConfig
from .errors import GenerationError
from .frontend.load import load_file
from .frontend.protocol import load_protocol_file
from .generator import generate
from .ir import Unit

MODES: list[str] = ["api", "channels"]

USAGE: str = """\
csapi [OPTIONS] INPUT

Generate C# declarations from an API description (JSON or YAML) or, with
--mode channels, from a protocol description (YAML).

Options:
  --mode MODE         What INPUT describes: api (default), channels
  -o, --output DIR    Write one .cs file per declaration into DIR
                      (default: print all declarations to stdout)
  --width N           Maximum documentation column width (default: 120)
  --strict-unions     Reject unions that have no exact C# lowering
  --namespace NS      Namespace for generated files
  --template FILE     File template with a [CONTENT] placeholder
  --verbose           Report progress on stderr
  --help              Show this help message
"""


class Options:
    """Parsed command-line options."""

    def __init__(self) -> None:
        self.mode: str = "api"
        self.input_file: str | None = None
        self.output_dir: str | None = None
        self.width: int | None = None
        self.strict_unions: bool = False
        self.namespace: str | None = None
        self.template_file: str | None = None
        self.verbose: bool = False


def _value(args: list[str], i: int) -> str | None:
    if i + 1 >= len(args):
        print("error: " + args[i] + " requires an argument", file=sys.stderr)
        return None
    return args[i + 1]


def parse_args(args: list[str]) -> tuple[Options | None, int]:
    """Parse argv. Returns (options, exit_code); options is None when done."""
    opts = Options()
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            return (None, 0)
        elif arg in ("--mode", "-o", "--output", "--width", "--namespace", "--template"):
            value = _value(args, i)
            if value is None:
                return (None, 2)
            if arg == "--mode":
                if value not in MODES:
                    print("error: unknown mode '" + value + "'", file=sys.stderr)
                    return (None, 2)
                opts.mode = value
            elif arg == "--width":
                if not value.isdigit() or int(value) < 20:
                    print("error: --width needs a number of at least 20", file=sys.stderr)
                    return (None, 2)
                opts.width = int(value)
            elif arg == "--namespace":
                opts.namespace = value
            elif arg == "--template":
                opts.template_file = value
            else:
                opts.output_dir = value
            i += 2
        elif arg == "--strict-unions":
            opts.strict_unions = True
            i += 1
        elif arg == "--verbose":
            opts.verbose = True
            i += 1
        elif arg.startswith("-"):
            print("error: unknown flag '" + arg + "'", file=sys.stderr)
            return (None, 2)
        else:
            if opts.input_file is not None:
                print("error: unexpected argument '" + arg + "'", file=sys.stderr)
                return (None, 2)
            opts.input_file = arg
            i += 1
    if opts.input_file is None:
        print("error: missing input file", file=sys.stderr)
        return (None, 2)
    return (opts, 0)


def build_config(opts: Options) -> GeneratorConfig:
    config = GeneratorConfig(strict_unions=opts.strict_unions, tool_version="csapi " + opts.mode)
    if opts.width is not None:
        config.max_column_width = opts.width
    if opts.namespace is not None:
        config.namespace = opts.namespace
    if opts.template_file is not None:
        config.template = load_template(opts.template_file)
    return config


def _log(message: str) -> None:
    print(message, file=sys.stderr)


def _print_units(units: list[Unit], config: GeneratorConfig) -> None:
    for i, unit in enumerate(units):
        if i > 0:
            print()
        print("// " + unit.name + ".cs")
        print(render_file(unit, config), end="")


def run(opts: Options) -> int:
    """Run one generation. Returns the exit code."""
    log = _log if opts.verbose else None
    input_file = opts.input_file or ""
    try:
        config = build_config(opts)
    except (OSError, ValueError) as e:
        print("error: " + str(e), file=sys.stderr)
        return 2
    try:
        if opts.mode == "channels":
            groups = generate_channels(load_protocol_file(input_file), config).groups
        else:
            groups = {"": generate(load_file(input_file), config, log).units}
    except GenerationError as e:
        print(str(e), file=sys.stderr)
        return 1
    if opts.output_dir is None:
        _print_units([u for units in groups.values() for u in units], config)
        return 0
    try:
        for group, units in groups.items():
            directory = Path(opts.output_dir) / group if group else Path(opts.output_dir)
            written = write_units(units, directory, config)
            if log is not None:
                for path in written:
                    log("Wrote " + str(path))
    except OSError as e:
        print("error: cannot write '" + opts.output_dir + "': " + str(e), file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    opts, code = parse_args(argv if argv is not None else sys.argv[1:])
    if opts is None:
        return code
    return run(opts)
