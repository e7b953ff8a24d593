"""
Command line for CSF Studio.

    csfstudio -i ra2md.csf -o ra2md.ini --to-ini
    csfstudio -i ra2md.ini -o ra2md.csf --to-csf
    csfstudio -i base.csf,mod.csf -o merged.csf --merge
    csfstudio -i full.yaml -i done.yaml -o todo.yaml --subtract

Conversions take one input and write the format named by the flag.
Merge and subtract take two or more inputs of the same format and write the
format given by the output file's extension.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from . import __version__
from .combine import merge, subtract
from .converter import FileFormat, detect_format, load_file, save_file
from .errors import CsfError, InsufficientInputsError, InvalidArgumentError
from .log import setup_logging
from .model import CsfFile, CsfFileOptions


logger = logging.getLogger("csfstudio.cli")

COMBINE_OPERATIONS = {
    "merge": merge,
    "subtract": subtract,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="csfstudio",
        description="CSF/INI/JSON/YAML/LLF converter for Red Alert 2 stringtables.",
        epilog=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-i", "--input", action="append", required=True, metavar="FILE[,FILE...]",
        help="Input file path(s), comma-separated; may be repeated",
    )
    parser.add_argument("-o", "--output", required=True, metavar="FILE", help="Output file path")

    operations = parser.add_mutually_exclusive_group(required=True)
    for file_format in FileFormat:
        operations.add_argument(
            f"--to-{file_format.value}", dest="operation", action="store_const",
            const=file_format.value, help=f"Convert to {file_format.value.upper()} format",
        )
    operations.add_argument(
        "--merge", dest="operation", action="store_const", const="merge",
        help="Merge multiple files (later files win on duplicate labels)",
    )
    operations.add_argument(
        "--subtract", dest="operation", action="store_const", const="subtract",
        help="Remove from the first file every label present in the other files",
    )

    parser.add_argument(
        "--encoding1252-read-workaround", action="store_true",
        help="Remap Windows-1252 control characters when reading .csf files",
    )
    parser.add_argument(
        "--encoding1252-write-workaround", action="store_true",
        help="Apply the reverse Windows-1252 remap when writing .csf files",
    )
    parser.add_argument(
        "--log-level", default="INFO", type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def split_inputs(values: Sequence[str]) -> List[str]:
    """Flatten repeated, comma-separated -i values into a list of paths."""
    paths = []
    for value in values:
        paths.extend(part.strip() for part in value.split(",") if part.strip())
    return paths


def convert(input_path: str, output_path: str, target: FileFormat, options: CsfFileOptions) -> CsfFile:
    """Convert one file into `target` format. Returns the loaded stringtable."""
    csf = load_file(input_path, options)
    logger.debug("Loaded %d labels from %s", len(csf), input_path)
    save_file(csf, output_path, target)
    return csf


def combine_files(
    input_paths: Sequence[str],
    output_path: str,
    operation: Callable[[Sequence[CsfFile]], CsfFile],
    options: CsfFileOptions,
) -> CsfFile:
    """
    Load every input (in order), combine them and save the result.

    Raises:
        InsufficientInputsError: If fewer than 2 inputs are given
        InvalidArgumentError: If the inputs are not all the same format
    """
    if len(input_paths) < 2:
        raise InsufficientInputsError("Need at least 2 files for merge/subtract operations.")
    formats = {detect_format(path) for path in input_paths}
    if len(formats) > 1:
        raise InvalidArgumentError("All files must be of the same type.")

    files = []
    for path in input_paths:
        csf = load_file(path, options)
        logger.debug("Loaded %d labels from %s", len(csf), path)
        files.append(csf)

    result = operation(files)
    result.options = options
    save_file(result, output_path)
    logger.info("Wrote %d labels to %s", len(result), output_path)
    return result


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    inputs = split_inputs(args.input)
    options = CsfFileOptions(
        encoding1252_read_workaround=args.encoding1252_read_workaround,
        encoding1252_write_workaround=args.encoding1252_write_workaround,
    )

    try:
        if args.operation in COMBINE_OPERATIONS:
            combine_files(inputs, args.output, COMBINE_OPERATIONS[args.operation], options)
        else:
            if len(inputs) != 1:
                raise InvalidArgumentError("Conversion takes exactly one input file.")
            convert(inputs[0], args.output, FileFormat(args.operation), options)
    except (CsfError, OSError) as exc:
        logger.error("Error: %s", exc)
        return 1

    logger.info("Operation completed successfully.")
    return 0


def run() -> None:  # pragma: no cover
    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover
    run()
