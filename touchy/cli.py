import argparse
import functools
import operator
import platform
import sys
from pathlib import Path
from typing import List, Optional

from touchy import __version__
from touchy.core.applier import TouchOutcome
from touchy.core.config import FieldSelection, TouchConfig
from touchy.core.errors import ErrorKind, TouchError
from touchy.core.toucher import Toucher
from touchy.utils.logger import get_logger


PROG_NAME = "touch"
DOCS_URL = "https://github.com/xv/touch-cmd-windows"


# ============================================================================
# Argument Parsing
# ============================================================================


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser."""
    parser = argparse.ArgumentParser(
        prog=PROG_NAME,
        usage="%(prog)s [options] file [...]",
        description="Update the timestamps of files, creating them if they do not exist.",
        epilog=f"Refer to the detailed documentation at: {DOCS_URL}",
    )
    parser.add_argument(
        "-A",
        dest="offset",
        metavar="OFFSET",
        help="Adjust the timestamp by an offset in the format [-]HH[mm][ss]. A negative offset moves time backward.",
    )
    parser.add_argument(
        "-a",
        dest="fields",
        action="append_const",
        const=FieldSelection.LAST_ACCESS,
        help="Change last access time only.",
    )
    parser.add_argument(
        "-C",
        dest="fields",
        action="append_const",
        const=FieldSelection.CREATION,
        help="Change creation time only.",
    )
    parser.add_argument("-c", dest="no_create", action="store_true", help="Do not create files.")
    parser.add_argument("-d", dest="no_dereference", action="store_true", help="Do not follow symbolic links.")
    parser.add_argument(
        "-m",
        dest="fields",
        action="append_const",
        const=FieldSelection.LAST_WRITE,
        help="Change last modified time only.",
    )
    parser.add_argument(
        "-r", dest="reference", metavar="FILE", type=Path, help="Set the timestamp from a reference file."
    )
    parser.add_argument(
        "-t",
        dest="stamp",
        metavar="STAMP",
        help="Set a timestamp in the format yyyyMMddHHmm[ss][Z]. Append 'Z' to read the timestamp as UTC.",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__} ({platform.machine() or 'unknown'})",
        help="Display version information and exit.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log the resolved timestamp and every file written.")
    parser.add_argument("--log-dir", metavar="DIR", help="Also write a detailed log file to DIR.")
    parser.add_argument("files", nargs="*", metavar="file", help="Files to touch.")
    return parser


def build_config(args: argparse.Namespace) -> TouchConfig:
    """Build the immutable touch configuration from parsed arguments."""
    fields = functools.reduce(operator.or_, args.fields or [], FieldSelection.NONE)
    return TouchConfig(
        fields=fields,
        stamp=args.stamp,
        reference=args.reference,
        offset=args.offset,
        no_create=args.no_create,
        no_dereference=args.no_dereference,
    )


# ============================================================================
# Reporting
# ============================================================================


def _print_try_help() -> None:
    print(f"Try '{PROG_NAME} -h' to show help information.")


def _describe_failure(outcome: TouchOutcome) -> str:
    if outcome.error_kind is ErrorKind.WRITE_FAILED:
        return f"Could not set timestamps of '{outcome.path}' - {outcome.message}"
    return f"Could not open '{outcome.path}' - {outcome.message}"


# ============================================================================
# Main
# ============================================================================


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the touch command.

    Args:
        argv: Arguments without the program name. Defaults to sys.argv[1:].

    Returns:
        Process exit status: 0 when every file succeeded, 1 otherwise
    """
    if argv is None:
        argv = sys.argv[1:]

    logger = get_logger()
    logger.configure(prog_name=PROG_NAME)

    if not argv:
        logger.error("No argument is supplied.")
        _print_try_help()
        return 1

    args = build_parser().parse_args(argv)
    try:
        logger.configure(
            log_level="DEBUG" if args.verbose else "INFO",
            prog_name=PROG_NAME,
            enable_file=args.log_dir is not None,
            log_dir=args.log_dir or "logs",
        )
    except OSError as e:
        logger.configure(prog_name=PROG_NAME)
        logger.error(f"Could not open log directory '{args.log_dir}' - {e.strerror or e}")
        return 1

    if not args.files:
        logger.error("Missing file operand.")
        _print_try_help()
        return 1

    config = build_config(args)
    try:
        report = Toucher(config).touch(args.files)
    except TouchError as e:
        logger.error(str(e))
        _print_try_help()
        return 1

    for failure in report.failures:
        logger.error(_describe_failure(failure))

    return 0 if report.all_succeeded else 1
