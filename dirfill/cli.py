import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, ArgumentTypeError, Namespace
from pathlib import Path
from typing import List, Optional

from genutility.logging import IsoDatetimeFormatter
from genutility.rich import MarkdownHighlighter, Progress
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress as RichProgress

from . import __version__
from .config import DEFAULT_DEPTH, DEFAULT_MAX_SIZE, DEFAULT_MIN_SIZE, bind_config
from .errors import DirfillError
from .generate import GenerationResult, generate
from .progress import NullProgress, get_byte_columns
from .rand import RandomSource
from .sizes import format_gib

logger = logging.getLogger(__name__)


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 0:
        raise ArgumentTypeError(f"{number} is negative")
    return number


def get_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="dirfill",
        description="Fill a folder with random files until their total size reaches the given size.",
        formatter_class=ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("-f", "--folder-path", metavar="FOLDER", help="Destination folder")
    parser.add_argument("positional_folder_path", nargs="?", metavar="FOLDER", help="Destination folder")
    parser.add_argument(
        "-s", "--size", metavar="SIZE", help="Total size of all files, for example `10MiB` or `1 GB`"
    )
    parser.add_argument("positional_size", nargs="?", metavar="SIZE", help="Total size of all files")
    parser.add_argument(
        "-d", "--d", dest="depth", type=non_negative_int, default=DEFAULT_DEPTH, help="Maximum depth of nested folders"
    )
    parser.add_argument("-m", "--min", default=DEFAULT_MIN_SIZE, help="Minimum size of a file")
    parser.add_argument("-M", "--max", default=DEFAULT_MAX_SIZE, help="Maximum size of a file")
    parser.add_argument("--no-progress", action="store_true", help="Don't show a progress bar")
    parser.add_argument("--log", type=Path, help="Also write the log to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def setup_logging(console: Console, level: int = logging.INFO, logfile: Optional[Path] = None) -> None:
    pkg_logger = logging.getLogger(__package__)
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()

    stream_handler = RichHandler(
        console=console, log_time_format="%Y-%m-%d %H-%M-%S%Z", highlighter=MarkdownHighlighter()
    )
    stream_handler.setFormatter(logging.Formatter("%(message)s"))
    pkg_logger.addHandler(stream_handler)

    if logfile is not None:
        file_fmt = "%(asctime)s\t%(levelname)s\t%(message)s"
        file_handler = logging.FileHandler(logfile, encoding="utf-8", delay=True)
        file_handler.setFormatter(IsoDatetimeFormatter(file_fmt, sep=" ", timespec="seconds", aslocal=True))
        pkg_logger.addHandler(file_handler)

    pkg_logger.setLevel(level)


def run(args: Namespace, console: Console) -> GenerationResult:
    config = bind_config(args)
    rng = RandomSource()

    if args.no_progress:
        return generate(config, rng, NullProgress())

    with RichProgress(*get_byte_columns(), console=console) as progress:
        return generate(config, rng, Progress(progress))


def main(argv: Optional[List[str]] = None) -> int:
    args = get_parser().parse_intermixed_args(argv)

    console = Console(stderr=True)
    setup_logging(console, logging.DEBUG if args.verbose else logging.INFO, args.log)

    try:
        result = run(args, console)
    except DirfillError as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted by user. Exiting.")
        return 1
    except Exception:
        logger.exception("Generating files failed. Exiting.")
        return 1

    print(f"Created files: {result.file_count}")
    print(f"Total size: {format_gib(result.total_bytes)} GiB")
    return 0
