import logging
from argparse import Namespace
from pathlib import Path
from typing import NamedTuple, Optional, TypeVar

from .errors import InvalidArgumentError, MissingArgumentError
from .sizes import parse_size

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_DEPTH = 1
DEFAULT_MIN_SIZE = "1kib"
DEFAULT_MAX_SIZE = "5kib"


class Config(NamedTuple):
    folder_path: Path
    target_size: int
    max_depth: int
    min_file_size: int
    max_file_size: int


def resolve(flagged: Optional[T], positional: Optional[T], name: str) -> T:
    """Returns the flagged value if given, otherwise the positional one."""

    if flagged is not None:
        return flagged
    if positional is not None:
        return positional
    raise MissingArgumentError(name)


def repair_bounds(config: Config) -> Config:
    if config.max_file_size < config.min_file_size:
        logger.warning(
            "Maximum file size %d is smaller than minimum file size %d, using %d for both",
            config.max_file_size,
            config.min_file_size,
            config.min_file_size,
        )
        return config._replace(max_file_size=config.min_file_size)
    return config


def bind_config(args: Namespace) -> Config:
    """Builds the run configuration from parsed command line arguments.
    Size strings are parsed here so errors surface before any file is written.
    """

    folder_path = resolve(args.folder_path, args.positional_folder_path, "folder path")
    size = resolve(args.size, args.positional_size, "size")

    if args.depth < 0:
        raise InvalidArgumentError("depth", args.depth, "must not be negative")

    config = Config(
        folder_path=Path(folder_path),
        target_size=parse_size(size),
        max_depth=args.depth,
        min_file_size=parse_size(args.min),
        max_file_size=parse_size(args.max),
    )
    return repair_bounds(config)
