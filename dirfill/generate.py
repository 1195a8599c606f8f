import logging
from pathlib import Path
from typing import NamedTuple, Optional

from humanfriendly import format_size

from .config import Config
from .errors import FilesystemError, ImpossibleProgressError
from .paths import sample_nested_path
from .progress import ByteProgress, NullProgress
from .rand import RandomSource

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 1024**2


class GenerationResult(NamedTuple):
    file_count: int
    total_bytes: int


def file_name(index: int) -> str:
    return f"file_{index}.txt"


def make_dirs(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(path, e) from e


def write_random_file(path: Path, size: int, rng: RandomSource, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
    """Creates or truncates `path` and writes exactly `size` random bytes to it."""

    remaining = size
    try:
        with open(path, "wb") as fw:
            while remaining > 0:
                chunk_size = min(buffer_size, remaining)
                fw.write(rng.uniform_bytes(chunk_size))
                remaining -= chunk_size
    except OSError as e:
        raise FilesystemError(path, e) from e


def generate(config: Config, rng: RandomSource, progress: Optional[NullProgress] = None) -> GenerationResult:
    """Fill `config.folder_path` with random files until at least `config.target_size` bytes are written.

    File sizes are uniform in `[min_file_size, max_file_size]` and each file is placed in a random
    directory between 0 and `max_depth` levels below the folder. The last file may overshoot the
    target by less than `max_file_size` bytes. Already written files are left in place on errors.
    """

    progress = progress or NullProgress()

    if config.target_size > 0 and config.max_file_size == 0:
        raise ImpossibleProgressError(config.target_size, config.max_file_size)

    logger.info(
        "Writing %s to `%s` (file sizes %s to %s, max depth %d)",
        format_size(config.target_size, binary=True),
        config.folder_path,
        format_size(config.min_file_size, binary=True),
        format_size(config.max_file_size, binary=True),
        config.max_depth,
    )

    make_dirs(config.folder_path)

    total_bytes = 0
    file_count = 0
    with progress.task(total=config.target_size, description="Generating files") as task:
        sink = ByteProgress(task)
        while total_bytes < config.target_size:
            size = rng.uniform_in_range(config.min_file_size, config.max_file_size)
            depth = rng.uniform_in_range(0, config.max_depth)
            dirpath = sample_nested_path(config.folder_path, depth, rng)
            make_dirs(dirpath)

            path = dirpath / file_name(file_count)
            write_random_file(path, size, rng)
            logger.debug("Created `%s` with %d bytes", path, size)

            total_bytes += size
            file_count += 1
            sink.advance(total_bytes)

        sink.finish("Done")
    logger.info("Created %d files with a total of %s", file_count, format_size(total_bytes, binary=True))

    return GenerationResult(file_count, total_bytes)
