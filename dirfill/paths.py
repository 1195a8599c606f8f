from pathlib import Path

from genutility.filesystem import PathType

from .rand import RandomSource

DIRNAME_LENGTH = 8


def sample_nested_path(base: PathType, depth: int, rng: RandomSource) -> Path:
    """Returns `base` with `depth` random alphanumeric directory names appended.
    Nothing is created on disk.
    """

    if depth < 0:
        raise ValueError(f"depth must be non-negative, not {depth}")

    path = Path(base)
    for _i in range(depth):
        path = path / rng.alphanumeric(DIRNAME_LENGTH)
    return path
