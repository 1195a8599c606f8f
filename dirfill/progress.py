import logging
from typing import Any, List

from genutility.callbacks import Progress as NullProgress
from rich.progress import (
    BarColumn,
    DownloadColumn,
    ProgressColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)

logger = logging.getLogger(__name__)

__all__ = ["NullProgress", "ByteProgress", "get_byte_columns"]


class ByteProgress:
    """Reports the number of written bytes on a progress task.
    `advance()` sets the absolute position, it's not a delta.
    """

    def __init__(self, task: Any) -> None:
        self.task = task
        self.position = 0

    def advance(self, position: int) -> None:
        self.position = position
        self.task.update(completed=position)

    def finish(self, message: str = "Done") -> None:
        # the last file can overshoot the target
        self.task.update(total=self.position, completed=self.position)
        logger.debug("%s", message)


def get_byte_columns() -> List[ProgressColumn]:
    return [
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        DownloadColumn(binary_units=True),
        TransferSpeedColumn(),
        TimeElapsedColumn(),
        TimeRemainingColumn(),
    ]
