from os import fspath
from string import digits
from typing import Optional

from genutility.filesystem import PathType
from humanfriendly import InvalidSize


class DirfillError(Exception):
    pass


class SizeParseError(DirfillError, InvalidSize):
    """Raised when a size string cannot be parsed.

    `character` is the offending character (None for empty input) and `expected` holds the
    characters which would have been accepted at `position`.
    """

    def __init__(self, text: str, position: int, character: Optional[str], expected: str) -> None:
        self.text = text
        self.position = position
        self.character = character
        self.expected = expected
        super().__init__(text, position, character, expected)

    def __str__(self) -> str:
        if self.character is None:
            return f"Empty size string {self.text!r}"
        if self.expected == digits:
            return (
                f"Invalid character {self.character!r} in {self.text!r} at position {self.position}, "
                "expected a number"
            )
        if not self.expected:
            return (
                f"Unexpected character {self.character!r} in {self.text!r} at position {self.position}, "
                "expected end of input"
            )
        return (
            f"Invalid unit character {self.character!r} in {self.text!r} at position {self.position}, "
            f"expected one of: {self.expected}"
        )


class MissingArgumentError(DirfillError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Missing required argument: {self.name}"


class ImpossibleProgressError(DirfillError):
    def __init__(self, target_size: int, max_file_size: int) -> None:
        self.target_size = target_size
        self.max_file_size = max_file_size
        super().__init__(target_size, max_file_size)

    def __str__(self) -> str:
        return (
            f"Cannot reach a target of {self.target_size} bytes "
            f"with a maximum file size of {self.max_file_size} bytes"
        )


class FilesystemError(DirfillError):
    def __init__(self, path: PathType, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(path, cause)

    def __str__(self) -> str:
        return f"Filesystem operation on `{fspath(self.path)}` failed: {self.cause}"


class InvalidArgumentError(DirfillError):
    def __init__(self, name: str, value: object, reason: str) -> None:
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(name, value, reason)

    def __str__(self) -> str:
        return f"Invalid {self.name} {self.value!r}: {self.reason}"
