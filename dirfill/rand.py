import os
import string
from random import Random
from typing import Optional

ALPHANUMERIC = string.digits + string.ascii_uppercase + string.ascii_lowercase


class RandomSource:
    """Uniform random bytes, integers and alphanumeric characters.

    Without an explicit seed the generator is seeded from `os.urandom`. Runs are not reproducible.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        if seed is None:
            seed = int.from_bytes(os.urandom(32), "little")
        self._random = Random(seed)

    def uniform_byte(self) -> int:
        return self._random.getrandbits(8)

    def uniform_in_range(self, lo: int, hi: int) -> int:
        return self._random.randint(lo, hi)

    def uniform_alphanumeric_char(self) -> str:
        return self._random.choice(ALPHANUMERIC)

    def alphanumeric(self, length: int) -> str:
        return "".join(self.uniform_alphanumeric_char() for _i in range(length))

    def uniform_bytes(self, size: int) -> bytes:
        if size == 0:
            return b""
        return self._random.getrandbits(size * 8).to_bytes(size, "little")
