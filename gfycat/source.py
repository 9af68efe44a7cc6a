"""
Thread-safe random number source employed to pick words from the lists.
"""
import random
import threading
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Optional

MAX_INT63 = (1 << 63) - 1


class LockedRandomSource(object):
    """
    Private pseudo-random generator which state can only be accessed through its synchronized methods.

    Every operation acquires the same lock, which makes an instance safe to share between multiple threads
    without any external coordination.
    """

    def __init__(self, seed=None):
        # type: (Optional[int]) -> None
        self._lock = threading.Lock()
        self._random = random.Random()
        self.reseed(time.time_ns() if seed is None else seed)

    def reseed(self, seed):
        # type: (int) -> None
        """
        Initializes the generator state with the provided seed value.
        """
        with self._lock:
            self._random.seed(seed)

    def next63(self):
        # type: () -> int
        """
        Returns a non-negative pseudo-random 63-bit integer.
        """
        with self._lock:
            return self._random.getrandbits(63)

    def randbelow(self, n):
        # type: (int) -> int
        """
        Returns an uniformly distributed integer in ``[0, n)``.

        Draws that fall in the incomplete last span of 63-bit values are rejected to avoid the modulo bias.
        """
        if n <= 0:
            raise ValueError(f"Invalid upper bound [{n!s}] must be a positive integer.")
        limit = MAX_INT63 - (MAX_INT63 + 1) % n
        value = self.next63()
        while value > limit:
            value = self.next63()
        return value % n
