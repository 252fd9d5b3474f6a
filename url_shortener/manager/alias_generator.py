"""
Random alias generation for the URL shortener.

Provided generators:
- RandomAliasGenerator: each character drawn independently and uniformly from a
  fixed URL-safe alphabet (Base62 by default), fixed length (default 6)

Notes:
- Generators know nothing about stored aliases. A generated alias may collide;
  the store's unique index detects that and the manager regenerates.
- The default randomness source is `random.SystemRandom` (OS CSPRNG), so aliases
  can't be predicted from earlier ones. Tests may inject a seeded `random.Random`.
- With 62^6 ≈ 5.7e10 possible aliases, collisions stay rare until the table
  holds hundreds of thousands of rows; raise the length before that.
"""

import random
import string
from abc import ABC, abstractmethod
from typing import Optional

BASE62_ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
DEFAULT_ALIAS_LENGTH = 6


class BaseAliasGenerator(ABC):
    """Abstract base for alias generators."""

    @abstractmethod
    def generate(self, length: Optional[int] = None) -> str:
        """Return a new candidate alias of `length` characters (generator default when None)."""
        raise NotImplementedError


class RandomAliasGenerator(BaseAliasGenerator):
    """
    Random alias generator; relies on storage-level uniqueness (unique index + retry).

    Args:
        length (int): Default alias length, must be >= 1.
        alphabet (str): Characters to draw from; non-empty, no repeats.
        rng (random.Random, optional): Randomness source; SystemRandom when omitted.
    """

    def __init__(
        self,
        length: int = DEFAULT_ALIAS_LENGTH,
        alphabet: str = BASE62_ALPHABET,
        rng: Optional[random.Random] = None,
    ):
        if not alphabet:
            raise ValueError("alphabet must not be empty")
        if len(set(alphabet)) != len(alphabet):
            # Repeats would skew the distribution towards the repeated characters.
            raise ValueError("alphabet must not contain repeated characters")
        self.alphabet = alphabet
        self.length = _check_length(length)
        self._rng = rng or random.SystemRandom()

    def generate(self, length: Optional[int] = None) -> str:
        n = self.length if length is None else _check_length(length)
        return "".join(self._rng.choice(self.alphabet) for _ in range(n))


def _check_length(length: int) -> int:
    if isinstance(length, bool) or not isinstance(length, int):
        raise ValueError(f"alias length must be an integer, got {length!r}")
    if length < 1:
        raise ValueError(f"alias length must be positive, got {length}")
    return length
