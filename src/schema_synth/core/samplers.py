"""Leaf samplers for bounded random values.

All samplers take an explicit ``numpy.random.Generator`` and return native
Python scalars so results are JSON-serializable and hash by value.
"""

import math
from typing import Sequence, TypeVar

import numpy as np

from ..config.defaults import STRING_ALPHABET

T = TypeVar('T')


def random_int(rng: np.random.Generator, minimum: float, maximum: float) -> int:
    """
    Uniform integer in ``[minimum, maximum]``, inclusive at both ends.

    Fractional bounds are narrowed to the integers they contain.

    Examples
    --------
    >>> rng = np.random.default_rng(0)
    >>> 1 <= random_int(rng, 1, 6) <= 6
    True
    """
    low = math.ceil(minimum)
    high = math.floor(maximum)
    return int(rng.integers(low, high, endpoint=True))


def random_float(rng: np.random.Generator, minimum: float, maximum: float) -> float:
    """
    Uniform float in ``[minimum, maximum)``.

    Rounding can carry ``minimum + u * (maximum - minimum)`` up to
    ``maximum`` when the span is small relative to the bounds; such draws
    are clamped to the largest float below ``maximum``.
    """
    value = float(minimum + rng.random() * (maximum - minimum))
    if value >= maximum and maximum > minimum:
        return float(np.nextafter(maximum, minimum))
    return value


def random_string(rng: np.random.Generator,
                  min_length: int,
                  max_length: int,
                  alphabet: str = STRING_ALPHABET) -> str:
    """
    Random string with length uniform in ``[min_length, max_length]``.

    Each character is drawn independently and uniformly from ``alphabet``.
    """
    length = random_int(rng, min_length, max_length)
    if length == 0:
        return ""
    indices = rng.integers(0, len(alphabet), size=length)
    return "".join(alphabet[i] for i in indices)


def random_bool(rng: np.random.Generator, probability: float = 0.5) -> bool:
    """``True`` with the given probability."""
    return bool(rng.random() < probability)


def random_choice(rng: np.random.Generator, options: Sequence[T]) -> T:
    # rng.choice would coerce elements to numpy scalars
    return options[int(rng.integers(len(options)))]
