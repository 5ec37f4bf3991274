"""
📏 Fitness Values
Fitness direction, comparison helpers and the roulette weight policy
"""

import numbers
from decimal import Decimal
from enum import Enum
from typing import Any, Protocol, Sequence, TypeVar, runtime_checkable

import numpy as np


class FitnessDirection(Enum):
    """Which end of the fitness order counts as better."""
    MAXIMIZE = "maximize"
    MINIMIZE = "minimize"


@runtime_checkable
class Fitness(Protocol):
    """
    Contract for custom fitness values.

    Plain numbers already satisfy it through the helpers below; custom types
    must be totally ordered and provide ``zero()`` and ``abs_diff(other)``.
    """

    def __lt__(self, other: Any) -> bool: ...

    def abs_diff(self, other: Any) -> Any: ...


F = TypeVar("F")


def fitness_zero(value: F) -> F:
    """Return the zero of ``value``'s fitness type."""
    zero = getattr(type(value), "zero", None)
    if callable(zero):
        return zero()
    if isinstance(value, numbers.Number):
        return type(value)(0)
    raise TypeError(f"Fitness type {type(value).__name__} has no zero()")


def fitness_abs_diff(a: F, b: F) -> F:
    """Absolute difference between two fitness values, itself a fitness value."""
    abs_diff = getattr(a, "abs_diff", None)
    if callable(abs_diff):
        return abs_diff(b)
    if isinstance(a, numbers.Number):
        return abs(a - b)
    raise TypeError(f"Fitness type {type(a).__name__} has no abs_diff()")


def is_better(candidate: F, incumbent: F, direction: FitnessDirection) -> bool:
    """True when ``candidate`` is strictly better than ``incumbent``."""
    if direction is FitnessDirection.MAXIMIZE:
        return incumbent < candidate
    return candidate < incumbent


def is_int(value: Any) -> bool:
    """Whether ``value`` is an integer, numpy integers included and booleans excluded."""
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def is_real_fitness(value: Any) -> bool:
    """Whether ``value`` can be turned into a roulette weight."""
    if isinstance(value, bool):
        return False
    return isinstance(value, (numbers.Real, Decimal))


def roulette_weights(fitnesses: Sequence[Any], direction: FitnessDirection) -> np.ndarray:
    """
    Map fitness values onto non-negative selection weights.

    The mapping is fixed:

    * MAXIMIZE: the raw fitness when every value is non-negative, otherwise
      the fitness shifted by the population minimum (``f - min(f)``).
    * MINIMIZE: the distance to the worst value (``max(f) - f``).

    In both shifted cases the worst individual gets weight zero, and a
    population of identical values collapses to all-zero weights.
    """
    values = np.asarray([float(f) for f in fitnesses], dtype=float)
    if values.size == 0:
        return values

    if direction is FitnessDirection.MAXIMIZE:
        low = values.min()
        if low < 0:
            return values - low
        return values
    return values.max() - values
