"""
🎯 Selection Operators
Strategies that pick parent pairs from a ranked generation
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Type

import numpy as np

from core.logger import get_logger
from .exceptions import ConfigurationError, SelectionError
from .fitness import is_int, roulette_weights
from .population import RankedPopulation

logger = get_logger(__name__)

Parents = List[Tuple[Any, Any]]


def _pair_cyclically(candidates, count: int) -> Parents:
    """Pair ``candidates`` as (0, 1), (2, 3), ... wrapping around until ``count`` pairs exist."""
    size = len(candidates)
    return [
        (candidates[(2 * j) % size], candidates[(2 * j + 1) % size])
        for j in range(count)
    ]


class Selector(ABC):
    """
    Base class for selection strategies.

    Selectors hold only their own configuration. They read a ranked
    population (best first) and a random generator and never modify the
    population they are given.
    """

    #: Whether the strategy needs real-valued fitness (roulette weights).
    requires_real_fitness = False

    @abstractmethod
    def validate(self, population_size: int) -> None:
        """Raise ConfigurationError if this selector cannot work on ``population_size`` individuals."""

    @abstractmethod
    def _select(self, ranked: RankedPopulation, count: int, rng: np.random.Generator) -> Parents:
        ...

    def select(
        self,
        ranked: RankedPopulation,
        count: int,
        rng: Optional[np.random.Generator] = None
    ) -> Parents:
        """
        Choose exactly ``count`` parent pairs from ``ranked``.

        Args:
            ranked: Generation ordered from best to worst
            count: Number of pairs to produce (one offspring per pair)
            rng: Random generator (a fresh unseeded one when omitted)

        Returns:
            Parents: List of ``(first, second)`` parent tuples
        """
        if not is_int(count) or count < 0:
            raise ValueError(f"Pair count must be a non-negative integer, got {count!r}")
        self.validate(len(ranked))
        if count == 0:
            return []
        if rng is None:
            rng = np.random.default_rng()
        return self._select(ranked, count, rng)


@dataclass(frozen=True)
class TournamentSelector(Selector):
    """
    Tournament selection.

    Each parent is the best of ``participants`` rank positions drawn
    uniformly with replacement, so ties go to the individual earlier in the
    ranking. ``participants=1`` is plain uniform selection. When ``rounds``
    is set, only that many distinct pairs are drawn per generation and they
    are reused in order to fill the requested count.
    """

    participants: int = 3
    rounds: Optional[int] = None

    def validate(self, population_size: int) -> None:
        if not is_int(self.participants) or self.participants < 1:
            raise ConfigurationError(
                f"Invalid parameter `participants`: {self.participants!r}. Should be at least 1."
            )
        if self.participants > population_size:
            raise ConfigurationError(
                f"Invalid parameter `participants`: {self.participants}. Should not exceed "
                f"the population size ({population_size})."
            )
        if self.rounds is not None and (not is_int(self.rounds) or self.rounds < 1):
            raise ConfigurationError(
                f"Invalid parameter `rounds`: {self.rounds!r}. Should be unset or at least 1."
            )

    def _select(self, ranked: RankedPopulation, count: int, rng: np.random.Generator) -> Parents:
        rounds = count if self.rounds is None else min(self.rounds, count)
        draws = rng.integers(0, len(ranked), size=(rounds, 2, self.participants))
        winners = draws.min(axis=2)
        pairs = [(ranked[int(first)], ranked[int(second)]) for first, second in winners]
        return [pairs[i % rounds] for i in range(count)]


@dataclass(frozen=True)
class StochasticSelector(Selector):
    """
    Stochastic selection: a candidate pool of ``sample_size`` individuals is
    drawn uniformly without replacement and paired cyclically in draw order.
    Rank plays no part, which keeps more diversity than a tournament.
    """

    sample_size: int = 2

    def validate(self, population_size: int) -> None:
        if not is_int(self.sample_size) or self.sample_size < 1:
            raise ConfigurationError(
                f"Invalid parameter `sample_size`: {self.sample_size!r}. Should be at least 1."
            )
        if self.sample_size > population_size:
            raise ConfigurationError(
                f"Invalid parameter `sample_size`: {self.sample_size}. Should not exceed "
                f"the population size ({population_size})."
            )

    def _select(self, ranked: RankedPopulation, count: int, rng: np.random.Generator) -> Parents:
        pool = rng.choice(len(ranked), size=self.sample_size, replace=False)
        candidates = [ranked[int(index)] for index in pool]
        return _pair_cyclically(candidates, count)


@dataclass(frozen=True)
class RouletteSelector(Selector):
    """
    Roulette wheel selection - probability proportional to the selection
    weight computed by :func:`genetic.fitness.roulette_weights`.
    """

    requires_real_fitness = True

    def validate(self, population_size: int) -> None:
        return None

    def _select(self, ranked: RankedPopulation, count: int, rng: np.random.Generator) -> Parents:
        try:
            weights = roulette_weights(ranked.fitnesses, ranked.direction)
        except (TypeError, ValueError, OverflowError) as e:
            raise SelectionError(f"Roulette selection needs float-representable fitness: {e}") from e

        if not np.all(np.isfinite(weights)):
            raise SelectionError("Roulette selection weights must be finite")

        peak = weights.max()
        if peak <= 0:
            logger.warning(f"All {len(ranked)} roulette weights are zero, population is degenerate")
            raise SelectionError(
                "Could not complete roulette selection: every selection weight is zero"
            )

        # scaled to at most 1 so the sum cannot overflow
        weights = weights / peak
        picks = rng.choice(len(ranked), size=(count, 2), p=weights / weights.sum())
        return [(ranked[int(first)], ranked[int(second)]) for first, second in picks]


@dataclass(frozen=True)
class MaximizeSelector(Selector):
    """
    Truncation selection: only the ``top`` best ranked individuals become
    parents, paired (1st, 2nd), (3rd, 4th), ... and reused cyclically.
    """

    top: int = 2

    def validate(self, population_size: int) -> None:
        if not is_int(self.top) or self.top < 1:
            raise ConfigurationError(
                f"Invalid parameter `top`: {self.top!r}. Should be at least 1."
            )
        if self.top > population_size:
            raise ConfigurationError(
                f"Invalid parameter `top`: {self.top}. Should not exceed "
                f"the population size ({population_size})."
            )

    def _select(self, ranked: RankedPopulation, count: int, rng: np.random.Generator) -> Parents:
        return _pair_cyclically(ranked.individuals[:self.top], count)


SELECTION_METHODS: Dict[str, Type[Selector]] = {
    'tournament': TournamentSelector,
    'stochastic': StochasticSelector,
    'roulette': RouletteSelector,
    'maximize': MaximizeSelector,
}


def create_selector(method: str, **kwargs) -> Selector:
    """
    Build a selector from its method name.

    Args:
        method: One of ``SELECTION_METHODS``
        **kwargs: Parameters of the selector class

    Returns:
        Selector: Configured selector
    """
    if method not in SELECTION_METHODS:
        raise ConfigurationError(
            f"Unknown selection method: {method}. Expected one of {sorted(SELECTION_METHODS)}"
        )
    try:
        return SELECTION_METHODS[method](**kwargs)
    except TypeError as e:
        raise ConfigurationError(f"Invalid parameters for {method} selection: {e}") from e
