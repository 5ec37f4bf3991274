"""
👥 Population Management
Fixed-size generations and their fitness ranking
"""

from dataclasses import dataclass
from typing import Any, Generic, Iterable, Iterator, List, Sequence, Tuple, TypeVar

from .fitness import FitnessDirection

T = TypeVar("T")


@dataclass(frozen=True)
class RankedPopulation(Generic[T]):
    """
    One generation ordered from best to worst.

    ``fitnesses[i]`` is the fitness of ``individuals[i]``, evaluated once
    when the ranking was built.
    """

    individuals: Tuple[T, ...]
    fitnesses: Tuple[Any, ...]
    direction: FitnessDirection

    def __len__(self) -> int:
        return len(self.individuals)

    def __getitem__(self, index: int) -> T:
        return self.individuals[index]

    def __iter__(self) -> Iterator[T]:
        return iter(self.individuals)

    @property
    def best(self) -> T:
        return self.individuals[0]

    @property
    def best_fitness(self) -> Any:
        return self.fitnesses[0]

    @property
    def worst_fitness(self) -> Any:
        return self.fitnesses[-1]


def rank_population(individuals: Sequence[T], direction: FitnessDirection) -> RankedPopulation[T]:
    """
    Order ``individuals`` from best to worst for ``direction``.

    Individuals with equal fitness keep their population order, for both
    directions (``sorted`` is stable, including with ``reverse=True``).
    """
    scored = [(individual.fitness(), individual) for individual in individuals]
    ordered = sorted(
        scored,
        key=lambda pair: pair[0],
        reverse=direction is FitnessDirection.MAXIMIZE,
    )
    return RankedPopulation(
        individuals=tuple(individual for _, individual in ordered),
        fitnesses=tuple(fitness for fitness, _ in ordered),
        direction=direction,
    )


class Population(Generic[T]):
    """
    Ordered, non-empty collection of individuals whose size never changes.
    """

    def __init__(self, individuals: Iterable[T]):
        self._individuals: List[T] = list(individuals)
        if not self._individuals:
            raise ValueError("Population must contain at least one individual")
        self._size = len(self._individuals)

    @property
    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        return iter(self._individuals)

    def __getitem__(self, index: int) -> T:
        return self._individuals[index]

    def snapshot(self) -> List[T]:
        """Shallow copy of the current generation."""
        return list(self._individuals)

    def rank(self, direction: FitnessDirection) -> RankedPopulation[T]:
        return rank_population(self._individuals, direction)

    def replace(self, offspring: Sequence[T]) -> None:
        """Swap in the next generation. Replacement is strictly one-for-one."""
        if len(offspring) != self._size:
            raise ValueError(
                f"Next generation has {len(offspring)} individuals, expected {self._size}"
            )
        self._individuals = list(offspring)

    def __repr__(self) -> str:
        return f"Population(size={self._size})"
