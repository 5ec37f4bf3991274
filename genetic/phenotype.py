"""
🧬 Phenotype Contract
Capabilities a caller-supplied individual must expose to the engine
"""

from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T", bound="Phenotype")


@runtime_checkable
class Phenotype(Protocol):
    """
    A candidate solution evolved by the simulator.

    Individuals are treated as values: ``crossover`` and ``mutate`` must
    return new individuals and leave the receiver (and ``other``) untouched,
    because the same parent can be paired several times in one generation.
    """

    def fitness(self) -> Any:
        """Fitness of the current state. Must be deterministic."""
        ...

    def crossover(self: T, other: T) -> T:
        """Combine ``self`` with ``other`` into one new individual."""
        ...

    def mutate(self: T) -> T:
        """Return a perturbed copy of ``self`` (a plain copy is allowed)."""
        ...


REQUIRED_CAPABILITIES = ("fitness", "crossover", "mutate")


def missing_capabilities(individual: Any) -> list:
    """Names of the phenotype operations ``individual`` does not provide."""
    return [
        name for name in REQUIRED_CAPABILITIES
        if not callable(getattr(individual, name, None))
    ]
