"""
🏗️ Simulator Builder
Validates a simulation configuration and assembles the Simulator
"""

from typing import Any, Iterable, Optional, Union

from core.config import get_settings
from core.logger import get_logger
from .convergence import EarlyStopper, IterationLimit
from .exceptions import ConfigurationError
from .fitness import FitnessDirection, fitness_abs_diff, fitness_zero, is_int, is_real_fitness
from .phenotype import missing_capabilities
from .population import Population
from .selection import Selector
from .simulator import Simulator
from .stats import StatsCollector

logger = get_logger(__name__)


class SimulatorBuilder:
    """
    One-shot configuration object for a :class:`Simulator`.

    Setters return the builder so calls can be chained::

        simulator = (
            Simulator.builder(population)
            .set_selector(TournamentSelector(participants=3))
            .set_fitness_direction(FitnessDirection.MINIMIZE)
            .set_max_iterations(1000)
            .build()
        )

    ``build`` validates everything, copies the population into the new
    simulator and can only be called once.
    """

    def __init__(self, population: Iterable[Any]):
        self._population = population
        self._selector: Optional[Selector] = None
        self._direction: Optional[Union[FitnessDirection, str]] = None
        self._max_iterations: Optional[int] = None
        self._threshold: Optional[Any] = None
        self._patience: int = 1
        self._stats_collector: Optional[StatsCollector] = None
        self._random_seed: Optional[int] = None
        self._built = False

    def set_selector(self, selector: Selector) -> "SimulatorBuilder":
        self._selector = selector
        return self

    def set_fitness_direction(self, direction: Union[FitnessDirection, str]) -> "SimulatorBuilder":
        self._direction = direction
        return self

    def set_max_iterations(self, max_iterations: Optional[int]) -> "SimulatorBuilder":
        """Cap the number of bred generations; ``0`` only ranks the initial population."""
        self._max_iterations = max_iterations
        return self

    def set_convergence(self, threshold: Any, patience: int = 1) -> "SimulatorBuilder":
        """
        Stop once the generational best fitness moves by less than
        ``threshold`` for ``patience`` consecutive generations.
        """
        self._threshold = threshold
        self._patience = patience
        return self

    def set_stats_collector(self, collector: StatsCollector) -> "SimulatorBuilder":
        self._stats_collector = collector
        return self

    def set_random_seed(self, seed: Optional[int]) -> "SimulatorBuilder":
        self._random_seed = seed
        return self

    def build(self) -> Simulator:
        """
        Validate the configuration and create the simulator.

        Raises:
            ConfigurationError: On any invalid or incomplete setting
        """
        if self._built:
            raise ConfigurationError("This builder has already produced a simulator")

        individuals = self._validate_population()
        direction = self._validate_direction()
        selector = self._validate_selector(individuals)
        self._validate_termination(individuals)

        seed = self._random_seed
        if seed is None:
            seed = get_settings().random_seed

        simulator = Simulator(
            population=Population(individuals),
            selector=selector,
            fitness_direction=direction,
            iteration_limit=IterationLimit(self._max_iterations),
            early_stopper=(
                EarlyStopper(self._threshold, self._patience)
                if self._threshold is not None else None
            ),
            stats_collector=self._stats_collector,
            random_seed=seed,
        )
        self._built = True
        self._population = None

        logger.debug(f"Built simulator {simulator.simulation_id}: population_size={len(individuals)}, "
                     f"direction={direction.value}, max_iterations={self._max_iterations}, "
                     f"convergence_threshold={self._threshold}")
        return simulator

    def _validate_population(self) -> list:
        if self._population is None:
            raise ConfigurationError("A population is required")
        try:
            individuals = list(self._population)
        except TypeError as e:
            raise ConfigurationError(f"Population must be an iterable of individuals: {e}") from e

        if not individuals:
            raise ConfigurationError("Population must contain at least one individual")

        for index, individual in enumerate(individuals):
            missing = missing_capabilities(individual)
            if missing:
                raise ConfigurationError(
                    f"Individual at position {index} ({type(individual).__name__}) "
                    f"does not provide: {', '.join(missing)}"
                )
        return individuals

    def _validate_direction(self) -> FitnessDirection:
        if self._direction is None:
            raise ConfigurationError("A fitness direction (maximize or minimize) is required")
        if isinstance(self._direction, FitnessDirection):
            return self._direction
        try:
            return FitnessDirection(str(self._direction).lower())
        except ValueError as e:
            raise ConfigurationError(f"Unknown fitness direction: {self._direction!r}") from e

    def _validate_selector(self, individuals: list) -> Selector:
        if self._selector is None:
            raise ConfigurationError("A selector is required")
        if not isinstance(self._selector, Selector):
            raise ConfigurationError(
                f"Selector must be a Selector instance, got {type(self._selector).__name__}"
            )
        self._selector.validate(len(individuals))

        if self._selector.requires_real_fitness:
            for index, individual in enumerate(individuals):
                if not is_real_fitness(individual.fitness()):
                    raise ConfigurationError(
                        f"{type(self._selector).__name__} needs real-valued fitness; individual "
                        f"at position {index} has fitness of type "
                        f"{type(individual.fitness()).__name__}"
                    )
        return self._selector

    def _validate_termination(self, individuals: list) -> None:
        if self._max_iterations is not None:
            if not is_int(self._max_iterations) or self._max_iterations < 0:
                raise ConfigurationError(
                    f"max_iterations must be unset or a non-negative integer, got {self._max_iterations!r}"
                )

        if self._threshold is not None:
            if not is_int(self._patience) or self._patience < 1:
                raise ConfigurationError(
                    f"Convergence patience must be a positive integer, got {self._patience!r}"
                )
            sample = individuals[0].fitness()
            try:
                # raises when deltas cannot be compared with the threshold
                fitness_abs_diff(sample, sample) < self._threshold
                negative = self._threshold < fitness_zero(sample)
            except (TypeError, AttributeError) as e:
                raise ConfigurationError(
                    f"Convergence threshold {self._threshold!r} is not comparable with "
                    f"fitness deltas of type {type(sample).__name__}: {e}"
                ) from e
            if negative:
                raise ConfigurationError(
                    f"Convergence threshold must not be negative, got {self._threshold!r}"
                )

        if self._max_iterations is None and self._threshold is None:
            raise ConfigurationError(
                "Set max_iterations, a convergence threshold, or both; otherwise the run never ends"
            )
