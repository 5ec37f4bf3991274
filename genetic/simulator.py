"""
🧬 Genetic Simulator
Generational loop: rank, select, breed, replace, until a stop condition fires
"""

import time
import uuid
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

import numpy as np

from core.logger import get_logger, get_simulation_logger
from .convergence import EarlyStopper, IterationLimit
from .exceptions import SelectionError, UninitializedResultError
from .fitness import FitnessDirection, is_better
from .population import Population
from .selection import Selector
from .stats import NoStats, StatsCollector

logger = get_logger(__name__)

T = TypeVar("T")


class SimulationState(Enum):
    """Lifecycle of a simulator"""
    NOT_STARTED = "not_started"
    RUNNING = "running"
    CONVERGED = "converged"
    MAX_ITERATIONS_REACHED = "max_iterations_reached"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (
            SimulationState.CONVERGED,
            SimulationState.MAX_ITERATIONS_REACHED,
            SimulationState.FAILED,
        )


class Simulator(Generic[T]):
    """
    Sequential genetic algorithm simulator.

    Every generation is fully replaced: the selector picks one parent pair
    per population slot and each pair yields one offspring through
    ``first.crossover(second).mutate()``. The best individual ever ranked is
    cached, so a regressing final generation does not lose it.

    Instances are created by :class:`genetic.builder.SimulatorBuilder`; use
    :meth:`Simulator.builder` to get one.
    """

    def __init__(
        self,
        population: Population[T],
        selector: Selector,
        fitness_direction: FitnessDirection,
        iteration_limit: IterationLimit,
        early_stopper: Optional[EarlyStopper] = None,
        stats_collector: Optional[StatsCollector] = None,
        random_seed: Optional[int] = None
    ):
        self.simulation_id = str(uuid.uuid4())

        self._population = population
        self._selector = selector
        self._direction = fitness_direction
        self._iterations = iteration_limit
        self._early_stopper = early_stopper
        self._stats = stats_collector if stats_collector is not None else NoStats()
        self._rng = np.random.default_rng(random_seed)

        # Run state
        self._state = SimulationState.NOT_STARTED
        self._error: Optional[SelectionError] = None
        self._best: Optional[T] = None
        self._best_fitness: Optional[Any] = None
        self._has_best = False
        self._elapsed = 0.0

        self._log = get_simulation_logger(self.simulation_id)

    @classmethod
    def builder(cls, population):
        """Start configuring a simulator for ``population``."""
        from .builder import SimulatorBuilder
        return SimulatorBuilder(population)

    # Queries

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def fitness_direction(self) -> FitnessDirection:
        return self._direction

    @property
    def generation_count(self) -> int:
        """Number of generations bred so far (the initial population is generation 0)."""
        return self._iterations.get()

    @property
    def max_iterations(self) -> Optional[int]:
        return self._iterations.maximum

    @property
    def population(self) -> List[T]:
        """Copy of the current generation."""
        return self._population.snapshot()

    @property
    def elapsed(self) -> float:
        """Seconds spent inside ``step``."""
        return self._elapsed

    @property
    def best_fitness(self) -> Any:
        if not self._has_best:
            raise UninitializedResultError("No generation has been ranked yet; call run() or step() first")
        return self._best_fitness

    def get_best(self) -> T:
        """
        Best individual seen in any ranked generation.

        Raises:
            UninitializedResultError: If the simulator was never run
        """
        if not self._has_best:
            raise UninitializedResultError("No generation has been ranked yet; call run() or step() first")
        return self._best

    def status(self) -> Dict[str, Any]:
        """Snapshot of the simulation progress."""
        return {
            'simulation_id': self.simulation_id,
            'state': self._state.value,
            'generation': self.generation_count,
            'max_iterations': self._iterations.maximum,
            'population_size': self._population.size,
            'fitness_direction': self._direction.value,
            'best_fitness': self._best_fitness if self._has_best else None,
            'elapsed_seconds': self._elapsed,
            'convergence': self._early_stopper.get_convergence_info() if self._early_stopper else None,
            'error': str(self._error) if self._error else None
        }

    # Execution

    def run(self) -> SimulationState:
        """
        Step until a terminal state is reached and return it.

        Calling ``run`` again afterwards changes nothing. A failed run
        re-raises its SelectionError.
        """
        while not self._state.is_terminal:
            self.step()
        if self._error is not None:
            raise self._error
        return self._state

    def step(self) -> SimulationState:
        """Run a single generation cycle and return the resulting state."""
        if self._state.is_terminal:
            if self._error is not None:
                raise self._error
            return self._state

        if self._state is SimulationState.NOT_STARTED:
            logger.info(f"Starting simulation {self.simulation_id} with population_size="
                        f"{self._population.size}, selector={self._selector!r}")
        self._state = SimulationState.RUNNING

        started = time.perf_counter()
        try:
            self._advance()
        finally:
            self._elapsed += time.perf_counter() - started
        return self._state

    def _advance(self) -> None:
        ranked = self._population.rank(self._direction)
        generation = self._iterations.get()
        self._stats.on_generation(generation, ranked.fitnesses)

        if not self._has_best or is_better(ranked.best_fitness, self._best_fitness, self._direction):
            self._best = ranked.best
            self._best_fitness = ranked.best_fitness
            self._has_best = True

        self._log.debug(
            "generation_ranked",
            generation=generation,
            generation_best=ranked.best_fitness,
            best_fitness=self._best_fitness,
        )

        converged = (
            self._early_stopper.update(ranked.best_fitness)
            if self._early_stopper is not None else False
        )
        if self._iterations.reached():
            self._finish(SimulationState.MAX_ITERATIONS_REACHED)
            return
        if converged:
            self._finish(SimulationState.CONVERGED)
            return

        try:
            parents = self._selector.select(ranked, self._population.size, self._rng)
        except SelectionError as e:
            self._error = e
            logger.error(f"Simulation {self.simulation_id} failed at generation {generation}: {e}")
            self._finish(SimulationState.FAILED)
            raise

        offspring = [first.crossover(second).mutate() for first, second in parents]
        self._population.replace(offspring)
        self._iterations.inc()

    def _finish(self, state: SimulationState) -> None:
        self._state = state
        self._stats.on_finish(state, self.generation_count)
        if state is not SimulationState.FAILED:
            logger.info(f"Simulation {self.simulation_id} finished ({state.value}) after "
                        f"{self.generation_count} generations. Best fitness: {self._best_fitness}")
