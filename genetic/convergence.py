"""
📊 Convergence Tracking
Iteration limits and early stopping on stalled best fitness
"""

from typing import Any, Dict, Optional

from .fitness import fitness_abs_diff


class IterationLimit:
    """Counts generations against an optional maximum."""

    def __init__(self, maximum: Optional[int] = None):
        self.maximum = maximum
        self.current = 0

    def inc(self) -> None:
        self.current += 1

    def reached(self) -> bool:
        """Whether the maximum has been reached. Never true without a maximum."""
        return self.maximum is not None and self.current >= self.maximum

    def reset(self) -> None:
        self.current = 0

    def get(self) -> int:
        return self.current


class EarlyStopper:
    """
    Detects convergence of the generational best fitness.

    Each update compares the new best fitness with the previous
    generation's best. When their absolute difference stays below
    ``threshold`` for ``patience`` consecutive updates, the stopper is
    reached. Any larger change resets the streak.
    """

    def __init__(self, threshold: Any, patience: int = 1):
        """
        Initialize early stopper.

        Args:
            threshold: Fitness delta below which a generation counts as stalled
            patience: Consecutive stalled generations required to stop
        """
        self.threshold = threshold
        self.patience = patience

        self.previous: Optional[Any] = None
        self.last_delta: Optional[Any] = None
        self.stalled = IterationLimit(patience)

    def update(self, best_fitness: Any) -> bool:
        """
        Record the best fitness of a newly ranked generation.

        Returns:
            bool: True if converged
        """
        if self.previous is not None:
            self.last_delta = fitness_abs_diff(best_fitness, self.previous)
            if self.last_delta < self.threshold:
                self.stalled.inc()
            else:
                self.stalled.reset()
        self.previous = best_fitness
        return self.reached()

    def reached(self) -> bool:
        return self.stalled.reached()

    def reset(self) -> None:
        self.previous = None
        self.last_delta = None
        self.stalled.reset()

    def get_convergence_info(self) -> Dict[str, Any]:
        """Get detailed convergence information."""
        return {
            'converged': self.reached(),
            'threshold': self.threshold,
            'patience': self.patience,
            'stalled_generations': self.stalled.get(),
            'last_delta': self.last_delta,
        }
