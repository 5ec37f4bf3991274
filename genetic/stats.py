"""
📈 Generation Statistics
Hooks for observing a run generation by generation
"""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from core.config import get_settings
from .fitness import is_real_fitness


class StatsCollector:
    """
    Receives the ranked fitness values of every generation.

    Subclasses override the hooks they need; the defaults do nothing.
    """

    def on_generation(self, generation: int, fitnesses: Sequence[Any]) -> None:
        """Called each time a generation is ranked, best fitness first."""

    def on_finish(self, state: Any, generation: int) -> None:
        """Called once when the simulator reaches a terminal state."""


class NoStats(StatsCollector):
    """Collector that ignores everything."""
    pass


@dataclass
class GenerationStats:
    """Summary of one ranked generation"""
    generation: int
    best_fitness: Any
    worst_fitness: Any
    mean_fitness: Optional[float] = None
    std_fitness: Optional[float] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'generation': self.generation,
            'best_fitness': self.best_fitness,
            'worst_fitness': self.worst_fitness,
            'mean_fitness': self.mean_fitness,
            'std_fitness': self.std_fitness,
            'timestamp': self.timestamp.isoformat()
        }


class GenerationHistory(StatsCollector):
    """
    Keeps a bounded history of per-generation statistics.

    Mean and standard deviation are only computed when every fitness value
    is a real number.
    """

    def __init__(self, max_size: Optional[int] = None):
        if max_size is None:
            max_size = get_settings().history_size
        self.records: deque = deque(maxlen=max_size)
        self.final_state: Optional[Any] = None

    def on_generation(self, generation: int, fitnesses: Sequence[Any]) -> None:
        mean_fitness = std_fitness = None
        if all(is_real_fitness(f) for f in fitnesses):
            values = np.asarray([float(f) for f in fitnesses], dtype=float)
            mean_fitness = float(np.mean(values))
            std_fitness = float(np.std(values))

        self.records.append(GenerationStats(
            generation=generation,
            best_fitness=fitnesses[0],
            worst_fitness=fitnesses[-1],
            mean_fitness=mean_fitness,
            std_fitness=std_fitness,
        ))

    def on_finish(self, state: Any, generation: int) -> None:
        self.final_state = state

    def best_fitness_history(self) -> List[Any]:
        return [record.best_fitness for record in self.records]

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [record.to_dict() for record in self.records]

    def __len__(self) -> int:
        return len(self.records)
