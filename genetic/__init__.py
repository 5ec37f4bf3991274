"""
🧬 Genetic Algorithm Engine
Generational simulation over caller-defined individuals
"""

__version__ = "0.1.0"

from .builder import SimulatorBuilder
from .convergence import EarlyStopper, IterationLimit
from .exceptions import (
    ConfigurationError,
    GeneticError,
    SelectionError,
    UninitializedResultError
)
from .fitness import FitnessDirection, fitness_abs_diff, fitness_zero, roulette_weights
from .phenotype import Phenotype
from .population import Population, RankedPopulation, rank_population
from .selection import (
    MaximizeSelector,
    RouletteSelector,
    Selector,
    StochasticSelector,
    TournamentSelector,
    create_selector
)
from .simulator import SimulationState, Simulator
from .stats import GenerationHistory, GenerationStats, NoStats, StatsCollector

__all__ = [
    'Simulator',
    'SimulatorBuilder',
    'SimulationState',
    'FitnessDirection',
    'Phenotype',
    'Population',
    'RankedPopulation',
    'rank_population',
    'Selector',
    'TournamentSelector',
    'StochasticSelector',
    'RouletteSelector',
    'MaximizeSelector',
    'create_selector',
    'IterationLimit',
    'EarlyStopper',
    'StatsCollector',
    'NoStats',
    'GenerationHistory',
    'GenerationStats',
    'fitness_zero',
    'fitness_abs_diff',
    'roulette_weights',
    'GeneticError',
    'ConfigurationError',
    'SelectionError',
    'UninitializedResultError'
]
