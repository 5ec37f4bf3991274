"""
🧪 Shared fixtures
Small phenotypes used across the engine test suite
"""

from functools import total_ordering

import pytest


class StepToZero:
    """Integer individual: fitness |i|, crossover keeps the smaller i, mutation steps toward 0."""

    def __init__(self, i: int):
        self.i = i

    def fitness(self) -> int:
        return abs(self.i)

    def crossover(self, other: "StepToZero") -> "StepToZero":
        return StepToZero(min(self.i, other.i))

    def mutate(self) -> "StepToZero":
        if self.i < 0:
            return StepToZero(self.i + 1)
        if self.i > 0:
            return StepToZero(self.i - 1)
        return StepToZero(self.i)

    def __repr__(self) -> str:
        return f"StepToZero({self.i})"


class Fixed:
    """Individual with a constant fitness; offspring copy the first parent."""

    def __init__(self, value, tag=None):
        self.value = value
        self.tag = tag

    def fitness(self):
        return self.value

    def crossover(self, other: "Fixed") -> "Fixed":
        return Fixed(self.value, self.tag)

    def mutate(self) -> "Fixed":
        return Fixed(self.value, self.tag)

    def __repr__(self) -> str:
        return f"Fixed({self.value!r}, tag={self.tag!r})"


class Chaotic:
    """Deterministic but non-monotonic individual, fitness wanders up and down."""

    def __init__(self, value: int):
        self.value = value

    def fitness(self) -> int:
        return self.value

    def crossover(self, other: "Chaotic") -> "Chaotic":
        return Chaotic((self.value + 3 * other.value) % 1000)

    def mutate(self) -> "Chaotic":
        return Chaotic((self.value * 7919 + 13) % 1000)


class Recording:
    """Individual that records which operations produced it."""

    def __init__(self, value: int, history=()):
        self.value = value
        self.history = tuple(history)

    def fitness(self) -> int:
        return self.value

    def crossover(self, other: "Recording") -> "Recording":
        return Recording(self.value, ("crossover",))

    def mutate(self) -> "Recording":
        return Recording(self.value, self.history + ("mutate",))


@total_ordering
class Score:
    """Custom fitness type with zero() and abs_diff()."""

    def __init__(self, f: int):
        self.f = f

    @staticmethod
    def zero() -> "Score":
        return Score(0)

    def abs_diff(self, other: "Score") -> "Score":
        return Score(abs(self.f - other.f))

    def __eq__(self, other) -> bool:
        return isinstance(other, Score) and self.f == other.f

    def __lt__(self, other: "Score") -> bool:
        return self.f < other.f

    def __repr__(self) -> str:
        return f"Score({self.f})"


class Scored:
    """Individual whose fitness is a Score."""

    def __init__(self, f: int):
        self.f = f

    def fitness(self) -> Score:
        return Score(abs(self.f))

    def crossover(self, other: "Scored") -> "Scored":
        return Scored(min(self.f, other.f))

    def mutate(self) -> "Scored":
        return Scored(self.f - 1 if self.f > 0 else self.f)


@pytest.fixture
def step_population():
    """Factory for StepToZero populations over a range of integers"""
    def make(start: int = 0, stop: int = 100):
        return [StepToZero(i) for i in range(start, stop)]
    return make


@pytest.fixture
def fixed_population():
    """Factory for Fixed populations tagged with their position"""
    def make(values):
        return [Fixed(value, tag=index) for index, value in enumerate(values)]
    return make


@pytest.fixture
def chaotic_population():
    def make(size: int = 20):
        return [Chaotic((i * 37) % 1000) for i in range(size)]
    return make


@pytest.fixture
def recording_population():
    def make(size: int = 10):
        return [Recording(i) for i in range(size)]
    return make


@pytest.fixture
def scored_population():
    def make(start: int = 0, stop: int = 20):
        return [Scored(i) for i in range(start, stop)]
    return make


@pytest.fixture
def score_type():
    return Score
