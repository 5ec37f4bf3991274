"""
🚨 Genetic Engine Errors
Error taxonomy for simulation configuration and runtime failures
"""


class GeneticError(Exception):
    """Base class for every error raised by the genetic engine."""
    pass


class ConfigurationError(GeneticError, ValueError):
    """Invalid simulator configuration, reported by the builder or a selector."""
    pass


class SelectionError(GeneticError):
    """A selector could not produce parents for the current generation."""
    pass


class UninitializedResultError(GeneticError):
    """A result was requested before any generation was ranked."""
    pass
