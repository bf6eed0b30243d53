from __future__ import annotations


class RecipeEngineError(Exception):
    """Base class for errors raised by the recipe intelligence engine."""


class DimensionMismatch(RecipeEngineError):
    """Matrix or vector shapes are incompatible for the requested operation."""


class SingularMatrix(RecipeEngineError):
    """A pivot fell below the tolerance during Gauss-Jordan inversion."""


class EmptyCorpus(RecipeEngineError):
    """Clustering or planning was requested with no recipes."""
