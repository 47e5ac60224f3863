"""Custom exception hierarchy for strands grid generation."""


class StrandsError(Exception):
    """Base exception for generator failures."""


class InputValidationError(StrandsError):
    """Raised when the word list cannot be turned into a 48-letter grid."""


class PlacementError(StrandsError):
    """Raised when a path cannot be laid on the grid without breaking rules."""


class SpangramPlacementError(PlacementError):
    """Raised when no spangram path is found within the attempt budget."""


class WordPlacementError(PlacementError):
    """Raised when a non-spangram word cannot be placed in the free cells."""


class CoverageError(StrandsError):
    """Raised when gap filling bookkeeping does not add up."""


class ValidationError(StrandsError):
    """Raised when the finished grid integrity checks fail."""
