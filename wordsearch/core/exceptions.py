"""Custom exception hierarchy for word search solving and generation."""


class WordSearchError(Exception):
    """Base exception for solver and generator failures."""


class ConfigurationError(WordSearchError):
    """Raised for bad dimensions or vocabulary. Never safe to retry unchanged."""


class VocabularyError(ConfigurationError):
    """Raised when the vocabulary cannot be turned into search patterns."""


class GridShapeError(ConfigurationError):
    """Raised when grid data is ragged, empty, or holds illegal characters."""


class InfeasibleError(WordSearchError):
    """Raised when valid input admits no placement the search could find.

    ``exhaustive`` is true when the whole search space was explored, in which
    case retrying with different randomness cannot succeed.
    """

    def __init__(self, message: str, *, exhaustive: bool = False, placed_count: int = 0) -> None:
        super().__init__(message)
        self.exhaustive = exhaustive
        self.placed_count = placed_count


class ValidationError(WordSearchError):
    """Raised when the generated puzzle fails integrity checks."""


class PlacementConflictError(WordSearchError):
    """Raised when a word would overwrite a different letter or leave the grid."""
