"""Custom exception hierarchy for road generation."""


class RoadGenError(Exception):
    """Base exception for generator failures."""


class ConfigurationError(RoadGenError):
    """Raised when generator settings contradict each other or are out of range."""


class CatalogError(RoadGenError):
    """Raised when tile catalog data cannot be parsed."""


class GenerationError(RoadGenError):
    """Raised when a run cannot produce an accepted grid."""


class ValidationError(RoadGenError):
    """Raised when the finished grid fails its integrity checks."""
