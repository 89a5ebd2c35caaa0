from __future__ import annotations


class AtlasError(RuntimeError):
    """Base class for failures while analysing a macro indicator."""


class FetchError(AtlasError):
    """Raised when observations cannot be fetched or parsed from upstream."""


class MetricComputationError(AtlasError):
    """Raised when a metric value cannot be derived from the observations."""


class InsufficientDataError(MetricComputationError):
    def __init__(self, message: str, *, required: int, available: int):
        super().__init__(message)
        self.required = required
        self.available = available


class UnmappedRiskBucketError(AtlasError):
    """Raised when a risk score falls outside every recommendation bucket."""
