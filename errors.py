"""Exceptions raised while benchmarking generators."""


class NormBenchError(Exception):
    """Base class; the harness aborts only the failing generator's report."""


class InvalidInputError(NormBenchError, ValueError):
    """Raised for empty sample sequences and out-of-range parameters."""


class DegenerateRangeError(NormBenchError, ValueError):
    """Raised by strict binning when every sample has the same value."""


class ExhaustedSourceError(NormBenchError):
    """Raised when a finite source has no more outputs to give."""
