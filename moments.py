import math
from dataclasses import dataclass
from typing import Sequence, TypeAlias, Union

import numpy as np
import numpy.typing as npt

from errors import InvalidInputError

# 1D array of float64 samples, in draw order
Samples: TypeAlias = npt.NDArray[np.float64]
SampleLike: TypeAlias = Union[Samples, Sequence[float]]


@dataclass(frozen=True)
class Statistics:
    mean: float
    stddev: float
    min: float
    max: float
    skewness: float
    kurtosis: float  # excess: a normal distribution gives ~0


def as_samples(data: SampleLike) -> Samples:
    """Coerce data to a non-empty 1D float64 array."""
    arr = np.asarray(data, dtype=np.float64)
    if arr.ndim != 1:
        raise InvalidInputError(f"samples must be one-dimensional, got shape {arr.shape}")
    if arr.size == 0:
        raise InvalidInputError("cannot compute statistics of an empty sample sequence")
    return arr


def calculate_statistics(data: SampleLike) -> Statistics:
    """Compute the population moments of a sample sequence.

    The first pass gets the mean and variance from the sum and sum of squares,
    variance = E[x^2] - mean^2. The second pass accumulates the third and
    fourth standardized moments, which need the stddev from the first.

    A constant sequence (min == max) returns mean == min == max, stddev 0
    and NaN skewness and kurtosis, whatever rounding the sums would give.
    Otherwise the mean is clamped into [min, max]. A near-constant sequence
    can still make the variance slightly negative through cancellation; its
    square root is then NaN, and so are skewness and kurtosis. Overflow gives
    inf or NaN without a warning.

    Raises:
        InvalidInputError: if data is empty.
    """
    x = as_samples(data)
    n = x.size
    lo = float(np.min(x))
    hi = float(np.max(x))

    if lo == hi:
        return Statistics(
            mean=lo, stddev=0.0, min=lo, max=hi, skewness=math.nan, kurtosis=math.nan
        )

    with np.errstate(invalid="ignore", divide="ignore", over="ignore"):
        mean = float(np.sum(x)) / n
        sq_sum = float(np.dot(x, x))
        variance = sq_sum / n - mean * mean
        mean = min(max(mean, lo), hi)

        stddev = float(np.sqrt(np.float64(variance)))
        diff = (x - mean) / stddev
        diff2 = diff * diff
        skewness = float(np.sum(diff * diff2)) / n
        kurtosis = float(np.sum(diff2 * diff2)) / n - 3.0

    return Statistics(
        mean=mean,
        stddev=stddev,
        min=lo,
        max=hi,
        skewness=skewness,
        kurtosis=kurtosis,
    )
