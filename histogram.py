from typing import List, TypeAlias

import numpy as np
import numpy.typing as npt

from errors import DegenerateRangeError, InvalidInputError
from moments import SampleLike, as_samples

Histogram: TypeAlias = npt.NDArray[np.int64]

DEFAULT_BINS = 50
DEFAULT_HEIGHT = 20


def bin_counts(data: SampleLike, bins: int = DEFAULT_BINS, *, strict: bool = False) -> Histogram:
    """Count samples per bin over [min, max].

    A value v goes to bin floor((v - min) / (max - min) * (bins - 1)). Any
    index outside [0, bins), NaN included, is dropped rather than moved to an
    edge bin, so the counts sum to at most len(data). With the (bins - 1)
    factor the last bin only ever holds values equal to max.

    When every sample has the same value the range is empty. All samples are
    then counted in bin 0, or DegenerateRangeError is raised if strict is set.
    """
    if bins < 1:
        raise InvalidInputError(f"bins must be positive, got {bins}")
    x = as_samples(data)
    counts = np.zeros(bins, dtype=np.int64)

    lo = float(np.min(x))
    hi = float(np.max(x))
    if lo == hi:
        if strict:
            raise DegenerateRangeError(f"all {x.size} samples equal {lo}; value range is empty")
        counts[0] = x.size
        return counts

    with np.errstate(invalid="ignore", over="ignore"):
        scaled = np.floor((x - lo) / (hi - lo) * (bins - 1))
    keep = (scaled >= 0) & (scaled < bins)
    counts += np.bincount(scaled[keep].astype(np.int64), minlength=bins)
    return counts


def render_histogram(
    data: SampleLike,
    bins: int = DEFAULT_BINS,
    height: int = DEFAULT_HEIGHT,
) -> List[str]:
    """Render a fixed-height ASCII bar chart of data.

    Rows run from height down to 0. Row h is labelled with the count
    threshold max_count * h / height and marks every bin whose
    count * height >= max_count * h, so the bottom row is full whenever any
    sample was counted. When no sample lands in a bin (all NaN) no bars are
    drawn.
    """
    if height < 1:
        raise InvalidInputError(f"height must be positive, got {height}")
    x = as_samples(data)
    counts = bin_counts(x, bins)
    max_count = int(np.max(counts))

    lines = []
    for h in range(height, -1, -1):
        bars = "".join(
            "*" if max_count > 0 and int(c) * height >= max_count * h else " "
            for c in counts
        )
        lines.append(f"{max_count * h / height:8.2f} |{bars}")

    pad = " " * (bins // 2 - 5)
    lines.append("-" * 9 + "|" + "-" * bins)
    lines.append(f"{float(np.min(x)):8.2f} {pad}Value{pad}{float(np.max(x)):.2f}")
    return lines


def print_histogram(
    data: SampleLike,
    bins: int = DEFAULT_BINS,
    height: int = DEFAULT_HEIGHT,
) -> None:
    for line in render_histogram(data, bins, height):
        print(line)
