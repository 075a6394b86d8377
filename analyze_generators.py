import sys
import time
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np

from config import BenchmarkConfig, load_config
from errors import InvalidInputError, NormBenchError
from generators import BitSource, NormalSampler, default_generators, normal_distribution
from histogram import render_histogram
from moments import Samples, Statistics, calculate_statistics


@dataclass
class BenchmarkResult:
    name: str
    elapsed_ms: float
    stats: Statistics
    samples: Samples


def draw_samples(normal: NormalSampler, samples: int) -> Tuple[Samples, float]:
    """Draw exactly `samples` values in order, timing only the draws.

    Returns:
        (samples array, elapsed wall-clock time in milliseconds)
    """
    if samples < 1:
        raise InvalidInputError(f"samples must be positive, got {samples}")
    numbers = np.empty(samples, dtype=np.float64)

    start = time.perf_counter()
    for i in range(samples):
        numbers[i] = normal()
    end = time.perf_counter()

    return numbers, (end - start) * 1000.0


def analyze_generator(name: str, source: BitSource, config: BenchmarkConfig) -> BenchmarkResult:
    """Time `config.samples` standard-normal draws from source and compute their moments."""
    normal = normal_distribution(source)
    numbers, elapsed_ms = draw_samples(normal, config.samples)
    stats = calculate_statistics(numbers)
    return BenchmarkResult(name=name, elapsed_ms=elapsed_ms, stats=stats, samples=numbers)


def format_report(result: BenchmarkResult, config: BenchmarkConfig) -> List[str]:
    """Return the lines of one generator's report, histogram included."""
    s = result.stats
    lines = [
        "",
        f"=== {result.name} ===",
        f"Time taken: {result.elapsed_ms:.2f} ms",
        f"Mean: {s.mean:.2f} (expected: 0)",
        f"StdDev: {s.stddev:.2f} (expected: 1)",
        f"Range: [{s.min:.2f}, {s.max:.2f}]",
        f"Skewness: {s.skewness:.2f} (expected: 0)",
        f"Excess Kurtosis: {s.kurtosis:.2f} (expected: 0)",
        "",
        "Distribution:",
    ]
    lines.extend(render_histogram(result.samples, config.bins, config.height))
    lines.append("")
    return lines


def run_benchmarks(
    generators: Iterable[Tuple[str, BitSource]],
    config: BenchmarkConfig,
) -> Tuple[List[BenchmarkResult], List[str]]:
    """Benchmark each generator in turn and print its report.

    A NormBenchError aborts only the generator that raised it; it is reported
    on stderr and the remaining generators still run.

    Returns:
        (results of the generators that finished, names of those that failed)
    """
    print(f"Analyzing generators with {config.samples} samples")
    results: List[BenchmarkResult] = []
    failed: List[str] = []
    for name, source in generators:
        try:
            result = analyze_generator(name, source, config)
            report = format_report(result, config)
        except NormBenchError as exc:
            print(f"normbench: {name}: {exc}", file=sys.stderr)
            failed.append(name)
            continue
        for line in report:
            print(line)
        # drop the sample buffer before the next generator starts
        result.samples = np.empty(0, dtype=np.float64)
        results.append(result)
    return results, failed


def main(config: Optional[BenchmarkConfig] = None) -> None:
    if config is None:
        try:
            config = load_config()
        except InvalidInputError as exc:
            print(f"normbench: {exc}", file=sys.stderr)
            sys.exit(1)

    _, failed = run_benchmarks(default_generators(config.seed), config)
    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
