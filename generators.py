import math
from typing import Callable, Iterable, List, Optional, Protocol, Sequence, Tuple, TypeAlias

import numpy as np

from errors import ExhaustedSourceError, InvalidInputError

NBITS = 64
MASK64 = (1 << NBITS) - 1

# A zero-argument callable returning the next standard-normal double.
NormalSampler: TypeAlias = Callable[[], float]


class BitSource(Protocol):
    """Anything that can be seeded with one 64-bit integer and yields uint64 outputs."""

    def seed(self, seed: int) -> None: ...

    def next_u64(self) -> int: ...


def check_seed(seed: int) -> int:
    """Reject seeds that do not fit in an unsigned 64-bit integer."""
    if not 0 <= seed <= MASK64:
        raise InvalidInputError(f"seed must be in [0, 2**{NBITS}), got {seed}")
    return seed


def rotl(x: int, k: int) -> int:
    """Rotate a 64-bit value left by k bits."""
    return ((x << k) | (x >> (NBITS - k))) & MASK64


def splitmix64(state: int) -> Tuple[int, int]:
    """One SplitMix64 step.

    Returns:
        (new_state, output)
    """
    state = (state + 0x9E3779B97F4A7C15) & MASK64
    z = state
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & MASK64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & MASK64
    return state, z ^ (z >> 31)


class Xoshiro256StarStar:
    """xoshiro256** by Blackman and Vigna.

    The 256-bit state is expanded from a single 64-bit seed with SplitMix64,
    which also guarantees the state is never all zero.
    """

    def __init__(self, seed: int = 0, state: Optional[Sequence[int]] = None):
        self.s: List[int] = [0, 0, 0, 0]
        if state is None:
            self.seed(seed)
        else:
            if len(state) != 4 or not any(state):
                raise InvalidInputError("xoshiro256** needs four state words, not all zero")
            self.s = [int(word) & MASK64 for word in state]

    def seed(self, seed: int) -> None:
        sm = check_seed(seed)
        for i in range(4):
            sm, self.s[i] = splitmix64(sm)

    def next_u64(self) -> int:
        s = self.s
        result = (rotl((s[1] * 5) & MASK64, 7) * 9) & MASK64

        t = (s[1] << 17) & MASK64
        s[2] ^= s[0]
        s[3] ^= s[1]
        s[1] ^= s[2]
        s[0] ^= s[3]
        s[2] ^= t
        s[3] = rotl(s[3], 45)

        return result


class NumpyBitSource:
    """Adapts a numpy bit generator class (MT19937, PCG64, ...) to BitSource.

    The wrapped ``numpy.random.Generator`` is kept so that the library's own
    standard-normal transform can be used for library generators.
    """

    def __init__(self, bit_generator_cls: type, seed: int = 0):
        self.bit_generator_cls = bit_generator_cls
        self.seed(seed)

    def seed(self, seed: int) -> None:
        self.bit_generator = self.bit_generator_cls(check_seed(seed))
        self.generator = np.random.Generator(self.bit_generator)

    def next_u64(self) -> int:
        return int(self.bit_generator.random_raw())


class ReplaySource:
    """A finite source that replays a fixed list of outputs, then runs dry."""

    def __init__(self, values: Iterable[int]):
        self.values = [int(v) & MASK64 for v in values]
        self.position = 0

    def seed(self, seed: int) -> None:
        # Replaying is deterministic by construction; seeding only rewinds.
        check_seed(seed)
        self.position = 0

    def next_u64(self) -> int:
        if self.position >= len(self.values):
            raise ExhaustedSourceError(
                f"replay source exhausted after {len(self.values)} outputs"
            )
        value = self.values[self.position]
        self.position += 1
        return value


def u64_to_unit(x: int) -> float:
    """Map a uint64 to a double in [0, 1) using its top 53 bits."""
    return (x >> 11) * (1.0 / (1 << 53))


class PolarNormal:
    """Marsaglia polar transform from uniform uint64 output to N(0, 1).

    Each accepted pair yields two variates; the second is cached and returned
    by the next call.
    """

    def __init__(self, source: BitSource):
        self.source = source
        self.saved: Optional[float] = None

    def __call__(self) -> float:
        if self.saved is not None:
            z, self.saved = self.saved, None
            return z

        while True:
            x = 2.0 * u64_to_unit(self.source.next_u64()) - 1.0
            y = 2.0 * u64_to_unit(self.source.next_u64()) - 1.0
            r2 = x * x + y * y
            if 0.0 < r2 <= 1.0:
                break

        mult = math.sqrt(-2.0 * math.log(r2) / r2)
        self.saved = x * mult
        return y * mult


def normal_distribution(source: BitSource) -> NormalSampler:
    """Build the standard-normal adapter for a source.

    Library generators use the library's own transform (numpy's ziggurat);
    everything else goes through the polar method on raw uint64 output.
    """
    if isinstance(source, NumpyBitSource):
        return source.generator.standard_normal
    return PolarNormal(source)


def default_generators(seed: int) -> List[Tuple[str, BitSource]]:
    """The generators compared by default, all seeded identically.

    numpy's MT19937 is the 32-bit Mersenne Twister, not the 64-bit mt19937_64
    variant, so its next_u64() outputs only carry 32 random bits. The normal
    draws go through numpy's own transform and are unaffected.
    """
    return [
        ("xoshiro256ss", Xoshiro256StarStar(seed)),
        ("mt19937", NumpyBitSource(np.random.MT19937, seed)),
        ("default_rng", NumpyBitSource(np.random.PCG64, seed)),
    ]
