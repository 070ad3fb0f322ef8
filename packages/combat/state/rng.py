"""
XorShift128 RNG - the single seedable randomness source for a combat.

The algorithm is libGDX's RandomXS128. Every random decision the engine
makes (shuffles, enemy intent rolls, random targets, random discards) is
drawn from one Random instance owned by the CombatManager, so a fixed
seed replays a combat exactly.

Random also tracks a call counter and can export/import its raw state,
which is what the save boundary records.
"""

from typing import List, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")

_MASK64 = 0xFFFFFFFFFFFFFFFF


class XorShift128:
    """
    XorShift128 PRNG - matches libGDX RandomXS128.

    Two 64-bit words of state; seed0 and seed1 are public.
    """

    def __init__(self, seed: int, seed1: Optional[int] = None):
        """
        Seed from one 64-bit value, or load raw state words directly.

        Args:
            seed: Seed value, or the raw seed0 word when seed1 is given
            seed1: Raw seed1 word; skips the murmur mixing step
        """
        if seed1 is not None:
            self.seed0 = seed & _MASK64
            self.seed1 = seed1 & _MASK64
        else:
            # A zero seed would leave the generator stuck at zero
            if seed == 0:
                seed = -0x8000000000000000
            self.seed0 = self._murmur_hash3(seed)
            self.seed1 = self._murmur_hash3(self.seed0)

    @staticmethod
    def _murmur_hash3(x: int) -> int:
        """64-bit murmur3 fmix, spreads the seed bits."""
        x = x & _MASK64
        x ^= x >> 33
        x = (x * 0xff51afd7ed558ccd) & _MASK64
        x ^= x >> 33
        x = (x * 0xc4ceb9fe1a85ec53) & _MASK64
        x ^= x >> 33
        return x

    def _next_long(self) -> int:
        """Generate next signed 64-bit value."""
        s1 = self.seed0
        s0 = self.seed1
        self.seed0 = s0

        s1 ^= (s1 << 23) & _MASK64
        self.seed1 = (s1 ^ s0 ^ (s1 >> 17) ^ (s0 >> 26)) & _MASK64

        result = (self.seed0 + self.seed1) & _MASK64
        if result >= 0x8000000000000000:
            result -= 0x10000000000000000
        return result

    def next_int(self, bound: int) -> int:
        """Random int in [0, bound)."""
        if bound <= 0:
            raise ValueError("bound must be positive")

        while True:
            bits = (self._next_long() & _MASK64) >> 1
            val = bits % bound
            # Bias rejection
            if bits - val + (bound - 1) >= 0:
                return int(val)

    def next_float(self) -> float:
        """Random float in [0, 1) with 24 bits of precision."""
        return ((self._next_long() & _MASK64) >> 40) / (1 << 24)

    def next_boolean(self) -> bool:
        """Low bit of the next long."""
        return (self._next_long() & 1) != 0

    def get_state(self, index: int) -> int:
        """Raw state word by index (0 or 1)."""
        if index == 0:
            return self.seed0
        return self.seed1

    def copy(self) -> 'XorShift128':
        """Create a copy with same state."""
        return XorShift128(self.seed0, self.seed1)


class Random:
    """
    Seeded random source used throughout a combat.

    random_int(n) returns a value in [0, n] INCLUSIVE, which is the
    convention every caller in the engine relies on.
    """

    def __init__(self, seed: int = 0, counter: int = 0):
        """
        Args:
            seed: 64-bit seed value
            counter: Number of calls to skip ahead
        """
        self.seed = seed
        self._rng = XorShift128(seed)
        self.counter = 0

        for _ in range(counter):
            self.random_int(999)

    def random_int(self, range_val: int) -> int:
        """Random int in [0, range_val] INCLUSIVE."""
        if range_val < 0:
            raise ValueError("range must be non-negative")
        self.counter += 1
        return self._rng.next_int(range_val + 1)

    def random_int_range(self, start: int, end: int) -> int:
        """Random int in [start, end] INCLUSIVE."""
        if end < start:
            raise ValueError("end must not be less than start")
        self.counter += 1
        return start + self._rng.next_int(end - start + 1)

    def random_float(self) -> float:
        """Random float in [0, 1)."""
        self.counter += 1
        return self._rng.next_float()

    def random_boolean(self, chance: float = None) -> bool:
        """
        Random boolean.

        With no argument: 50% chance via the low bit.
        With a float argument: next_float() < chance.
        """
        self.counter += 1
        if chance is None:
            return self._rng.next_boolean()
        return self._rng.next_float() < chance

    def choice(self, values: Sequence[T]) -> T:
        """Pick one element uniformly."""
        if not values:
            raise ValueError("Cannot choose from empty sequence")
        return values[self.random_int(len(values) - 1)]

    def shuffle(self, values: List[T]) -> None:
        """Fisher-Yates shuffle in place."""
        for i in range(len(values) - 1, 0, -1):
            j = self.random_int(i)
            values[i], values[j] = values[j], values[i]

    # ============ STATE ============

    def get_state(self) -> Tuple[int, int, int]:
        """Raw (seed0, seed1, counter) for the save boundary."""
        return self._rng.get_state(0), self._rng.get_state(1), self.counter

    def set_state(self, seed0: int, seed1: int, counter: int = 0) -> None:
        """Restore raw state exported by get_state()."""
        self._rng = XorShift128(seed0, seed1)
        self.counter = counter

    def copy(self) -> 'Random':
        """Create a copy with same state."""
        new = Random.__new__(Random)
        new.seed = self.seed
        new._rng = self._rng.copy()
        new.counter = self.counter
        return new


def seed_to_long(seed_string: str) -> int:
    """
    Convert a seed string (e.g. "ABC123") to its numeric value.

    Base-35 encoding: 0-9 + A-Z excluding O (O is read as 0).
    Pure numeric strings are returned as plain integers.
    """
    if seed_string.lstrip('-').isdigit():
        return int(seed_string)

    characters = "0123456789ABCDEFGHIJKLMNPQRSTUVWXYZ"
    seed_string = seed_string.upper().replace("O", "0")

    result = 0
    for char in seed_string:
        remainder = characters.find(char)
        if remainder == -1:
            continue
        result *= len(characters)
        result += remainder

    return result
