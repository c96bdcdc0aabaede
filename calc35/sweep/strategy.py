import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from calc35.registers.register_file import MINUS, POINT
from calc35.types import DecimalString, ExponentLength, MantissaSignIndex

"""
All Strategy classes must implement generator() that returns a list of raw entries.

Each raw entry is the A/B register pair the key-entry layer would have produced
after some sequence of digit, point, sign and exponent keys.
"""

MANTISSA_DIGITS = MantissaSignIndex - ExponentLength
# B filler for positions without the decimal point.
FILLER = 9


@dataclass(frozen=True)
class RawEntry:
    """A pair of raw A and B registers in wire format."""

    decimal_string_a: DecimalString
    decimal_string_b: DecimalString

    def with_sign(self, negative: bool) -> 'RawEntry':
        """The same entry with A's mantissa sign set or cleared."""
        sign = str(MINUS) if negative else '0'
        return RawEntry(sign + self.decimal_string_a[1:], self.decimal_string_b)


def build_a(negative: bool, mantissa: str, exponent: int) -> DecimalString:
    """Builds raw register A from a sign, up to ten mantissa digits and an exponent in [-99, 99]."""
    if len(mantissa) > MANTISSA_DIGITS or not mantissa.isdigit():
        raise ValueError(f'mantissa {mantissa!r} must be 1-{MANTISSA_DIGITS} digits')
    if not -99 <= exponent <= 99:
        raise ValueError(f'exponent {exponent} must be in [-99, 99]')
    sign = str(MINUS) if negative else '0'
    exponent_sign = str(MINUS) if exponent < 0 else '0'
    return sign + mantissa.ljust(MANTISSA_DIGITS, '0') + exponent_sign + f'{abs(exponent):02d}'


def build_b(point_after: int) -> DecimalString:
    """Builds raw register B with the decimal point after the given mantissa digit.

    point_after counts mantissa digits from the left, 1 meaning after the first
    digit (the power-on "0." position).
    """
    if not 1 <= point_after <= MANTISSA_DIGITS:
        raise ValueError(f'point position {point_after} outside mantissa')
    digits = [str(FILLER)] * MANTISSA_DIGITS
    digits[point_after - 1] = str(POINT)
    return '0' + ''.join(digits) + str(FILLER) * ExponentLength


class Strategy(ABC):
    def __init__(self, num_runs: int = 1, seed: Optional[int] = None) -> None:
        self.num_runs: int = num_runs
        self.rng = random.Random(seed)

    @abstractmethod
    def generator(self) -> list[RawEntry]:
        """Generate raw entries."""

    def _random_mantissa(self, length: int) -> str:
        return ''.join(self.rng.choice('0123456789') for _ in range(length))


class RandomEntry(Strategy):
    """Random sign, mantissa, point position and exponent."""

    def generator(self) -> list[RawEntry]:
        inputs = []
        for _ in range(self.num_runs):
            mantissa = self._random_mantissa(self.rng.randint(1, MANTISSA_DIGITS))
            exponent = self.rng.randint(-99, 99)
            decimal_string_a = build_a(self.rng.random() < 0.5, mantissa, exponent)
            decimal_string_b = build_b(self.rng.randint(1, MANTISSA_DIGITS))
            inputs.append(RawEntry(decimal_string_a, decimal_string_b))
        return inputs


class LeadingZeros(Strategy):
    """Mantissas like 0.000123 that exercise leading-zero suppression."""

    def generator(self) -> list[RawEntry]:
        inputs = []
        for _ in range(self.num_runs):
            zeros = self.rng.randint(1, MANTISSA_DIGITS - 1)
            tail = self._random_mantissa(self.rng.randint(0, MANTISSA_DIGITS - zeros))
            mantissa = '0' * zeros + tail
            exponent = self.rng.randint(-99, 99)
            decimal_string_a = build_a(self.rng.random() < 0.5, mantissa, exponent)
            inputs.append(RawEntry(decimal_string_a, build_b(self.rng.randint(1, zeros))))
        return inputs


class PointWalk(Strategy):
    """Walk the decimal point through every mantissa position."""

    def generator(self) -> list[RawEntry]:
        inputs = []
        for _ in range(self.num_runs):
            mantissa = str(self.rng.randint(1, 9)) + self._random_mantissa(MANTISSA_DIGITS - 1)
            exponent = self.rng.randint(-99, 99)
            decimal_string_a = build_a(False, mantissa, exponent)
            for point_after in range(1, MANTISSA_DIGITS + 1):
                inputs.append(RawEntry(decimal_string_a, build_b(point_after)))
        return inputs


class ExponentExtremes(Strategy):
    """Exponents at the edge of the range, where overflow and underflow happen."""

    EXPONENTS = (-99, -98, -90, 90, 98, 99)

    def generator(self) -> list[RawEntry]:
        inputs = []
        for _ in range(self.num_runs):
            for exponent in self.EXPONENTS:
                leading = '0' * self.rng.randint(0, 3)
                mantissa = (leading + self._random_mantissa(MANTISSA_DIGITS))[:MANTISSA_DIGITS]
                decimal_string_a = build_a(self.rng.random() < 0.5, mantissa, exponent)
                decimal_string_b = build_b(self.rng.choice([1, 2, MANTISSA_DIGITS]))
                inputs.append(RawEntry(decimal_string_a, decimal_string_b))
        return inputs
