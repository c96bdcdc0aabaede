from enum import Enum
from typing import Optional

from calc35.exceptions import FormatError
from calc35.registers.nibble import hex_character_from_nibble, nibble_from_character
from calc35.types import DecimalString, Nibble, NibbleIndex, RegisterLength


class RegId(Enum):
    """Identifiers of the seven registers in the register file."""

    A = 'A'  # General purpose (math or scratchpad), raw entry digits
    B = 'B'  # General purpose (math or scratchpad), raw entry decimal point
    C = 'C'  # X register
    D = 'D'  # Y register
    E = 'E'  # Z register
    F = 'F'  # T (top or trigonometric) register
    M = 'M'  # Scratchpad (like A and B, but no math)


class Register:
    """A 14-nibble (56-bit) calculator register.

    Nibble 13 is the mantissa sign, nibbles 12 to 3 the ten mantissa digits and
    nibbles 2 to 0 the exponent. The nibbles live in a fixed-length bytearray
    that is never resized.
    """

    _nibbles: bytearray

    def __init__(self, decimal_string: Optional[DecimalString] = None) -> None:
        """Creates a register, zeroed or from its 14-digit wire text.

        Args:
            decimal_string: e.g. "91250000000902", most significant nibble first.
        Raises:
            FormatError: if the text is not exactly 14 decimal digits.
        """
        self._nibbles = bytearray(RegisterLength)
        if decimal_string is None:
            return
        if len(decimal_string) != RegisterLength:
            raise FormatError(decimal_string, f'expected {RegisterLength} digits, got {len(decimal_string)}')
        nibble_idx = RegisterLength - 1
        for char in decimal_string:
            try:
                self._nibbles[nibble_idx] = nibble_from_character(char)
            except FormatError:
                raise FormatError(decimal_string, f'non-digit {char!r} at nibble {nibble_idx}') from None
            nibble_idx -= 1
        assert len(self._nibbles) == RegisterLength

    @property
    def nibbles(self) -> tuple[Nibble, ...]:
        """Read-only view, index 0 least significant."""
        return tuple(self._nibbles)

    def as_decimal_string(self) -> DecimalString:
        return ''.join(hex_character_from_nibble(nibble) for nibble in reversed(self._nibbles))

    def set_nibble(self, index: NibbleIndex, value: Nibble) -> None:
        if not 0 <= index < RegisterLength:
            raise IndexError(f'nibble index {index} outside register')
        if not 0 <= value <= 9:
            raise ValueError(f'nibble value {value} is not a decimal digit')
        self._nibbles[index] = value

    def copy(self) -> 'Register':
        clone = Register()
        clone._nibbles[:] = self._nibbles
        return clone

    def __getitem__(self, index: NibbleIndex) -> Nibble:
        if not 0 <= index < RegisterLength:
            raise IndexError(f'nibble index {index} outside register')
        return self._nibbles[index]

    def __str__(self) -> str:
        return self.as_decimal_string()

    def __repr__(self) -> str:
        return f'Register({self.as_decimal_string()!r})'

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Register):
            return NotImplemented
        return self._nibbles == other._nibbles

    def __ne__(self, other: object) -> bool:
        return not (self == other)

    def __hash__(self) -> int:
        return hash(bytes(self._nibbles))
