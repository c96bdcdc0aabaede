"""Conversions between single characters and nibbles.

Used to build registers from their decimal wire text and to render them back
for testing and diagnostics.
"""

from calc35.exceptions import FormatError
from calc35.types import Nibble

_HEX_DIGITS = '0123456789ABCDEF'


def nibble_from_character(char: str) -> Nibble:
    """Converts a decimal digit character to its nibble value."""
    if len(char) != 1 or char not in '0123456789':
        raise FormatError(char, 'expected a single decimal digit')
    return Nibble(ord(char) - ord('0'))


def hex_character_from_nibble(nibble: Nibble) -> str:
    """Renders a nibble as one hexadecimal character (0-9, A-F)."""
    if not 0 <= nibble <= 0xF:
        raise ValueError(f'{nibble} does not fit in a nibble')
    return _HEX_DIGITS[nibble]
