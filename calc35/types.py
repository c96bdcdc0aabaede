"""Type aliases and layout constants for calc35.

A register is 14 nibbles wide. Nibble 13 is the mantissa sign, nibbles 12 to 3
hold the ten mantissa digits and nibbles 2 to 0 hold the exponent (sign flag
followed by two magnitude digits).
"""

from typing import TypeAlias

# Should be a 4-bit unsigned int; stored in a bytearray slot.
Nibble: TypeAlias = int

# Position inside a register, 0 is least significant.
NibbleIndex: TypeAlias = int

# Wire format of a register: 14 decimal characters, most significant first.
DecimalString: TypeAlias = str

# Number of nibbles in a register.
RegisterLength = 14

# Number of nibbles devoted to the exponent.
ExponentLength = 3

# Index of the mantissa sign flag.
MantissaSignIndex = RegisterLength - 1

# Index of the exponent sign flag.
ExponentSignIndex = ExponentLength - 1
