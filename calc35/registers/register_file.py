"""The register file and the canonicalization of raw entry registers.

While a number is being keyed in, register A holds the digits as entered
(sign, mantissa digits left aligned, exponent sign and two exponent digits)
and register B records where the decimal point went: the marker nibble 2 sits
at the index of the A digit the point follows, every other position is filler.
Canonicalization turns that pair into register C, the normalized value with
exactly one digit before the decimal point and the exponent in tens-complement
form (so 985 means -15).

References:
    http://home.citycable.ch/pierrefleur/Jacques-Laporte/A&R.htm
    http://www.hpmuseum.org/techcpu.htm
"""

import logging

from calc35.registers.register import Register, RegId
from calc35.serialization import SerializableMixin
from calc35.types import DecimalString, ExponentLength, ExponentSignIndex, MantissaSignIndex, Nibble

logger = logging.getLogger(__name__)

# Sign flag value in A's nibble 13 and nibble 2 (and C's nibble 13).
MINUS: Nibble = 9
# Decimal point marker in B.
POINT: Nibble = 2

MAX_EXPONENT = 99
MIN_EXPONENT = -99

# The display just shows "0." when the calculator is turned on.
POWER_ON_A: DecimalString = '00000000000000'
POWER_ON_B: DecimalString = '02999999999999'

OVERFLOW_POSITIVE_A: DecimalString = '09999999999099'
OVERFLOW_NEGATIVE_A: DecimalString = '99999999999099'
OVERFLOW_B: DecimalString = '02000000000000'

UNDERFLOW_A: DecimalString = POWER_ON_A
UNDERFLOW_B: DecimalString = POWER_ON_B


class RegisterFile(SerializableMixin):
    """The seven registers of the calculator.

    A and B are written by whatever maps key presses to raw entry, C is written
    only by canonicalize(), and D, E, F and M are left to the arithmetic layer.
    Nothing here locks: the A/B/C read-modify-write is not atomic, so callers
    that feed input from several sources must funnel them through one owner.
    """

    registers: dict[RegId, Register]

    def __init__(
        self,
        decimal_string_a: DecimalString = POWER_ON_A,
        decimal_string_b: DecimalString = POWER_ON_B,
    ) -> None:
        """Loads A and B from decimal strings and canonicalizes them into C.

        The remaining registers start out as zeros.

        Raises:
            FormatError: if either string is not a valid register.
        """
        self.registers = {reg_id: Register() for reg_id in RegId}
        self.registers[RegId.A] = Register(decimal_string_a)
        self.registers[RegId.B] = Register(decimal_string_b)
        self.canonicalize()

    def canonicalize(self) -> None:
        """Computes register C from whatever A and B currently show.

        Canonicalization can overflow (123.4567890 E99 does). When it overflows
        or underflows, A and B are overwritten with the sentinel values and the
        computation is rerun on them.
        """
        nibbles_a = self.registers[RegId.A].nibbles  # A determines almost everything.
        nibbles_b = self.registers[RegId.B].nibbles  # B only determines the decimal point.

        register_c = Register()

        # Three cursors walk down in lockstep. B's starts one nibble higher than
        # A's so that the marker for the point after a digit is only seen on the
        # following step (power-on "0." has the marker in B12, ahead of A11).
        # C's only moves once a significant digit has been found.
        idx_a = MantissaSignIndex
        idx_b = MantissaSignIndex
        idx_c = MantissaSignIndex

        positive = nibbles_a[idx_a] != MINUS
        register_c.set_nibble(idx_c, 0 if positive else MINUS)
        idx_a -= 1
        idx_c -= 1

        # Both flags only ever go from False to True.
        found_decimal = False
        found_digit = False
        # Canonical form has exactly one mantissa digit before the decimal point;
        # this counts how far the entered point is from that.
        digits_before_decimal = 0

        while idx_a >= ExponentLength:
            nibble_a = nibbles_a[idx_a]
            found_digit = found_digit or nibble_a != 0
            idx_a -= 1
            found_decimal = found_decimal or nibbles_b[idx_b] == POINT
            idx_b -= 1
            # Leading zeros are dropped.
            if found_digit:
                register_c.set_nibble(idx_c, nibble_a)
                idx_c -= 1
            digits_before_decimal += int(found_digit and not found_decimal) - int(found_decimal and not found_digit)

        assert idx_a == ExponentSignIndex
        exponent_is_negative = nibbles_a[idx_a] == MINUS
        idx_a -= 1

        exponent = 0
        while idx_a >= 0:
            exponent = 10 * exponent + nibbles_a[idx_a]
            idx_a -= 1
        if exponent_is_negative:
            exponent = -exponent

        adjusted_exponent = exponent + digits_before_decimal - 1
        logger.debug(
            f'Canonicalizing A={self.registers[RegId.A]} B={self.registers[RegId.B]}: '
            f'exponent {exponent}, {digits_before_decimal} digits before decimal, adjusted {adjusted_exponent}'
        )

        if adjusted_exponent > MAX_EXPONENT:
            self.overflow(positive)
            return
        if adjusted_exponent < MIN_EXPONENT:
            self.underflow()
            return

        adjusted_exponent_is_negative = adjusted_exponent < 0
        if adjusted_exponent_is_negative:
            adjusted_exponent = -(adjusted_exponent + 1)

        for idx_c in range(ExponentLength):
            digit = adjusted_exponent % 10
            register_c.set_nibble(idx_c, 9 - digit if adjusted_exponent_is_negative else digit)
            adjusted_exponent //= 10

        self.registers[RegId.C] = register_c

    def overflow(self, positive: bool) -> None:
        """Replaces A and B with the largest displayable magnitude of the given sign."""
        logger.info(f'Exponent overflow, substituting {"positive" if positive else "negative"} sentinel')
        self.registers[RegId.A] = Register(OVERFLOW_POSITIVE_A if positive else OVERFLOW_NEGATIVE_A)
        self.registers[RegId.B] = Register(OVERFLOW_B)
        self.canonicalize()

    def underflow(self) -> None:
        """Replaces A and B with zero."""
        logger.info('Exponent underflow, substituting zero')
        self.registers[RegId.A] = Register(UNDERFLOW_A)
        self.registers[RegId.B] = Register(UNDERFLOW_B)
        self.canonicalize()

    def reset(self) -> None:
        """Returns A and B to the power-on "0." pattern and recomputes C."""
        self.registers[RegId.A] = Register(POWER_ON_A)
        self.registers[RegId.B] = Register(POWER_ON_B)
        self.canonicalize()

    def load(self, reg_id: RegId, decimal_string: DecimalString) -> None:
        """Writes a register from its wire text.

        C is owned by canonicalize() and cannot be loaded directly. Loading A or
        B does not recompute C; call canonicalize() once the entry is complete.
        """
        if reg_id is RegId.C:
            raise ValueError('register C is only written by canonicalize()')
        self.registers[reg_id] = Register(decimal_string)

    def register(self, reg_id: RegId) -> Register:
        """Returns a copy of a register."""
        return self.registers[reg_id].copy()

    def decimal_string_for_register(self, reg_id: RegId) -> DecimalString:
        return self.registers[reg_id].as_decimal_string()

    def snapshot(self) -> dict[str, DecimalString]:
        """Maps each register letter to its decimal string."""
        return {reg_id.value: self.decimal_string_for_register(reg_id) for reg_id in RegId}

    def __getitem__(self, reg_id: RegId) -> Register:
        return self.register(reg_id)

    def __repr__(self) -> str:
        body = ', '.join(f'{name}={value}' for name, value in self.snapshot().items())
        return f'RegisterFile({body})'
