"""Tests for the 14-nibble register."""

import random

import pytest

from calc35.exceptions import FormatError
from calc35.registers.register import Register, RegId


class TestRegisterConstruction:
    """Test building registers from wire text."""

    def test_default_is_zero(self):
        """A register built without text holds 14 zeros."""
        reg = Register()
        assert reg.nibbles == (0,) * 14
        assert reg.as_decimal_string() == '00000000000000'

    def test_most_significant_character_first(self):
        """Character 0 lands in nibble 13, character 13 in nibble 0."""
        reg = Register('91250000000902')
        assert reg[13] == 9
        assert reg[12] == 1
        assert reg[11] == 2
        assert reg[10] == 5
        assert reg[2] == 9
        assert reg[1] == 0
        assert reg[0] == 2

    def test_round_trip(self):
        """Rendering a constructed register gives back the same text."""
        rng = random.Random(35)
        samples = ['00000000000000', '02999999999999', '99999999999099', '01234567890123']
        samples += [''.join(rng.choice('0123456789') for _ in range(14)) for _ in range(50)]
        for text in samples:
            assert Register(text).as_decimal_string() == text
            assert str(Register(text)) == text

    @pytest.mark.parametrize('text', ['', '0', '0000000000000', '000000000000000', '0' * 28])
    def test_wrong_length(self, text):
        """Short or long text is rejected rather than padded or truncated."""
        with pytest.raises(FormatError) as excinfo:
            Register(text)
        assert excinfo.value.text == text
        assert 'expected 14 digits' in str(excinfo.value)

    @pytest.mark.parametrize('text', ['0000000000000A', ' 0000000000000', '-0000000000000', '0000000.000000'])
    def test_non_digit(self, text):
        """Any non-digit character is rejected."""
        with pytest.raises(FormatError) as excinfo:
            Register(text)
        assert str(excinfo.value).startswith('[ERROR]')


class TestRegisterMutation:
    """Test single nibble writes."""

    def test_set_nibble(self):
        """set_nibble writes exactly one position."""
        reg = Register()
        reg.set_nibble(13, 9)
        reg.set_nibble(0, 5)
        assert reg.as_decimal_string() == '90000000000005'

    @pytest.mark.parametrize('index', [-1, 14, 100])
    def test_set_nibble_bad_index(self, index):
        """Indices outside 0-13 are refused."""
        with pytest.raises(IndexError):
            Register().set_nibble(index, 1)

    @pytest.mark.parametrize('value', [-1, 10, 15])
    def test_set_nibble_bad_value(self, value):
        """Only decimal digits can be stored."""
        with pytest.raises(ValueError):
            Register().set_nibble(0, value)

    def test_length_never_changes(self):
        """Writes never grow or shrink the register."""
        reg = Register('01234567890123')
        for idx in range(14):
            reg.set_nibble(idx, 7)
        assert len(reg.nibbles) == 14
        assert reg.as_decimal_string() == '7' * 14

    def test_copy_is_independent(self):
        """Mutating a copy leaves the original alone."""
        reg = Register('01500000000000')
        clone = reg.copy()
        clone.set_nibble(12, 9)
        assert reg.as_decimal_string() == '01500000000000'
        assert clone.as_decimal_string() == '09500000000000'


class TestRegisterEquality:
    """Test comparison and hashing."""

    def test_equal_registers(self):
        """Registers with the same nibbles compare and hash equal."""
        assert Register('01500000000000') == Register('01500000000000')
        assert hash(Register('01500000000000')) == hash(Register('01500000000000'))
        assert Register('01500000000000') != Register('91500000000000')

    def test_not_equal_to_string(self):
        """A register is not equal to its wire text."""
        assert Register('01500000000000') != '01500000000000'

    def test_repr(self):
        """repr shows the wire text."""
        assert repr(Register('01500000000000')) == "Register('01500000000000')"


class TestRegId:
    """Test register identifiers."""

    def test_identifiers(self):
        """Exactly the seven letters A-F and M exist."""
        assert [reg_id.value for reg_id in RegId] == ['A', 'B', 'C', 'D', 'E', 'F', 'M']

    def test_lookup_by_letter(self):
        """Identifiers are looked up by letter, not by number."""
        assert RegId('M') is RegId.M
        with pytest.raises(ValueError):
            RegId(6)
