"""Tests for JSON serialization of registers and register files."""

import json

import pytest

from calc35.registers.register import Register, RegId
from calc35.registers.register_file import RegisterFile
from calc35.serialization import Calc35Decoder, Calc35Encoder


class TestEncoder:
    """Test the type markers written by the encoder."""

    def test_register_as_wire_text(self):
        """Registers are written as their decimal string."""
        encoded = json.loads(json.dumps(Register('01500000000985'), cls=Calc35Encoder))
        assert encoded == {'_register': '01500000000985'}

    def test_reg_id_keys(self):
        """Dicts keyed by RegId use letters and carry a key type."""
        encoded = json.loads(json.dumps({RegId.A: 1, RegId.M: 2}, cls=Calc35Encoder))
        assert encoded == {'_dict': {'A': 1, 'M': 2}, '_key_type': 'RegId'}

    def test_register_file(self):
        """A register file is tagged with its class and module."""
        encoded = json.loads(RegisterFile().serialize())
        assert encoded['_class'] == 'RegisterFile'
        assert encoded['_module'] == 'calc35.registers.register_file'
        assert encoded['registers']['_dict']['B'] == {'_register': '02999999999999'}


class TestDecoder:
    """Test restoring objects."""

    def test_register_file_round_trip(self):
        """A deserialized register file holds the same registers without recomputing C."""
        regs = RegisterFile('01250000000010', '09299999999999')
        regs.load(RegId.M, '01234567890123')
        restored = RegisterFile.deserialize(regs.serialize(indent=2))
        assert isinstance(restored, RegisterFile)
        assert restored.snapshot() == regs.snapshot()
        assert set(restored.registers) == set(RegId)

    def test_restored_file_still_canonicalizes(self):
        """A restored register file is fully functional."""
        restored = RegisterFile.deserialize(RegisterFile().serialize())
        restored.load(RegId.A, '01500000000000')
        restored.canonicalize()
        assert restored.decimal_string_for_register(RegId.C) == '01500000000000'

    def test_wrong_class(self):
        """Deserializing something that is not a register file fails."""
        with pytest.raises(TypeError):
            RegisterFile.deserialize(json.dumps([1, 2, 3]))

    def test_unknown_class_left_as_dict(self):
        """Unknown classes decode to their attribute dict."""
        data = '{"_class": "Nope", "_module": "calc35.registers.register", "x": 1}'
        assert json.loads(data, cls=Calc35Decoder) == {'x': 1}

    def test_plain_dict(self):
        """Dicts without markers pass through."""
        assert json.loads('{"a": 1}', cls=Calc35Decoder) == {'a': 1}
