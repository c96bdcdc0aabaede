"""Tests for the calc35 command line."""

import json

from calc35.cli import main


class TestMain:
    """Test the CLI entry point."""

    def test_power_on(self, capsys):
        """Without arguments the power-on register file is printed."""
        assert main([]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[0] == 'A: 00000000000000'
        assert out[1] == 'B: 02999999999999'
        assert out[2] == 'C: 00000000000990'
        assert len(out) == 7

    def test_canonicalize_arguments(self, capsys):
        """A and B given on the command line are canonicalized."""
        assert main(['00050000000000', '02999999999999']) == 0
        assert 'C: 05000000000998' in capsys.readouterr().out

    def test_overflow(self, capsys):
        """Overflowing entries print the sentinel."""
        assert main(['91250000000099', '09299999999999']) == 0
        out = capsys.readouterr().out
        assert 'A: 99999999999099' in out
        assert 'C: 99999999999099' in out

    def test_json(self, capsys):
        """--json prints a decodable snapshot."""
        assert main(['01500000000000', '02999999999999', '--json']) == 0
        data = json.loads(capsys.readouterr().out)
        assert data['_class'] == 'RegisterFile'
        assert data['registers']['_dict']['C'] == {'_register': '01500000000000'}

    def test_malformed(self, capsys):
        """Malformed registers exit with status 2."""
        assert main(['0150', '02999999999999']) == 2
        assert '[ERROR]' in capsys.readouterr().err

    def test_sweep(self, capsys):
        """--sweep reports a clean run."""
        assert main(['--sweep', '12', '--seed', '7', '--no-progress']) == 0
        out = capsys.readouterr().out
        assert out.startswith('Swept ')
        assert out.rstrip().endswith('OK')
