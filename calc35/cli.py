#!/usr/bin/env python3

import argparse
import logging
import sys
from typing import Optional, Sequence

from calc35.exceptions import FormatError
from calc35.registers.register import RegId
from calc35.registers.register_file import POWER_ON_A, POWER_ON_B, RegisterFile
from calc35.sweep.sweep import SweepEngine, SweepReport, default_strategies

logger = logging.getLogger(__name__)


def print_registers(regs: RegisterFile) -> None:
    for reg_id in RegId:
        print('{}: {}'.format(reg_id.value, regs.decimal_string_for_register(reg_id)))


def print_report(report: SweepReport) -> None:
    print('Swept {} entries: {} overflows, {} underflows'.format(report.total, report.overflows, report.underflows))
    for violation in report.violations:
        print(
            '{} violated by A={} B={}: {}'.format(
                violation.prop, violation.entry.decimal_string_a, violation.entry.decimal_string_b, violation.detail
            )
        )
    print('OK' if report.ok else '{} violations'.format(len(report.violations)))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Canonicalize raw HP-35 entry registers A and B into C.')
    parser.add_argument('a', nargs='?', default=POWER_ON_A, help='Raw register A, 14 digits (default: power-on)')
    parser.add_argument('b', nargs='?', default=POWER_ON_B, help='Raw register B, 14 digits (default: power-on)')
    parser.add_argument('--json', default=False, action='store_true', help='Print the register file as JSON')
    parser.add_argument('--sweep', type=int, metavar='N', help='Run the property sweep with N samples per strategy')
    parser.add_argument('--seed', type=int, default=None, help='Seed for the sweep')
    parser.add_argument('--no-progress', default=False, action='store_true', help='Hide the sweep progress bar')
    parser.add_argument('-v', '--verbose', default=False, action='store_true', help='Enable debug logging')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s',
    )

    if args.sweep is not None:
        if args.sweep < 1:
            parser.error('--sweep needs a positive sample count')
        engine = SweepEngine(default_strategies(args.sweep, args.seed), progress=not args.no_progress)
        report = engine.run()
        print_report(report)
        return 0 if report.ok else 1

    try:
        regs = RegisterFile(args.a, args.b)
    except FormatError as e:
        print(e, file=sys.stderr)
        return 2

    if args.json:
        print(regs.serialize(indent=2))
    else:
        print_registers(regs)
    return 0


if __name__ == '__main__':
    sys.exit(main())
