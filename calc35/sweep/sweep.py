"""Property sweep over generated raw entries.

Every generated A/B pair is canonicalized in a fresh register file and the
result is checked against the properties canonicalization must keep:

- wire text of A and B survives a register round trip;
- canonicalizing a second time changes nothing (this is also the fixed point
  of the overflow and underflow sentinels);
- an overflow sentinel keeps the sign of the entry;
- C carries the sign of the entry, except after underflow;
- flipping only the mantissa sign of the entry flips only the sign of C;
- C is normalized: its first mantissa digit is nonzero unless the value is zero.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from tqdm import tqdm

from calc35.registers.register import Register, RegId
from calc35.registers.register_file import (
    MINUS,
    OVERFLOW_B,
    OVERFLOW_NEGATIVE_A,
    OVERFLOW_POSITIVE_A,
    UNDERFLOW_A,
    UNDERFLOW_B,
    RegisterFile,
)
from calc35.sweep.strategy import ExponentExtremes, LeadingZeros, PointWalk, RandomEntry, RawEntry, Strategy
from calc35.types import ExponentLength, MantissaSignIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Violation:
    """A raw entry that broke one of the canonicalization properties."""

    entry: RawEntry
    prop: str
    detail: str


@dataclass
class SweepReport:
    """Outcome of a sweep."""

    total: int = 0
    overflows: int = 0
    underflows: int = 0
    violations: list[Violation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations


def default_strategies(num_runs: int, seed: Optional[int] = None) -> list[Strategy]:
    """The strategy mix used by the CLI, num_runs controlling the sample count of each."""
    return [
        RandomEntry(num_runs, seed),
        LeadingZeros(num_runs, seed),
        PointWalk(max(1, num_runs // 10), seed),
        ExponentExtremes(max(1, num_runs // 6), seed),
    ]


class SweepEngine:
    """Canonicalizes raw entries from a set of strategies and checks the results.

    Attributes:
        strategies (list[Strategy]): Generators of raw entries.
        progress (bool): Show a tqdm progress bar.
    """

    strategies: Sequence[Strategy]
    progress: bool

    def __init__(self, strategies: Sequence[Strategy], progress: bool = True) -> None:
        self.strategies = strategies
        self.progress = progress

    def run(self) -> SweepReport:
        entries: list[RawEntry] = []
        for strategy in self.strategies:
            generated = strategy.generator()
            logger.debug(f'{type(strategy).__name__} generated {len(generated)} entries')
            entries.extend(generated)

        report = SweepReport()
        for entry in tqdm(entries, disable=not self.progress):
            self._check_entry(entry, report)
        logger.info(
            f'Swept {report.total} entries: {report.overflows} overflows, '
            f'{report.underflows} underflows, {len(report.violations)} violations'
        )
        return report

    def _check_entry(self, entry: RawEntry, report: SweepReport) -> None:
        report.total += 1

        def fail(prop: str, detail: str) -> None:
            logger.warning(f'{prop} violated by A={entry.decimal_string_a} B={entry.decimal_string_b}: {detail}')
            report.violations.append(Violation(entry, prop, detail))

        for text in (entry.decimal_string_a, entry.decimal_string_b):
            if Register(text).as_decimal_string() != text:
                fail('round-trip', f'{text} rendered differently')

        regs = RegisterFile(entry.decimal_string_a, entry.decimal_string_b)
        result = regs.snapshot()
        raw = (entry.decimal_string_a, entry.decimal_string_b)
        settled = (result[RegId.A.value], result[RegId.B.value])

        negative_entry = entry.decimal_string_a[0] == str(MINUS)
        underflowed = False
        if settled != raw:
            if settled[1] == OVERFLOW_B and settled[0] in (OVERFLOW_POSITIVE_A, OVERFLOW_NEGATIVE_A):
                report.overflows += 1
                expected = OVERFLOW_NEGATIVE_A if negative_entry else OVERFLOW_POSITIVE_A
                if settled[0] != expected:
                    fail('overflow sign', f'got {settled[0]}, expected {expected}')
            elif settled == (UNDERFLOW_A, UNDERFLOW_B):
                report.underflows += 1
                underflowed = True
            else:
                fail('sentinel', f'A/B rewritten to unexpected {settled}')

        regs.canonicalize()
        if regs.snapshot() != result:
            fail('fixed point', f'{result} became {regs.snapshot()}')

        canonical_c = result[RegId.C.value]
        # Underflow goes to plain zero whatever the sign.
        if not underflowed and canonical_c[0] != (str(MINUS) if negative_entry else '0'):
            fail('sign', f'C={canonical_c} has the wrong sign')

        register_c = Register(canonical_c)
        mantissa = [register_c[idx] for idx in range(MantissaSignIndex - 1, ExponentLength - 1, -1)]
        if any(mantissa) and mantissa[0] == 0:
            fail('normalized', f'C={canonical_c} has a leading zero')

        flipped_entry = entry.with_sign(not negative_entry)
        flipped = RegisterFile(flipped_entry.decimal_string_a, flipped_entry.decimal_string_b)
        flipped_c = flipped.decimal_string_for_register(RegId.C)
        if flipped_c[1:] != canonical_c[1:]:
            fail('sign isolation', f'C={canonical_c} but sign-flipped C={flipped_c}')