"""Data quality validation for daily bar sequences."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from datetime import date
from typing import Sequence

from chartfeed.errors import MalformedInput
from chartfeed.models.bar import Bar

# Checks a transform cannot compute through. OHLC consistency and
# emptiness are left to the store's quality gate.
PRECONDITION_CHECKS = ("no_nulls", "volume_sanity", "time_order")


@dataclass
class ValidationCheck:
    """Single validation check result."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class ValidationResult:
    """Aggregate validation result."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]

    def summary(self) -> str:
        return "; ".join(c.message or c.name for c in self.failed_checks)


def validate_bars(bars: Sequence[Bar]) -> ValidationResult:
    """Run all quality checks on a daily bar sequence.

    Checks:
        1. Not empty
        2. OHLCV values are finite numbers
        3. Prices strictly positive
        4. Volume non-negative
        5. Dates are ``YYYY-MM-DD`` and strictly increasing
        6. OHLC consistency (low <= open/close <= high)
    """
    result = ValidationResult()

    if not bars:
        result.checks.append(ValidationCheck("not_empty", False, "No bars provided"))
        return result
    result.checks.append(ValidationCheck("not_empty", True, f"{len(bars)} bars"))

    no_nulls = _check_no_nulls(bars)
    result.checks.append(no_nulls)
    if not no_nulls.passed:
        return result

    non_positive = sum(
        1 for b in bars
        if min(b.open, b.high, b.low, b.close) <= 0
    )
    if non_positive:
        result.checks.append(
            ValidationCheck("positive_prices", False, f"{non_positive} bars with price <= 0")
        )
    else:
        result.checks.append(ValidationCheck("positive_prices", True))

    result.checks.append(_check_volume(bars))
    result.checks.append(_check_time_order(bars))

    inconsistent = 0
    for b in bars:
        if b.high < b.low:
            inconsistent += 1
        elif b.high < b.open or b.high < b.close:
            inconsistent += 1
        elif b.low > b.open or b.low > b.close:
            inconsistent += 1
    if inconsistent:
        result.checks.append(
            ValidationCheck("ohlc_consistency", False, f"{inconsistent} bars with H<L or H<O/C")
        )
    else:
        result.checks.append(ValidationCheck("ohlc_consistency", True))

    return result


def ensure_well_formed(bars: Sequence[Bar]) -> None:
    """Raise MalformedInput if a transform cannot process ``bars``.

    An empty sequence is well-formed.
    """
    if not bars:
        return
    failed = [
        check for check in (
            _check_no_nulls(bars),
            _check_volume(bars),
            _check_time_order(bars),
        )
        if not check.passed
    ]
    if failed:
        raise MalformedInput("; ".join(c.message for c in failed))


# ---- individual checks ----

def _is_finite(val: object) -> bool:
    return isinstance(val, numbers.Real) and math.isfinite(val)


def _check_no_nulls(bars: Sequence[Bar]) -> ValidationCheck:
    bad = sum(
        1 for b in bars
        for val in (b.open, b.high, b.low, b.close, b.volume)
        if not _is_finite(val)
    )
    if bad:
        return ValidationCheck("no_nulls", False, f"{bad} non-numeric or non-finite values")
    return ValidationCheck("no_nulls", True)


def _check_volume(bars: Sequence[Bar]) -> ValidationCheck:
    neg_vol = sum(1 for b in bars if _is_finite(b.volume) and b.volume < 0)
    if neg_vol:
        return ValidationCheck("volume_sanity", False, f"{neg_vol} bars with negative volume")
    return ValidationCheck("volume_sanity", True)


def _check_time_order(bars: Sequence[Bar]) -> ValidationCheck:
    try:
        days = [_parse_day(b.time) for b in bars]
    except (TypeError, ValueError) as exc:
        return ValidationCheck("time_order", False, f"invalid bar date: {exc}")

    out_of_order = sum(1 for i in range(1, len(days)) if days[i] <= days[i - 1])
    if out_of_order:
        return ValidationCheck("time_order", False, f"{out_of_order} out of order")
    return ValidationCheck("time_order", True)


def _parse_day(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` date."""
    day = date.fromisoformat(value)
    # fromisoformat also takes 20240101 and week dates on 3.11+.
    if day.isoformat() != value:
        raise ValueError(f"{value!r} is not YYYY-MM-DD")
    return day
