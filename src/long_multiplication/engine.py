"""Digit-by-digit long multiplication engine."""

import logging
import sys
from dataclasses import dataclass, field
from typing import Any

from .errors import InputTooLargeError, InvalidDigitError, ProductOverflowError

logger = logging.getLogger(__name__)

DEFAULT_MAX_INPUT_DIGITS = 1000
DEFAULT_MAX_RESULT_DIGITS = 1000


@dataclass(frozen=True)
class Operand:
    """A non-negative integer with its canonical decimal digits."""

    name: str
    value: int
    digits: str

    @property
    def digit_count(self) -> int:
        return len(self.digits)

    def digit_at(self, position: int) -> int:
        """Return the digit at ``position``, counted from the least significant."""
        return ord(self.digits[self.digit_count - 1 - position]) - ord("0")


@dataclass(frozen=True)
class Row:
    """One multiplier digit's worth of partial computation."""

    index: int
    digit: int
    units_total: int
    carry_total: int
    row_sum: int

    @property
    def shifted(self) -> str:
        """Row sum followed by ``index`` zeros, as written in the final addition."""
        return str(self.row_sum) + "0" * self.index

    @property
    def partial_product(self) -> int:
        return self.row_sum * _weight(self.index)


@dataclass(frozen=True)
class Result:
    """The product of both operands."""

    value: int
    digits: str

    @property
    def digit_count(self) -> int:
        return len(self.digits)


@dataclass(frozen=True)
class Computation:
    """Everything the renderers need, computed once by :func:`compute`."""

    multiplier: Operand
    multiplicand: Operand
    rows: tuple[Row, ...]
    result: Result

    @property
    def partial_products(self) -> list[int]:
        return [row.partial_product for row in self.rows]

    @property
    def partial_sum(self) -> int:
        """Sum of the shifted row sums; equals ``result.value``."""
        return sum(self.partial_products)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary for JSON export."""
        return {
            "multiplier": self.multiplier.digits,
            "multiplicand": self.multiplicand.digits,
            "rows": [
                {
                    "index": row.index,
                    "digit": row.digit,
                    "units_total": row.units_total,
                    "carry_total": row.carry_total,
                    "row_sum": row.row_sum,
                    "partial_product": row.shifted,
                }
                for row in self.rows
            ],
            "result": self.result.digits,
        }


@dataclass
class EngineLimits:
    """Capacity limits enforced before and during the computation."""

    max_input_digits: int = DEFAULT_MAX_INPUT_DIGITS
    max_result_digits: int = DEFAULT_MAX_RESULT_DIGITS
    _max_value: int = field(init=False, repr=False)

    def __post_init__(self):
        if self.max_input_digits < 2:
            raise ValueError("max_input_digits must allow at least one digit per operand")
        if self.max_result_digits < 1:
            raise ValueError("max_result_digits must be positive")

        # Operands and the result go through int()/str(), which the
        # interpreter caps at sys.get_int_max_str_digits() (0 means no cap).
        conversion_limit = sys.get_int_max_str_digits()
        if conversion_limit:
            for setting in ("max_input_digits", "max_result_digits"):
                value = getattr(self, setting)
                if value > conversion_limit:
                    raise ValueError(
                        f"{setting} {value} exceeds the interpreter's integer string "
                        f"conversion limit of {conversion_limit} digits"
                    )

        self._max_value = _weight(self.max_result_digits) - 1

    @classmethod
    def from_config(cls, config) -> "EngineLimits":
        return cls(
            max_input_digits=config.max_input_digits,
            max_result_digits=config.max_result_digits,
        )

    def check_value(self, value: int, what: str) -> int:
        if value > self._max_value:
            raise ProductOverflowError(what, self.max_result_digits)
        return value


def parse_operand(text: str, name: str = "operand") -> Operand:
    """Validate a digit string and build its canonical :class:`Operand`.

    Args:
        text: Decimal digits, leading zeros allowed
        name: Role of the operand, used in error messages

    Returns:
        Operand with leading zeros stripped ("0" stays "0")

    Raises:
        InvalidDigitError: If ``text`` is empty or holds a non-digit
    """
    digits = _canonical_digits(text, name)
    return Operand(name=name, value=int(digits), digits=digits)


def _canonical_digits(text: str, name: str) -> str:
    if not text:
        raise InvalidDigitError(name, text)
    for position, char in enumerate(text):
        if not "0" <= char <= "9":
            raise InvalidDigitError(name, text, position)
    return text.lstrip("0") or "0"


def _weight(exponent: int) -> int:
    """Return 10 ** exponent by repeated multiplication."""
    weight = 1
    for _ in range(exponent):
        weight *= 10
    return weight


def _to_operand(operand: str | Operand, name: str, limits: EngineLimits) -> Operand:
    if isinstance(operand, Operand):
        return operand
    digits = _canonical_digits(operand, name)
    # Guard int() against huge strings before converting.
    if len(digits) > limits.max_input_digits:
        raise InputTooLargeError(len(digits), limits.max_input_digits)
    return Operand(name=name, value=int(digits), digits=digits)


def compute(
    multiplier: str | Operand,
    multiplicand: str | Operand,
    limits: EngineLimits | None = None,
) -> Computation:
    """Run the grade-school algorithm for ``multiplier x multiplicand``.

    One row is produced per multiplier digit, least significant first. Each
    row holds the units and carries of every single-digit product with the
    multiplicand, already weighted by their column, and their sum.

    Args:
        multiplier: Digit string or Operand for ``b``
        multiplicand: Digit string or Operand for ``a``
        limits: Capacity limits (defaults to :class:`EngineLimits`)

    Returns:
        Immutable Computation with the rows and the directly computed result
    """
    limits = limits or EngineLimits()

    b = _to_operand(multiplier, "multiplier", limits)
    a = _to_operand(multiplicand, "multiplicand", limits)

    total_digits = b.digit_count + a.digit_count
    if total_digits > limits.max_input_digits:
        raise InputTooLargeError(total_digits, limits.max_input_digits)

    logger.debug(f"Computing {b.digits} x {a.digits}")

    rows: list[Row] = []
    for i in range(b.digit_count):
        d1 = b.digit_at(i)
        units_total = 0
        carry_total = 0
        weight = 1
        for j in range(a.digit_count):
            d2 = a.digit_at(j)
            product = d1 * d2
            last = product % 10
            carry = product // 10
            units_total += last * weight
            weight *= 10
            carry_total += carry * weight

        limits.check_value(units_total, f"units total of row {i + 1}")
        limits.check_value(carry_total, f"carry total of row {i + 1}")
        row_sum = limits.check_value(units_total + carry_total, f"sum of row {i + 1}")
        rows.append(Row(i, d1, units_total, carry_total, row_sum))

    value = limits.check_value(b.value * a.value, "product")
    result = Result(value=value, digits=str(value))

    logger.debug(f"Computed {len(rows)} rows, result has {result.digit_count} digits")

    return Computation(multiplier=b, multiplicand=a, rows=tuple(rows), result=result)
