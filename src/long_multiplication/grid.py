"""Boxed, column-by-column table of a long multiplication.

Every digit sits in its own three-character cell, so the table shows which
column each unit, carry and column sum belongs to:

    ┏━━━━━━━┓
    ┃Pos.   ┃
    ┠┄┄┄┬┄┄┄┨
    ┃ 2 │ 1 ┃
    ┣━━━┷━━━┫
    ┃Ops.   ┃
    ┣━━━┯━━━┫
    ┃   │ 5 ┃
    ┃ x │ 7 ┃
    ┣━━━┿━━━┫
    ┃ 3 │   ┃ 1 ^
    ┠┈┈┈┼┈┈┈┨
    ┃   │ 5 ┃ 1 R
    ┣━━━┷━━━┫
    ...
"""

import logging

from .engine import Computation, Row
from .layout import pad

logger = logging.getLogger(__name__)

LEGEND = (
    "Symbols",
    "=======",
    "Pos. = Position.",
    "Ops. = Operations of the long multiplication.",
    "Sum. = Sum of each column of the multiplication.",
    "Sub n. = Subtotal of the last sum.",
    "Pro. = Product of the multiplication.",
    "n ^ = Carry-over.",
    "n R = The row number.",
    "n C = The column number of the sum of the rows.",
    "* Replace 'n' for a number.",
    "P = The product of multiplication.",
)

BLANK = "   "


def _digit(char: str) -> int:
    return ord(char) - ord("0")


def _cell(char: str) -> str:
    return f" {char} "


def _position_cell(number: int) -> str:
    text = str(number)
    if number < 100:
        text = " " + text
    if number < 10:
        text += " "
    return text


class GridTable:
    """Accumulates the lines of one table with ``columns`` cells per line."""

    def __init__(self, columns: int):
        self.columns = columns
        self.inner_width = 4 * columns - 1
        self.lines: list[str] = []

    def rule(self, left: str, fill: str, joint: str, right: str) -> None:
        self.lines.append(left + joint.join([pad(3, fill)] * self.columns) + right)

    def title(self, text: str) -> None:
        self.lines.append("┃" + text + pad(self.inner_width - len(text)) + "┃")

    def cells(self, cells: list[str], suffix: str = "") -> None:
        self.lines.append("┃" + "│".join(cells) + "┃" + suffix)

    def right_aligned(self, digits: str, trailing: int, suffix: str = "") -> None:
        """One cell per digit, followed by ``trailing`` blank cells."""
        leading = self.columns - len(digits) - trailing
        self.cells(
            [BLANK] * leading + [_cell(char) for char in digits] + [BLANK] * trailing,
            suffix,
        )

    def numbered_rows(self, values: list[int]) -> None:
        """Column sums: value ``k`` ends in column ``k``, suffixed ``k+1 C``."""
        for index, value in enumerate(values):
            if index > 0:
                self.rule("┠", "┈", "┼", "┨")
            self.right_aligned(str(value), index, f" {index + 1} C")


def column_sums(computation: Computation) -> list[int]:
    """Add up every unit and carry digit that falls into each column."""
    width = computation.multiplicand.digit_count
    columns = [0] * (width + computation.multiplier.digit_count)
    for row in computation.rows:
        units, carries = _row_digits(row, width)
        for offset, char in enumerate(reversed(units)):
            columns[row.index + offset] += _digit(char)
        for offset, char in enumerate(reversed(carries)):
            columns[row.index + offset + 1] += _digit(char)
    return columns


def carry_columns(columns: list[int]) -> list[int]:
    """Move the tens of every column sum one column to the left."""
    carried = [0] * len(columns)
    for index, number in enumerate(columns):
        if number < 10:
            carried[index] += number
        else:
            carried[index + 1] += number // 10
            carried[index] += number % 10
    return carried


def _row_digits(row: Row, width: int) -> tuple[str, str]:
    """Units and carries of one row, one digit per multiplicand digit."""
    units = str(row.units_total).zfill(width)
    carries = str(row.carry_total // 10).zfill(width)
    return units, carries


def render_grid(computation: Computation, annotate: bool = False) -> str:
    """Render the boxed table, preceded by the symbols legend when annotating.

    Args:
        computation: Rows and result from :func:`long_multiplication.engine.compute`
        annotate: Prepend the legend that explains the table symbols

    Returns:
        Text block terminated by a newline
    """
    multiplicand = computation.multiplicand.digits
    multiplier = computation.multiplier.digits
    table = GridTable(len(multiplicand) + len(multiplier))
    columns = table.columns

    table.lines.append("┏" + pad(table.inner_width, "━") + "┓")
    table.title("Pos.")
    table.rule("┠", "┄", "┬", "┨")
    table.cells([_position_cell(number) for number in range(columns, 0, -1)])
    table.rule("┣", "━", "┷", "┫")

    table.title("Ops.")
    table.rule("┣", "━", "┯", "┫")
    table.right_aligned(multiplicand, 0)
    table.cells(
        [_cell("x")]
        + [BLANK] * (columns - len(multiplier) - 1)
        + [_cell(char) for char in multiplier]
    )
    table.rule("┣", "━", "┿", "┫")

    for row in computation.rows:
        if row.index > 0:
            table.rule("┠", "─", "┼", "┨")
        units, carries = _row_digits(row, len(multiplicand))
        number = row.index + 1
        table.right_aligned(carries, number, f" {number} ^")
        table.rule("┠", "┈", "┼", "┨")
        table.right_aligned(units, row.index, f" {number} R")
    table.rule("┣", "━", "┷", "┫")

    table.title("Sum.")
    table.rule("┣", "━", "┯", "┫")
    sums = column_sums(computation)
    table.numbered_rows(sums)

    subtotal = carry_columns(sums)
    step = 0
    while any(number > 9 for number in subtotal):
        step += 1
        table.rule("┣", "━", "┷", "┫")
        table.title(f"Sub {step}.")
        table.rule("┣", "━", "┯", "┫")
        table.numbered_rows(subtotal)
        subtotal = carry_columns(subtotal)

    table.rule("┣", "━", "┷", "┫")
    table.title("Pro.")
    table.rule("┣", "━", "┯", "┫")
    table.cells([_cell(str(number)) for number in reversed(subtotal)], " P")
    table.rule("┗", "━", "┷", "┛")

    logger.debug(f"Rendered grid with {columns} columns and {step} subtotal steps")

    lines = list(LEGEND) + [""] if annotate else []
    return "\n".join(lines + table.lines) + "\n"
