"""Fixed-width text layout of the long multiplication steps."""

import logging
from dataclasses import dataclass

from .engine import Computation, Row
from .errors import RenderError

logger = logging.getLogger(__name__)

MARGIN = 2
LABEL_SEPARATOR = "  "


def pad(n: int, char: str = " ") -> str:
    """Return a field of exactly ``n`` copies of ``char``.

    Args:
        n: Field width, must not be negative
        char: Single fill character

    Raises:
        RenderError: If ``n`` is negative or ``char`` is not one character
    """
    if len(char) != 1:
        raise RenderError(f"Padding character must be a single character, got {char!r}")
    if n < 0:
        raise RenderError(f"Negative field width {n}")
    return char * n


def right_justify(text: str, width: int) -> str:
    """Right-justify ``text`` in ``width`` columns without truncating."""
    return pad(width - len(text)) + text


@dataclass(frozen=True)
class RenderState:
    """Column widths shared by every line of one rendering."""

    digits: int

    @property
    def width(self) -> int:
        return self.digits + MARGIN

    @classmethod
    def for_computation(cls, computation: Computation) -> "RenderState":
        return cls(
            digits=max(
                computation.multiplier.digit_count,
                computation.multiplicand.digit_count,
                computation.result.digit_count,
            )
        )

    def separator(self, char: str) -> str:
        return pad(self.width, char)

    def numeral(self, prefix: str, numeral: str, indent: int = 0) -> str:
        """Prefix, numeral right-justified in ``digits - indent``, ``indent`` spaces."""
        return prefix + right_justify(numeral, self.digits - indent) + pad(indent)


def _label(line: str, label: str, annotate: bool) -> str:
    if not annotate:
        return line
    return line + LABEL_SEPARATOR + label


def _row_lines(state: RenderState, row: Row, annotate: bool) -> list[str]:
    role = f"b digit {row.index + 1} ({row.digit}) x a"
    return [
        _label(state.numeral("  ", str(row.units_total), row.index), f"{role}: units", annotate),
        _label(state.numeral("+ ", str(row.carry_total), row.index), f"{role}: carries", annotate),
        _label(state.numeral("= ", str(row.row_sum), row.index), f"{role}: row sum", annotate),
    ]


def render_lines(computation: Computation, annotate: bool = False) -> list[str]:
    """Build the rendered block as a list of lines without newlines."""
    state = RenderState.for_computation(computation)
    lines = [
        _label(
            right_justify(computation.multiplicand.digits, state.width),
            "a = multiplicand",
            annotate,
        ),
        _label(
            "x" + right_justify(computation.multiplier.digits, state.width - 1),
            "b = multiplier",
            annotate,
        ),
        state.separator("="),
    ]

    for row in computation.rows:
        if row.index > 0:
            lines.append(state.separator("-"))
        lines.extend(_row_lines(state, row, annotate))

    lines.append(state.separator("="))

    for row in computation.rows[1:]:
        lines.append(
            _label(
                state.numeral("+ ", row.shifted),
                f"b digit {row.index + 1} ({row.digit}) x a, shifted {row.index}",
                annotate,
            )
        )

    lines.append(state.separator("-"))
    lines.append(
        _label(state.numeral("= ", computation.result.digits), "Final result", annotate)
    )
    return lines


def render(computation: Computation, annotate: bool = False) -> str:
    """Render the step-by-step layout, terminated by a newline.

    Args:
        computation: Rows and result from :func:`long_multiplication.engine.compute`
        annotate: Append a label explaining each number

    Returns:
        Text block
    """
    lines = render_lines(computation, annotate)
    logger.debug(f"Rendered {len(lines)} lines")
    return "\n".join(lines) + "\n"
