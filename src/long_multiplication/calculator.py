"""Pure entry point of the calculator: digit strings in, text block out."""

import logging
from enum import Enum, IntEnum

from .engine import Computation, EngineLimits, compute
from .grid import render_grid
from .layout import render

logger = logging.getLogger(__name__)


class ExitCode(IntEnum):
    """Process exit codes chosen by the command line shells."""

    SUCCESS = 0
    INVALID_INPUT = 1
    ARGUMENTS_MISSING = 2


class RenderStyle(str, Enum):
    """Available layouts."""

    STEPS = "steps"
    GRID = "grid"


RENDERERS = {
    RenderStyle.STEPS: render,
    RenderStyle.GRID: render_grid,
}


def parse_annotate_flag(token: str | None) -> bool:
    """Interpret the annotation argument.

    Only a leading ``n`` or ``N`` turns annotations off. Anything else,
    including an empty token or an unrelated word, turns them on.
    """
    if token is None:
        return True
    return token[:1] not in ("n", "N")


def content_type_header(output_type: str = "plain") -> str:
    """Header block printed before the text when running behind CGI."""
    return f"Content-Type: text/{output_type};charset=UTF-8\n\n"


def render_computation(
    computation: Computation,
    annotate: bool = False,
    style: RenderStyle | str = RenderStyle.STEPS,
) -> str:
    """Render an existing computation in the requested style."""
    return RENDERERS[RenderStyle(style)](computation, annotate)


def long_multiplication(
    multiplier: str,
    multiplicand: str,
    annotate: bool = False,
    style: RenderStyle | str = RenderStyle.STEPS,
    limits: EngineLimits | None = None,
) -> str:
    """Compute and render ``multiplier x multiplicand``.

    Args:
        multiplier: Decimal digits of ``b``
        multiplicand: Decimal digits of ``a``
        annotate: Add explanatory labels
        style: ``steps`` (default) or ``grid``
        limits: Capacity limits for the engine

    Returns:
        Rendered text block ending with a newline

    Raises:
        InvalidDigitError: Non-decimal operand
        InputTooLargeError: Operands exceed ``limits.max_input_digits``
        ProductOverflowError: A total exceeds ``limits.max_result_digits``
        ValueError: Unknown style
    """
    style = RenderStyle(style)
    computation = compute(multiplier, multiplicand, limits)
    logger.info(
        f"Rendering {style.value} layout for a {computation.multiplier.digit_count}-digit "
        f"multiplier and a {computation.multiplicand.digit_count}-digit multiplicand"
    )
    return render_computation(computation, annotate, style)
