"""Long multiplication calculator: step-by-step grade-school multiplication."""

from .calculator import (
    ExitCode,
    RenderStyle,
    content_type_header,
    long_multiplication,
    parse_annotate_flag,
)
from .engine import Computation, EngineLimits, Operand, Result, Row, compute, parse_operand
from .errors import (
    InputTooLargeError,
    InvalidDigitError,
    LongMultiplicationError,
    ProductOverflowError,
    RenderError,
)
from .grid import render_grid
from .layout import render

__version__ = "1.0.0"

__all__ = [
    'ExitCode', 'RenderStyle', 'content_type_header', 'long_multiplication',
    'parse_annotate_flag', 'Computation', 'EngineLimits', 'Operand', 'Result',
    'Row', 'compute', 'parse_operand', 'InputTooLargeError', 'InvalidDigitError',
    'LongMultiplicationError', 'ProductOverflowError', 'RenderError',
    'render_grid', 'render',
]
