"""Error types raised by the long multiplication core."""


class LongMultiplicationError(ValueError):
    """Base class for every failure of the calculator core."""


class InvalidDigitError(LongMultiplicationError):
    """An operand contains something other than the digits 0-9."""

    def __init__(self, name: str, text: str, position: int | None = None):
        self.name = name
        self.text = text
        self.position = position
        if position is None:
            message = f"The {name} is empty; expected digits 0-9"
        else:
            message = (
                f"The {name} '{text}' has an invalid character "
                f"'{text[position]}' at position {position + 1}"
            )
        super().__init__(message)


class InputTooLargeError(LongMultiplicationError):
    """The operands together have more digits than the configured maximum."""

    def __init__(self, digit_count: int, maximum: int):
        self.digit_count = digit_count
        self.maximum = maximum
        super().__init__(
            f"The operands have {digit_count} digits in total; "
            f"the maximum supported is {maximum}"
        )


class ProductOverflowError(LongMultiplicationError):
    """An intermediate total or the product exceeds the supported width."""

    def __init__(self, what: str, maximum_digits: int):
        self.what = what
        self.maximum_digits = maximum_digits
        super().__init__(
            f"The {what} exceeds the supported width of {maximum_digits} digits"
        )


class RenderError(LongMultiplicationError):
    """A layout width computation went out of range."""
