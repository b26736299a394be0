"""Exceptions raised at the BigInteger boundaries.

Arithmetic failures (division by zero, negative exponents) are not exceptions;
they produce the Error sentinel instead. These classes cover parsing,
narrowing and conversion of values into and out of the type.
"""


class BigIntegerError(Exception):
  """Base class for all csbiginteger exceptions."""


class ParseError(BigIntegerError, ValueError):
  """A numeral string is malformed for the requested base."""


class UnsupportedBaseError(BigIntegerError, ValueError):
  """A base outside of {2, 10, 16} was requested."""

  def __init__(self, base) -> None:
    super().__init__(f"Unsupported base {base!r}. Use 2, 10 or 16.")
    self.base = base


class NarrowingOverflowError(BigIntegerError, OverflowError):
  """A value does not fit in the requested native integer width."""


class NonFiniteValueError(BigIntegerError, ValueError):
  """A NaN or infinite float cannot be truncated to an integer."""


class InvalidValueError(BigIntegerError, ValueError):
  """The Error sentinel was converted to a native value."""
