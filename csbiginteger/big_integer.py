"""Immutable arbitrary precision signed integer."""

import math
import numbers
from typing import Optional

import numpy as np

from csbiginteger import base_converter
from csbiginteger import byte_codec
from csbiginteger import comparator
from csbiginteger import config
from csbiginteger import errors
from csbiginteger import kernel as kernel_lib
from csbiginteger import operators

_kernel = kernel_lib.default_kernel()


def get_kernel() -> kernel_lib.MagnitudeKernel:
  return _kernel


def set_kernel(kernel) -> kernel_lib.MagnitudeKernel:
  """Selects the magnitude kernel used by BigInteger operators.

  Meant to be called once at program start, before any arithmetic.

  Args:
    kernel: A MagnitudeKernel or the name of a registered one.

  Returns:
    The previously selected kernel.
  """
  global _kernel
  if isinstance(kernel, str):
    kernel = kernel_lib.get_kernel(kernel)
  previous, _kernel = _kernel, kernel
  return previous


_BYTE_BUFFERS = (bytes, bytearray, memoryview, list, tuple, np.ndarray)


def _to_canonical(value, base) -> bytes:
  if isinstance(value, str):
    return base_converter.parse(value, base, _kernel)
  if base != 10:
    raise TypeError("base is only valid with a str value")
  if isinstance(value, BigInteger):
    return value._data
  if isinstance(value, _BYTE_BUFFERS):
    return byte_codec.from_little_endian(value)
  if isinstance(value, numbers.Integral):
    return _kernel.encode(int(value))
  if isinstance(value, numbers.Real):
    if not math.isfinite(value):
      raise errors.NonFiniteValueError(
          f"Cannot convert {value!r} to a BigInteger"
      )
    return _kernel.encode(math.trunc(value))
  raise TypeError(
      f"Unsupported type for BigInteger initialization: {type(value).__name__}"
  )


def _from_canonical(data: bytes) -> "BigInteger":
  if data == byte_codec.ERROR_BYTES and "ERROR" in globals():
    return ERROR
  big = object.__new__(BigInteger)
  object.__setattr__(big, "_data", bytes(data))
  return big


def _operand(other) -> Optional[bytes]:
  """Canonical bytes of a BigInteger or native int operand, else None."""
  if isinstance(other, BigInteger):
    return other._data
  if isinstance(other, numbers.Integral):
    return _kernel.encode(int(other))
  return None


class BigInteger:
  """An immutable arbitrary precision signed integer.

  The value is held as canonical bytes: big-endian, minimal-length two's
  complement. Two instances are equal exactly when their bytes are. Invalid
  results such as division by zero produce the ERROR sentinel, whose byte
  sequence is empty, instead of raising; check is_error() before using a
  result.

  Construct from a numeral string (base 2, 10 or 16), an int, a float
  (truncated toward zero), a little-endian byte buffer or another BigInteger.
  """

  __slots__ = ("_data",)

  ZERO: "BigInteger"
  ONE: "BigInteger"
  MINUS_ONE: "BigInteger"
  ERROR: "BigInteger"

  def __new__(cls, value=0, base: int = 10) -> "BigInteger":
    big = super().__new__(cls)
    object.__setattr__(big, "_data", _to_canonical(value, base))
    return big

  def __setattr__(self, name, value):
    raise AttributeError("BigInteger is immutable")

  def __delattr__(self, name):
    raise AttributeError("BigInteger is immutable")

  def __reduce__(self):
    return (_from_canonical, (self._data,))

  def __copy__(self):
    return self

  def __deepcopy__(self, memo):
    return self

  # Inspection

  def byte_length(self) -> int:
    return len(self._data)

  @property
  def sign(self) -> int:
    """-1, 0 or 1. Raises InvalidValueError for the ERROR sentinel."""
    self._check_valid()
    if byte_codec.is_negative(self._data):
      return -1
    return 0 if self.is_zero() else 1

  def is_zero(self) -> bool:
    return self == ZERO

  def is_error(self) -> bool:
    return self == ERROR

  def _check_valid(self) -> None:
    if self._data == byte_codec.ERROR_BYTES:
      raise errors.InvalidValueError("The Error BigInteger has no value")

  # Conversions

  def to_byte_array(self) -> bytes:
    """Little-endian two's complement bytes. Empty for the ERROR sentinel."""
    return byte_codec.to_little_endian(self._data)

  def copy_to(self, buffer, capacity: Optional[int] = None) -> bool:
    """Copies to_byte_array() into buffer, or returns False if it won't fit."""
    return byte_codec.copy_into(self._data, buffer, capacity)

  def to_limbs(self, bits: int = 8) -> np.ndarray:
    return byte_codec.to_limbs(self._data, bits)

  @classmethod
  def from_limbs(cls, limbs, bits: int = 8) -> "BigInteger":
    return _from_canonical(byte_codec.from_limbs(limbs, bits))

  def to_string(self, base: int = config.DEFAULT_BASE) -> str:
    """Renders the value in base 2, 10 or 16.

    Base 16 is "0x" followed by the big-endian bytes in lowercase hex, base 2
    is one 8-bit group per byte, and base 10 is signed decimal.

    Args:
      base: 2, 10 or 16.

    Returns:
      The numeral.

    Raises:
      UnsupportedBaseError: If base is not 2, 10 or 16.
      InvalidValueError: For the ERROR sentinel.
    """
    self._check_valid()
    return base_converter.format(self._data, base, _kernel)

  def to_hex_str(self) -> str:
    """Little-endian hex digits without a prefix."""
    return base_converter.to_hex_str(self._data)

  def _to_native(self, low: int, high: int, width: str) -> int:
    self._check_valid()
    value = int.from_bytes(self._data, "big", signed=True)
    if not low <= value <= high:
      raise errors.NarrowingOverflowError(
          f"{value} does not fit in a signed {width} integer"
      )
    return value

  def to_int(self) -> int:
    """The value as a native int32; raises NarrowingOverflowError otherwise."""
    return self._to_native(config.INT32_MIN, config.INT32_MAX, "32-bit")

  def to_long(self) -> int:
    """The value as a native int64; raises NarrowingOverflowError otherwise."""
    return self._to_native(config.INT64_MIN, config.INT64_MAX, "64-bit")

  def __int__(self):
    self._check_valid()
    return int.from_bytes(self._data, "big", signed=True)

  __index__ = __int__

  def __float__(self):
    return float(int(self))

  def __bool__(self):
    self._check_valid()
    return not self.is_zero()

  def __str__(self):
    if self.is_error():
      return "Error"
    return self.to_string(10)

  def __repr__(self):
    if self.is_error():
      return "BigInteger.ERROR"
    return f"BigInteger({self.to_string(10)})"

  def __hash__(self):
    if self._data == byte_codec.ERROR_BYTES:
      return hash(self._data)
    return hash(int(self))

  # Comparison

  def __eq__(self, other):
    data = _operand(other)
    if data is None:
      return NotImplemented
    return self._data == data

  def __ne__(self, other):
    data = _operand(other)
    if data is None:
      return NotImplemented
    return self._data != data

  def _compare(self, other) -> Optional[comparator.Ordering]:
    data = _operand(other)
    if data is None:
      return None
    return comparator.compare(self._data, data)

  def __lt__(self, other):
    ordering = self._compare(other)
    if ordering is None:
      return NotImplemented
    return ordering is comparator.Ordering.LESS

  def __gt__(self, other):
    ordering = self._compare(other)
    if ordering is None:
      return NotImplemented
    return ordering is comparator.Ordering.GREATER

  def __le__(self, other):
    if _operand(other) is None:
      return NotImplemented
    return self == other or self < other

  def __ge__(self, other):
    if _operand(other) is None:
      return NotImplemented
    return self == other or self > other

  @staticmethod
  def compare(a, b) -> comparator.Ordering:
    return comparator.compare(BigInteger(a)._data, BigInteger(b)._data)

  # Arithmetic

  def _apply(self, function, other, reflected=False):
    data = _operand(other)
    if data is None:
      return NotImplemented
    if reflected:
      return _from_canonical(function(_kernel, data, self._data))
    return _from_canonical(function(_kernel, self._data, data))

  def __add__(self, other):
    return self._apply(operators.add, other)

  def __radd__(self, other):
    return self._apply(operators.add, other, reflected=True)

  def __sub__(self, other):
    return self._apply(operators.subtract, other)

  def __rsub__(self, other):
    return self._apply(operators.subtract, other, reflected=True)

  def __mul__(self, other):
    return self._apply(operators.multiply, other)

  def __rmul__(self, other):
    return self._apply(operators.multiply, other, reflected=True)

  def __truediv__(self, other):
    """Integer division truncated toward zero; ERROR when other is zero."""
    return self._apply(operators.divide, other)

  def __rtruediv__(self, other):
    return self._apply(operators.divide, other, reflected=True)

  # Truncates like /, not toward negative infinity.
  __floordiv__ = __truediv__
  __rfloordiv__ = __rtruediv__

  def __mod__(self, other):
    """Remainder with the sign of self; ERROR when other is zero."""
    return self._apply(operators.remainder, other)

  def __rmod__(self, other):
    return self._apply(operators.remainder, other, reflected=True)

  def __pow__(self, exponent, modulus=None):
    exponent_data = _operand(exponent)
    if exponent_data is None:
      return NotImplemented
    if modulus is None:
      return _from_canonical(
          operators.power(_kernel, self._data, exponent_data)
      )
    modulus_data = _operand(modulus)
    if modulus_data is None:
      return NotImplemented
    return _from_canonical(
        operators.power_mod(_kernel, self._data, exponent_data, modulus_data)
    )

  def __rpow__(self, base):
    return self._apply(operators.power, base, reflected=True)

  def __lshift__(self, shift):
    """Left shift operator (<<)."""
    return self._apply(operators.shift_left, shift)

  def __rlshift__(self, value):
    return self._apply(operators.shift_left, value, reflected=True)

  def __rshift__(self, shift):
    """Right shift operator (>>)."""
    return self._apply(operators.shift_right, shift)

  def __rrshift__(self, value):
    return self._apply(operators.shift_right, value, reflected=True)

  def _apply_bitwise(self, function, other):
    data = _operand(other)
    if data is None:
      return NotImplemented
    return _from_canonical(function(self._data, data))

  def __and__(self, other):
    return self._apply_bitwise(operators.bitwise_and, other)

  __rand__ = __and__

  def __or__(self, other):
    return self._apply_bitwise(operators.bitwise_or, other)

  __ror__ = __or__

  def __xor__(self, other):
    return self._apply_bitwise(operators.bitwise_xor, other)

  __rxor__ = __xor__

  def __invert__(self):
    return _from_canonical(operators.invert(self._data))

  def __neg__(self):
    return ZERO - self

  def __pos__(self):
    return self

  def __abs__(self):
    return _from_canonical(operators.absolute(_kernel, self._data))

  # Static helpers

  @staticmethod
  def pow(value, exponent) -> "BigInteger":
    """value ** exponent; ERROR for a negative exponent."""
    return BigInteger(value) ** BigInteger(exponent)

  @staticmethod
  def mod_pow(value, exponent, modulus) -> "BigInteger":
    return pow(BigInteger(value), BigInteger(exponent), BigInteger(modulus))

  @staticmethod
  def multiply(value1, value2) -> "BigInteger":
    return BigInteger(value1) * BigInteger(value2)

  @staticmethod
  def abs(value) -> "BigInteger":
    return abs(BigInteger(value))

  @staticmethod
  def min(value1, value2) -> "BigInteger":
    a, b = BigInteger(value1), BigInteger(value2)
    if a.is_error() or b.is_error():
      return ERROR
    return a if a <= b else b

  @staticmethod
  def max(value1, value2) -> "BigInteger":
    a, b = BigInteger(value1), BigInteger(value2)
    if a.is_error() or b.is_error():
      return ERROR
    return a if a >= b else b


ZERO = _from_canonical(byte_codec.ZERO_BYTES)
ONE = _from_canonical(b"\x01")
MINUS_ONE = _from_canonical(b"\xff")
ERROR = _from_canonical(byte_codec.ERROR_BYTES)

BigInteger.ZERO = ZERO
BigInteger.ONE = ONE
BigInteger.MINUS_ONE = MINUS_ONE
BigInteger.ERROR = ERROR
