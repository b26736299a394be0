"""Magnitude kernels backing the BigInteger operator surface.

A kernel owns the multi-limb arithmetic. It decodes canonical big-endian two's
complement bytes into its native number type, computes, and encodes the result
back into minimal-length bytes. Sign, error and canonicalization policy stay
with the callers in `operators`, so kernels can be swapped freely.
"""

import abc
import logging

import gmpy2

from csbiginteger import config


def _signed_length(bit_length: int) -> int:
  """Bytes for a two's complement value with a bit_length-bit magnitude."""
  return (bit_length + 8) // 8


# Numerals up to this many digits go through int()/str() directly, well under
# the interpreter's integer string conversion limit.
_DECIMAL_CHUNK_DIGITS = 1000
_DECIMAL_CHUNK_BITS = 3000
_LOG10_2 = 0.30102999566398120


def _int_from_decimal(digits: str) -> int:
  """Parses unsigned decimal digits by splitting them in halves."""
  if len(digits) <= _DECIMAL_CHUNK_DIGITS:
    return int(digits, 10)
  low_digits = len(digits) // 2
  high = _int_from_decimal(digits[:-low_digits])
  low = _int_from_decimal(digits[-low_digits:])
  return high * 10**low_digits + low


def _int_to_decimal(value: int, width: int = 0) -> str:
  """Renders a non-negative int, zero padded to width digits."""
  if value.bit_length() <= _DECIMAL_CHUNK_BITS:
    return str(value).zfill(width)
  low_digits = int(value.bit_length() * _LOG10_2) // 2
  high, low = divmod(value, 10**low_digits)
  return _int_to_decimal(high, max(width - low_digits, 0)) + _int_to_decimal(
      low, low_digits
  )


class MagnitudeKernel(abc.ABC):
  """Arithmetic over a backend's native integer type."""

  name = "abstract"

  @abc.abstractmethod
  def decode(self, data: bytes):
    """Converts canonical big-endian bytes to a native value."""

  @abc.abstractmethod
  def encode(self, value) -> bytes:
    """Converts a native value to minimal big-endian two's complement bytes."""

  @abc.abstractmethod
  def from_decimal(self, text: str):
    """Parses an already validated decimal numeral."""

  @abc.abstractmethod
  def to_decimal(self, value) -> str:
    pass

  @abc.abstractmethod
  def add(self, a, b):
    pass

  @abc.abstractmethod
  def subtract(self, a, b):
    pass

  @abc.abstractmethod
  def multiply(self, a, b):
    pass

  @abc.abstractmethod
  def divide(self, a, b):
    """Quotient truncated toward zero. b is never zero."""

  @abc.abstractmethod
  def remainder(self, a, b):
    """Remainder carrying the sign of a. b is never zero."""

  @abc.abstractmethod
  def shift_left(self, value, count: int):
    """Shifts left by a non-negative count."""

  @abc.abstractmethod
  def shift_right(self, value, count: int):
    """Arithmetic (flooring) shift right by a non-negative count."""

  @abc.abstractmethod
  def power(self, value, exponent: int):
    """Raises value to a non-negative exponent."""

  @abc.abstractmethod
  def power_mod(self, value, exponent: int, modulus):
    """Modular power whose result carries the sign of value**exponent.

    exponent is non-negative and modulus is non-zero.
    """

  def __repr__(self):
    return f"{type(self).__name__}()"


class PythonKernel(MagnitudeKernel):
  """Kernel on the built-in arbitrary precision int."""

  name = "python"

  def decode(self, data: bytes) -> int:
    return int.from_bytes(data, "big", signed=True)

  def encode(self, value: int) -> bytes:
    value = int(value)
    magnitude = value + 1 if value < 0 else value
    length = _signed_length(magnitude.bit_length())
    return value.to_bytes(length, "big", signed=True)

  def from_decimal(self, text: str) -> int:
    if text.startswith("-"):
      return -_int_from_decimal(text[1:])
    return _int_from_decimal(text)

  def to_decimal(self, value: int) -> str:
    value = int(value)
    if value < 0:
      return "-" + _int_to_decimal(-value)
    return _int_to_decimal(value)

  def add(self, a, b):
    return a + b

  def subtract(self, a, b):
    return a - b

  def multiply(self, a, b):
    return a * b

  def divide(self, a, b):
    quotient = abs(a) // abs(b)
    if (a < 0) != (b < 0):
      quotient = -quotient
    return quotient

  def remainder(self, a, b):
    return a - b * self.divide(a, b)

  def shift_left(self, value, count):
    return value << count

  def shift_right(self, value, count):
    return value >> count

  def power(self, value, exponent):
    return value**exponent

  def power_mod(self, value, exponent, modulus):
    modulus = abs(modulus)
    result = pow(value, exponent, modulus)
    # pow() reduces into [0, modulus); a negative base with an odd exponent
    # keeps its sign.
    if result and value < 0 and exponent & 1:
      result -= modulus
    return result


class GMPKernel(MagnitudeKernel):
  """Kernel on gmpy2.mpz."""

  name = "gmp"

  def decode(self, data: bytes) -> gmpy2.mpz:
    value = gmpy2.mpz(data.hex(), 16)
    if data[0] & 0x80:
      value -= gmpy2.mpz(1) << (8 * len(data))
    return value

  def encode(self, value) -> bytes:
    value = gmpy2.mpz(value)
    magnitude = value + 1 if value < 0 else value
    length = _signed_length(magnitude.bit_length())
    if value < 0:
      value += gmpy2.mpz(1) << (8 * length)
    return bytes.fromhex(value.digits(16).zfill(2 * length))

  def from_decimal(self, text: str) -> gmpy2.mpz:
    return gmpy2.mpz(text, 10)

  def to_decimal(self, value) -> str:
    return gmpy2.mpz(value).digits(10)

  def add(self, a, b):
    return gmpy2.mpz(a) + gmpy2.mpz(b)

  def subtract(self, a, b):
    return gmpy2.mpz(a) - gmpy2.mpz(b)

  def multiply(self, a, b):
    return gmpy2.mpz(a) * gmpy2.mpz(b)

  def divide(self, a, b):
    return gmpy2.t_div(a, b)

  def remainder(self, a, b):
    return gmpy2.t_mod(a, b)

  def shift_left(self, value, count):
    return gmpy2.mpz(value) << count

  def shift_right(self, value, count):
    return gmpy2.f_div_2exp(value, count)

  def power(self, value, exponent):
    return gmpy2.mpz(value) ** exponent

  def power_mod(self, value, exponent, modulus):
    modulus = abs(gmpy2.mpz(modulus))
    result = gmpy2.powmod(value, exponent, modulus)
    if result and value < 0 and exponent & 1:
      result -= modulus
    return result


_KERNELS = {
    PythonKernel.name: PythonKernel(),
    GMPKernel.name: GMPKernel(),
}

KERNEL_NAMES = tuple(sorted(_KERNELS))


def get_kernel(name: str) -> MagnitudeKernel:
  try:
    return _KERNELS[name]
  except KeyError:
    raise ValueError(
        f"Unknown kernel {name!r}. Use one of {', '.join(KERNEL_NAMES)}."
    ) from None


def default_kernel() -> MagnitudeKernel:
  """Returns the kernel selected by config.USE_GMP."""
  kernel = get_kernel(GMPKernel.name if config.USE_GMP else PythonKernel.name)
  logging.debug(f"Using {kernel.name} magnitude kernel")
  return kernel
