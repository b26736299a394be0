"""Arithmetic, bitwise and shift operations on canonical BigInteger bytes.

Every function takes canonical big-endian bytes and returns canonical bytes.
The Error sentinel (empty bytes) is returned for undefined results and
propagates: any Error operand yields Error. Magnitude arithmetic is delegated
to a MagnitudeKernel; bitwise operations are computed here on the sign
extended bytes.
"""

import logging
import operator
from typing import Callable

from csbiginteger import byte_codec
from csbiginteger import config
from csbiginteger.kernel import MagnitudeKernel

ERROR = byte_codec.ERROR_BYTES
ZERO = byte_codec.ZERO_BYTES


def _is_error(*operands: bytes) -> bool:
  return any(operand == ERROR for operand in operands)


def _binary(
    kernel: MagnitudeKernel, compute: Callable, a: bytes, b: bytes
) -> bytes:
  if _is_error(a, b):
    return ERROR
  result = compute(kernel.decode(a), kernel.decode(b))
  return byte_codec.canonicalize(kernel.encode(result))


def add(kernel: MagnitudeKernel, a: bytes, b: bytes) -> bytes:
  return _binary(kernel, kernel.add, a, b)


def subtract(kernel: MagnitudeKernel, a: bytes, b: bytes) -> bytes:
  return _binary(kernel, kernel.subtract, a, b)


def multiply(kernel: MagnitudeKernel, a: bytes, b: bytes) -> bytes:
  return _binary(kernel, kernel.multiply, a, b)


def divide(kernel: MagnitudeKernel, a: bytes, b: bytes) -> bytes:
  """Quotient truncated toward zero; Error when dividing by zero."""
  if b == ZERO:
    logging.debug("Division by zero, returning Error")
    return ERROR
  return _binary(kernel, kernel.divide, a, b)


def remainder(kernel: MagnitudeKernel, a: bytes, b: bytes) -> bytes:
  """Remainder with the sign of the dividend; Error when dividing by zero."""
  if b == ZERO:
    logging.debug("Modulo by zero, returning Error")
    return ERROR
  return _binary(kernel, kernel.remainder, a, b)


def negate(kernel: MagnitudeKernel, a: bytes) -> bytes:
  return subtract(kernel, ZERO, a)


def absolute(kernel: MagnitudeKernel, a: bytes) -> bytes:
  if byte_codec.is_negative(a):
    return negate(kernel, a)
  return a


def _shift_count(kernel: MagnitudeKernel, count: bytes):
  """Decodes a shift count, or returns None when it is not a native int32."""
  shift = int(kernel.decode(count))
  if not -config.MAX_SHIFT - 1 <= shift <= config.MAX_SHIFT:
    return None
  return shift


def _shift(
    kernel: MagnitudeKernel, value: bytes, count: bytes, left: bool
) -> bytes:
  if _is_error(value, count):
    return ERROR
  shift = _shift_count(kernel, count)
  if shift is None:
    logging.debug("Shift count does not fit in 32 bits, returning Error")
    return ERROR
  if shift < 0:
    shift, left = -shift, not left
  native = kernel.decode(value)
  if left:
    result = kernel.shift_left(native, shift)
  else:
    result = kernel.shift_right(native, shift)
  return byte_codec.canonicalize(kernel.encode(result))


def shift_left(kernel: MagnitudeKernel, value: bytes, count: bytes) -> bytes:
  """value << count; a negative count shifts right."""
  return _shift(kernel, value, count, left=True)


def shift_right(kernel: MagnitudeKernel, value: bytes, count: bytes) -> bytes:
  """Arithmetic value >> count; a negative count shifts left."""
  return _shift(kernel, value, count, left=False)


def _exponent(kernel: MagnitudeKernel, exponent: bytes):
  """Decodes a power exponent, or returns None when it is invalid."""
  if byte_codec.is_negative(exponent):
    logging.debug("Negative exponent, returning Error")
    return None
  exp = int(kernel.decode(exponent))
  if exp > config.INT32_MAX:
    logging.debug("Exponent does not fit in 32 bits, returning Error")
    return None
  return exp


def power(kernel: MagnitudeKernel, value: bytes, exponent: bytes) -> bytes:
  """value ** exponent for a non-negative int32 exponent, otherwise Error."""
  if _is_error(value, exponent):
    return ERROR
  exp = _exponent(kernel, exponent)
  if exp is None:
    return ERROR
  result = kernel.power(kernel.decode(value), exp)
  return byte_codec.canonicalize(kernel.encode(result))


def power_mod(
    kernel: MagnitudeKernel, value: bytes, exponent: bytes, modulus: bytes
) -> bytes:
  """(value ** exponent) % modulus with the sign of value ** exponent."""
  if _is_error(value, exponent, modulus):
    return ERROR
  if modulus == ZERO:
    logging.debug("Modular power with zero modulus, returning Error")
    return ERROR
  if byte_codec.is_negative(exponent):
    logging.debug("Negative exponent, returning Error")
    return ERROR
  result = kernel.power_mod(
      kernel.decode(value), int(kernel.decode(exponent)), kernel.decode(modulus)
  )
  return byte_codec.canonicalize(kernel.encode(result))


def _bitwise(op: Callable[[int, int], int], a: bytes, b: bytes) -> bytes:
  if _is_error(a, b):
    return ERROR
  length = max(len(a), len(b))
  a = byte_codec.sign_extend(a, length)
  b = byte_codec.sign_extend(b, length)
  return byte_codec.canonicalize(bytes(op(x, y) for x, y in zip(a, b)))


def bitwise_and(a: bytes, b: bytes) -> bytes:
  return _bitwise(operator.and_, a, b)


def bitwise_or(a: bytes, b: bytes) -> bytes:
  return _bitwise(operator.or_, a, b)


def bitwise_xor(a: bytes, b: bytes) -> bytes:
  return _bitwise(operator.xor, a, b)


def invert(a: bytes) -> bytes:
  """One's complement, equal to -a - 1."""
  if _is_error(a):
    return ERROR
  return byte_codec.canonicalize(bytes(0xFF ^ x for x in a))

