"""Total ordering over canonical BigInteger bytes."""

import enum

from csbiginteger import byte_codec


class Ordering(enum.Enum):
  LESS = -1
  EQUAL = 0
  GREATER = 1
  # Either operand is the Error sentinel.
  UNORDERED = None


def _sign(data: bytes) -> int:
  if byte_codec.is_negative(data):
    return -1
  return 0 if data == byte_codec.ZERO_BYTES else 1


def compare(a: bytes, b: bytes) -> Ordering:
  """Compares two canonical big-endian byte strings as signed integers.

  Sign decides first. For operands of the same sign, canonical form makes the
  longer one larger in magnitude, which is the larger value when positive and
  the smaller when negative. Equal lengths compare bytewise, since two's
  complement preserves unsigned order within a sign.
  """
  if a == byte_codec.ERROR_BYTES or b == byte_codec.ERROR_BYTES:
    return Ordering.UNORDERED
  if a == b:
    return Ordering.EQUAL
  sign_a, sign_b = _sign(a), _sign(b)
  if sign_a != sign_b:
    return Ordering.LESS if sign_a < sign_b else Ordering.GREATER
  if len(a) != len(b):
    longer_is_a = len(a) > len(b)
    if sign_a < 0:
      longer_is_a = not longer_is_a
    return Ordering.GREATER if longer_is_a else Ordering.LESS
  return Ordering.LESS if a < b else Ordering.GREATER
