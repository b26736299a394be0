"""Conversions between canonical BigInteger bytes and external byte buffers.

Internally a BigInteger is a big-endian, minimal-length two's complement byte
string: the high bit of the first byte is the sign. Externally, byte arrays
are little-endian, as in System.Numerics.BigInteger.ToByteArray.
"""

from typing import Optional

import numpy as np

ZERO_BYTES = b"\x00"

# The Error sentinel has no bytes at all.
ERROR_BYTES = b""


def is_negative(data: bytes) -> bool:
  return bool(data) and data[0] >= 0x80


def canonicalize(data: bytes) -> bytes:
  """Strips redundant leading sign-extension bytes from big-endian data.

  A leading 0x00 is redundant when the following byte is non-negative, and a
  leading 0xFF when the following byte is negative. Empty input is zero.

  Args:
    data: Big-endian two's complement bytes.

  Returns:
    The minimal-length big-endian encoding of the same value.
  """
  data = bytes(data)
  start = 0
  while start < len(data) - 1:
    head, follower = data[start], data[start + 1]
    if (head == 0x00 and follower < 0x80) or (
        head == 0xFF and follower >= 0x80
    ):
      start += 1
    else:
      break
  return data[start:] or ZERO_BYTES


def sign_extend(data: bytes, length: int) -> bytes:
  """Pads big-endian data on the left with sign bytes up to length bytes."""
  if length <= len(data):
    return data
  fill = b"\xff" if is_negative(data) else b"\x00"
  return fill * (length - len(data)) + data


def _as_byte_values(data) -> bytes:
  if isinstance(data, (bytes, bytearray, memoryview)):
    return bytes(data)
  if isinstance(data, np.ndarray):
    if data.ndim != 1 or not np.issubdtype(data.dtype, np.integer):
      raise TypeError(
          f"Expected a 1-D integer array, got {data.ndim}-D {data.dtype}"
      )
    values = [int(v) for v in data]
  elif isinstance(data, (list, tuple)):
    values = list(data)
    for v in values:
      if isinstance(v, bool) or not isinstance(v, (int, np.integer)):
        raise TypeError(f"Byte values must be integers, got {type(v).__name__}")
  else:
    raise TypeError(f"Unsupported byte buffer type {type(data).__name__}")
  for v in values:
    if not 0 <= v <= 0xFF:
      raise ValueError(f"Byte value {v} not in range 0 to 255")
  return bytes(int(v) for v in values)


def from_little_endian(data) -> bytes:
  """Reads a little-endian byte buffer into canonical big-endian bytes.

  An empty buffer is zero, never the Error sentinel.
  """
  return canonicalize(_as_byte_values(data)[::-1])


def to_little_endian(data: bytes) -> bytes:
  return bytes(data[::-1])


def copy_into(data: bytes, buffer, capacity: Optional[int] = None) -> bool:
  """Writes the little-endian form of data into the start of buffer.

  Nothing is written when the capacity is too small.

  Args:
    data: Canonical big-endian bytes.
    buffer: A writable bytearray, memoryview or numpy uint8 array.
    capacity: Number of bytes the caller allows to be written. Defaults to
      len(buffer) and never exceeds it.

  Returns:
    True if the bytes were written, False if the capacity was insufficient.
  """
  available = len(buffer) if capacity is None else min(capacity, len(buffer))
  if available < len(data):
    return False
  little = to_little_endian(data)
  if isinstance(buffer, np.ndarray):
    buffer[: len(little)] = np.frombuffer(little, dtype=np.uint8)
  else:
    buffer[: len(little)] = little
  return True


LIMB_BITS = (8, 16, 32, 64)


def _limb_dtype(bits: int) -> np.dtype:
  """Little-endian unsigned dtype holding one bits-wide limb."""
  if bits not in LIMB_BITS:
    raise ValueError(
        f"Unsupported limb size {bits!r}. Use one of {LIMB_BITS}."
    )
  return np.dtype(f"<u{bits // 8}")


def to_limbs(data: bytes, bits: int = 8) -> np.ndarray:
  """Splits canonical bytes into little-endian unsigned limbs.

  The value is sign extended to a whole number of limbs, so the top bit of the
  last limb is the sign bit.

  Args:
    data: Canonical big-endian bytes.
    bits: The number of bits per limb (8, 16, 32 or 64).

  Returns:
    A numpy array of limbs, least significant first.
  """
  dtype = _limb_dtype(bits)
  limb_bytes = dtype.itemsize
  length = -(-len(data) // limb_bytes) * limb_bytes
  little = to_little_endian(sign_extend(data, length))
  return np.frombuffer(little, dtype=dtype).astype(dtype.type)


def from_limbs(limbs, bits: int = 8) -> bytes:
  """Joins little-endian limbs from to_limbs into canonical bytes."""
  dtype = _limb_dtype(bits)
  limbs = np.asarray(limbs)
  if limbs.ndim != 1:
    raise TypeError(f"Expected a 1-D array of limbs, got {limbs.ndim}-D")
  if limbs.size and (limbs.min() < 0 or limbs.max() > np.iinfo(dtype).max):
    raise ValueError(f"Limb values must fit in {bits} unsigned bits")
  little = limbs.astype(dtype).tobytes()
  return from_little_endian(little)
