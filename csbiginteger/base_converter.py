"""Parsing and rendering of BigInteger numerals in base 2, 10 and 16.

Numerals are written most significant digit first. Base 10 is signed with a
leading '-'. Bases 2 and 16 spell out the two's complement bytes, so their
first digit carries the sign: "0xff" and "11111111" are both -1, while 255 is
"0x00ff".
"""

import re
from typing import Optional

from csbiginteger import byte_codec
from csbiginteger import config
from csbiginteger import errors
from csbiginteger import kernel as kernel_lib

_DECIMAL = re.compile(r"-?[0-9]+")
_HEX = re.compile(r"(?:0[xX])?([0-9a-fA-F]+)")
_BINARY = re.compile(r"[01]+")


def _check_base(base) -> None:
  if (
      not isinstance(base, int)
      or isinstance(base, bool)
      or base not in config.SUPPORTED_BASES
  ):
    raise errors.UnsupportedBaseError(base)


def _parse_hex(text: str) -> bytes:
  match = _HEX.fullmatch(text)
  if match is None:
    raise errors.ParseError(f"Invalid base 16 numeral: {text!r}")
  digits = match.group(1)
  if len(digits) % 2:
    sign_digit = "f" if int(digits[0], 16) >= 8 else "0"
    digits = sign_digit + digits
  return byte_codec.canonicalize(bytes.fromhex(digits))


def _parse_binary(text: str) -> bytes:
  if _BINARY.fullmatch(text) is None:
    raise errors.ParseError(f"Invalid base 2 numeral: {text!r}")
  padding = -len(text) % 8
  bits = text[0] * padding + text
  data = bytes(int(bits[i : i + 8], 2) for i in range(0, len(bits), 8))
  return byte_codec.canonicalize(data)


def _parse_decimal(text: str, kernel: kernel_lib.MagnitudeKernel) -> bytes:
  if _DECIMAL.fullmatch(text) is None:
    raise errors.ParseError(f"Invalid base 10 numeral: {text!r}")
  return byte_codec.canonicalize(kernel.encode(kernel.from_decimal(text)))


def parse(
    text: str,
    base: int = 10,
    kernel: Optional[kernel_lib.MagnitudeKernel] = None,
) -> bytes:
  """Parses a numeral into canonical big-endian bytes.

  Args:
    text: The numeral, most significant digit first. Base 16 accepts an
      optional "0x" prefix.
    base: 2, 10 or 16.
    kernel: The magnitude kernel used for decimal conversion.

  Returns:
    Canonical big-endian two's complement bytes.

  Raises:
    TypeError: If text is not a str.
    UnsupportedBaseError: If base is not 2, 10 or 16.
    ParseError: If text is empty or has a digit invalid for base.
  """
  if not isinstance(text, str):
    raise TypeError(f"Expected a str numeral, got {type(text).__name__}")
  _check_base(base)
  if base == 16:
    return _parse_hex(text)
  if base == 2:
    return _parse_binary(text)
  return _parse_decimal(text, kernel or kernel_lib.default_kernel())


def format(
    data: bytes,
    base: int = config.DEFAULT_BASE,
    kernel: Optional[kernel_lib.MagnitudeKernel] = None,
) -> str:
  """Renders canonical big-endian bytes as a numeral.

  Base 16 is "0x" followed by two lowercase digits per stored byte. Base 2 is
  one zero-padded 8-bit group per stored byte. Base 10 is signed decimal.
  """
  _check_base(base)
  if base == 16:
    return "0x" + data.hex()
  if base == 2:
    return "".join(f"{b:08b}" for b in data)
  kernel = kernel or kernel_lib.default_kernel()
  return kernel.to_decimal(kernel.decode(data))


def to_hex_str(data: bytes) -> str:
  """Hex digits of the little-endian byte array, without prefix."""
  return byte_codec.to_little_endian(data).hex()
