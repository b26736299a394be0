"""Build-time configuration for csbiginteger."""

# Selects the gmpy2 magnitude kernel over the built-in int one.
USE_GMP = True

# Base used by BigInteger.to_string when none is given.
DEFAULT_BASE = 16

SUPPORTED_BASES = (2, 10, 16)

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Shift counts are native int32 values.
MAX_SHIFT = INT32_MAX
