"""Command line calculator over BigInteger values.

Examples:

  csbiginteger --input_base=16 --output_base=10 0xff00
  csbiginteger --output_base=16 12345678901234567890 '*' 3
  csbiginteger 10 / 0
"""

from collections.abc import Sequence
import logging
import operator

from absl import app
from absl import flags

from csbiginteger import big_integer
from csbiginteger import config
from csbiginteger import kernel as kernel_lib

_INPUT_BASE = flags.DEFINE_enum(
    "input_base", "10", ["2", "10", "16"], "Base of the operands."
)
_OUTPUT_BASE = flags.DEFINE_enum(
    "output_base",
    str(config.DEFAULT_BASE),
    ["2", "10", "16"],
    "Base of the printed result.",
)
_KERNEL = flags.DEFINE_enum(
    "kernel",
    "gmp" if config.USE_GMP else "python",
    list(kernel_lib.KERNEL_NAMES),
    "Magnitude kernel used for arithmetic.",
)

OPERATORS = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "%": operator.mod,
    "**": operator.pow,
    "<<": operator.lshift,
    ">>": operator.rshift,
    "&": operator.and_,
    "|": operator.or_,
    "^": operator.xor,
}


def evaluate(
    tokens: Sequence[str], input_base: int = 10, output_base: int = 16
) -> str:
  """Evaluates `A` or `A OP B` and renders the result.

  Args:
    tokens: One operand, or an operand, an operator symbol and an operand.
    input_base: Base the operands are written in.
    output_base: Base of the rendered result.

  Returns:
    The rendered result, or "Error" when it is the ERROR sentinel.

  Raises:
    ValueError: On a malformed expression, including ParseError for a bad
      operand.
  """
  if len(tokens) == 1:
    result = big_integer.BigInteger(tokens[0], input_base)
  elif len(tokens) == 3:
    left, symbol, right = tokens
    if symbol not in OPERATORS:
      raise ValueError(
          f"Unknown operator {symbol!r}. Use one of {' '.join(OPERATORS)}."
      )
    result = OPERATORS[symbol](
        big_integer.BigInteger(left, input_base),
        big_integer.BigInteger(right, input_base),
    )
  else:
    raise ValueError("Expected `A` or `A OP B`.")
  if result.is_error():
    return str(result)
  return result.to_string(output_base)


def main(argv: Sequence[str]) -> None:
  big_integer.set_kernel(_KERNEL.value)
  logging.debug(f"kernel: {_KERNEL.value}")
  try:
    print(
        evaluate(
            argv[1:],
            input_base=int(_INPUT_BASE.value),
            output_base=int(_OUTPUT_BASE.value),
        )
    )
  except ValueError as e:
    raise app.UsageError(str(e)) from e


def run() -> None:
  app.run(main)


if __name__ == "__main__":
  run()
