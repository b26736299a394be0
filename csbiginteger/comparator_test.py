"""Tests for comparator."""

import hypothesis
from hypothesis import strategies
from csbiginteger import byte_codec
from csbiginteger import comparator
from csbiginteger import kernel as kernel_lib
from absl.testing import absltest
from absl.testing import parameterized

Ordering = comparator.Ordering
LESS = Ordering.LESS
EQUAL = Ordering.EQUAL
GREATER = Ordering.GREATER
_encode = kernel_lib.PythonKernel().encode


class CompareTest(parameterized.TestCase):

  @parameterized.named_parameters(
      dict(testcase_name="_equal", a=5, b=5, expected=EQUAL),
      dict(testcase_name="_neg_vs_zero", a=-1, b=0, expected=LESS),
      dict(testcase_name="_zero_vs_pos", a=0, b=1, expected=LESS),
      dict(testcase_name="_sign_first", a=-(2**64), b=1, expected=LESS),
      dict(testcase_name="_longer_pos", a=256, b=255, expected=GREATER),
      dict(testcase_name="_longer_neg", a=-129, b=-1, expected=LESS),
      dict(testcase_name="_same_len_neg", a=-1, b=-2, expected=GREATER),
      dict(testcase_name="_same_len_pos", a=1, b=127, expected=LESS),
  )
  def test_compare(self, a, b, expected):
    self.assertEqual(comparator.compare(_encode(a), _encode(b)), expected)

  def test_error_is_unordered(self):
    error = byte_codec.ERROR_BYTES
    self.assertEqual(comparator.compare(error, b"\x00"), Ordering.UNORDERED)
    self.assertEqual(comparator.compare(b"\x00", error), Ordering.UNORDERED)
    self.assertEqual(comparator.compare(error, error), Ordering.UNORDERED)

  @hypothesis.given(strategies.integers(), strategies.integers())
  @hypothesis.settings(deadline=None)
  def test_matches_integer_order(self, a: int, b: int):
    ordering = comparator.compare(_encode(a), _encode(b))
    if a < b:
      self.assertEqual(ordering, LESS)
    elif a > b:
      self.assertEqual(ordering, GREATER)
    else:
      self.assertEqual(ordering, EQUAL)


if __name__ == "__main__":
  absltest.main()
