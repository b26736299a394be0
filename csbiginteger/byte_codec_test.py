"""Tests for byte_codec."""

import hypothesis
from hypothesis import strategies
from csbiginteger import byte_codec
import numpy as np
from absl.testing import absltest
from absl.testing import parameterized


class CanonicalizeTest(parameterized.TestCase):

  @parameterized.named_parameters(
      dict(testcase_name="_empty_is_zero", data=b"", expected=b"\x00"),
      dict(testcase_name="_zero", data=b"\x00", expected=b"\x00"),
      dict(testcase_name="_many_zeros", data=b"\x00\x00\x00", expected=b"\x00"),
      dict(testcase_name="_positive_pad", data=b"\x00\x7f", expected=b"\x7f"),
      dict(testcase_name="_needed_00", data=b"\x00\x80", expected=b"\x00\x80"),
      dict(testcase_name="_minus_one_pad", data=b"\xff\xff", expected=b"\xff"),
      dict(testcase_name="_negative_pad", data=b"\xff\x80", expected=b"\x80"),
      dict(testcase_name="_needed_ff", data=b"\xff\x7f", expected=b"\xff\x7f"),
      dict(
          testcase_name="_several_pads",
          data=b"\x00\x00\x01\x00",
          expected=b"\x01\x00",
      ),
  )
  def test_canonicalize(self, data, expected):
    self.assertEqual(byte_codec.canonicalize(data), expected)

  def test_sign_extend(self):
    self.assertEqual(byte_codec.sign_extend(b"\x80", 3), b"\xff\xff\x80")
    self.assertEqual(byte_codec.sign_extend(b"\x7f", 2), b"\x00\x7f")
    self.assertEqual(byte_codec.sign_extend(b"\x01\x02", 1), b"\x01\x02")

  def test_is_negative(self):
    self.assertTrue(byte_codec.is_negative(b"\x80"))
    self.assertFalse(byte_codec.is_negative(b"\x00\x80"))
    self.assertFalse(byte_codec.is_negative(byte_codec.ERROR_BYTES))


class LittleEndianTest(absltest.TestCase):

  def test_empty_buffer_is_zero_not_error(self):
    self.assertEqual(byte_codec.from_little_endian(b""), b"\x00")
    self.assertEqual(byte_codec.from_little_endian([]), b"\x00")

  def test_reverses_and_strips_high_order_zeros(self):
    self.assertEqual(byte_codec.from_little_endian([0x01, 0x00, 0x00]), b"\x01")
    self.assertEqual(
        byte_codec.from_little_endian(bytearray([0xFF, 0x00])), b"\x00\xff"
    )

  def test_accepts_numpy_array(self):
    data = np.array([0x34, 0x12], dtype=np.uint8)
    self.assertEqual(byte_codec.from_little_endian(data), b"\x12\x34")

  def test_rejects_out_of_range_values(self):
    with self.assertRaises(ValueError):
      byte_codec.from_little_endian([0, 256])
    with self.assertRaises(ValueError):
      byte_codec.from_little_endian([-1])

  def test_rejects_unsupported_types(self):
    with self.assertRaises(TypeError):
      byte_codec.from_little_endian("ff")
    with self.assertRaises(TypeError):
      byte_codec.from_little_endian([1.0])
    with self.assertRaises(TypeError):
      byte_codec.from_little_endian(np.zeros((2, 2), dtype=np.uint8))

  def test_to_little_endian(self):
    self.assertEqual(byte_codec.to_little_endian(b"\x00\xff"), b"\xff\x00")

  @hypothesis.given(strategies.binary(max_size=32))
  @hypothesis.settings(deadline=None)
  def test_from_little_endian_preserves_value(self, data: bytes):
    canonical = byte_codec.from_little_endian(data)
    self.assertEqual(
        int.from_bytes(canonical, "big", signed=True),
        int.from_bytes(data, "little", signed=True),
    )
    self.assertEqual(byte_codec.canonicalize(canonical), canonical)

  @hypothesis.given(strategies.binary(max_size=32))
  @hypothesis.settings(deadline=None)
  def test_round_trip_is_idempotent_after_canonicalization(self, data: bytes):
    canonical = byte_codec.from_little_endian(data)
    little = byte_codec.to_little_endian(canonical)
    self.assertEqual(byte_codec.from_little_endian(little), canonical)
    self.assertLessEqual(len(little), max(len(data), 1))


class CopyIntoTest(absltest.TestCase):

  def test_copies_little_endian_bytes(self):
    buffer = bytearray(4)
    self.assertTrue(byte_codec.copy_into(b"\x01\x02", buffer))
    self.assertEqual(buffer, bytearray(b"\x02\x01\x00\x00"))

  def test_exact_capacity(self):
    buffer = bytearray(2)
    self.assertTrue(byte_codec.copy_into(b"\x01\x02", buffer, 2))
    self.assertEqual(buffer, bytearray(b"\x02\x01"))

  def test_insufficient_capacity_writes_nothing(self):
    buffer = bytearray(b"\xaa\xaa\xaa")
    self.assertFalse(byte_codec.copy_into(b"\x01\x02", buffer, capacity=1))
    self.assertEqual(buffer, bytearray(b"\xaa\xaa\xaa"))

  def test_capacity_never_exceeds_buffer(self):
    buffer = bytearray(1)
    self.assertFalse(byte_codec.copy_into(b"\x01\x02", buffer, capacity=8))
    self.assertEqual(buffer, bytearray(1))

  def test_numpy_buffer(self):
    buffer = np.zeros(3, dtype=np.uint8)
    self.assertTrue(byte_codec.copy_into(b"\x80\x01", buffer))
    np.testing.assert_array_equal(buffer, [0x01, 0x80, 0x00])


class LimbsTest(parameterized.TestCase):

  def test_to_limbs_sign_extends_to_whole_limbs(self):
    limbs = byte_codec.to_limbs(b"\x01\x02\x03", bits=16)
    self.assertEqual(limbs.dtype, np.uint16)
    np.testing.assert_array_equal(limbs, [0x0203, 0x0001])

  def test_to_limbs_negative(self):
    np.testing.assert_array_equal(
        byte_codec.to_limbs(b"\xff", bits=32), [0xFFFFFFFF]
    )

  def test_from_limbs(self):
    self.assertEqual(byte_codec.from_limbs([0x0203, 1], 16), b"\x01\x02\x03")
    self.assertEqual(byte_codec.from_limbs([0xFFFFFFFF], 32), b"\xff")

  def test_from_limbs_rejects_wide_values(self):
    with self.assertRaises(ValueError):
      byte_codec.from_limbs([0x1FF], 8)

  def test_unsupported_limb_size(self):
    with self.assertRaisesRegex(ValueError, "Unsupported limb size 12"):
      byte_codec.to_limbs(b"\x01", bits=12)
    with self.assertRaisesRegex(ValueError, "Unsupported limb size"):
      byte_codec.from_limbs([1], bits=128)

  @parameterized.parameters(
      (8, np.uint8), (16, np.uint16), (32, np.uint32), (64, np.uint64)
  )
  def test_limb_dtype(self, bits, dtype):
    self.assertEqual(byte_codec.to_limbs(b"\x01", bits).dtype, dtype)

  @parameterized.parameters(8, 16, 32, 64)
  def test_limbs_round_trip(self, bits):
    data = b"\x80\x11\x22\x33\x44\x55\x66\x77\x88"
    self.assertEqual(
        byte_codec.from_limbs(byte_codec.to_limbs(data, bits), bits), data
    )


if __name__ == "__main__":
  absltest.main()
