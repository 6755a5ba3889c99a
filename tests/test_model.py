import unittest

from crcmatrix.model import BitReflection, CrcCalculation, CrcConfig, Polynomial, Step


class PolynomialTestCase(unittest.TestCase):
    def test_widths(self):
        self.assertEqual(Polynomial.crc7(0x09).width, 7)
        self.assertEqual(Polynomial.crc8(0x07).width, 8)
        self.assertEqual(Polynomial.crc16(0x8005).width, 16)
        self.assertEqual(Polynomial.crc32(0x04C11DB7).width, 32)

    def test_value_and_label(self):
        poly = Polynomial.crc16(0x8005)
        self.assertEqual(poly.value, 0x8005)
        self.assertEqual(poly.mask, 0xFFFF)
        self.assertEqual(poly.label, "Crc16")
        self.assertEqual(Polynomial.crc7(0x09).mask, 0x7F)

    def test_value_must_fit(self):
        with self.assertRaises(ValueError):
            Polynomial.crc7(0x80)
        with self.assertRaises(ValueError):
            Polynomial.crc8(0x107)
        with self.assertRaises(ValueError):
            Polynomial.crc16(-1)
        with self.assertRaises(ValueError):
            Polynomial(12, 0x80F)

    def test_equality(self):
        self.assertEqual(Polynomial.crc32(0x1EDC6F41), Polynomial(32, 0x1EDC6F41))
        self.assertNotEqual(Polynomial.crc8(0x07), Polynomial.crc16(0x07))
        self.assertEqual(len({Polynomial.crc8(0x07), Polynomial.crc8(0x07)}), 1)

    def test_repr(self):
        self.assertEqual(repr(Polynomial.crc16(0x8005)), "Polynomial.crc16(0x8005)")
        self.assertEqual(repr(Polynomial.crc7(0x09)), "Polynomial.crc7(0x09)")

    def test_reflect_output(self):
        self.assertEqual(Polynomial.crc8(0x07).reflect_output(0x01), 0x80)
        self.assertEqual(Polynomial.crc16(0x8005).reflect_output(0x0001), 0x8000)
        self.assertEqual(Polynomial.crc32(0x04C11DB7).reflect_output(0x0000_0001), 0x8000_0000)

    def test_reflect_output_7bit(self):
        # Reflected as a byte, then shifted back into the 7-bit field.
        poly = Polynomial.crc7(0x09)
        self.assertEqual(poly.reflect_output(0x01), 0x40)
        self.assertEqual(poly.reflect_output(0x40), 0x01)
        self.assertEqual(poly.reflect_output(0x75), 0x57)

    def test_reflect_output_7bit_not_involution(self):
        poly = Polynomial.crc7(0x09)
        self.assertEqual(poly.reflect_output(0x80), 0x00)
        self.assertEqual(poly.reflect_output(poly.reflect_output(0x80)), 0x00)
        self.assertEqual(poly.reflect_output(0xFF), 0x7F)
        self.assertEqual(poly.reflect_output(poly.reflect_output(0xFF)), 0x7F)


class BitReflectionTestCase(unittest.TestCase):
    def test_field_codes(self):
        self.assertEqual([mode.value for mode in BitReflection], [0, 1, 2, 3])

    def test_labels(self):
        self.assertEqual([mode.label for mode in BitReflection],
                         ["Disabled", "By8Bits", "By16Bits", "By32Bits"])

    def test_apply_none(self):
        for step in (Step.data8(0x42), Step.data16(0x4232), Step.data32(0x423268A4)):
            self.assertEqual(BitReflection.NONE.apply(step), step.value)

    def test_apply_8bit_step(self):
        step = Step.data8(0x32)
        for mode in (BitReflection.BYTE, BitReflection.HALFWORD, BitReflection.WORD):
            self.assertEqual(mode.apply(step), 0x4C)

    def test_apply_16bit_step(self):
        step = Step.data16(0x4232)
        self.assertEqual(BitReflection.BYTE.apply(step), 0x424C)
        self.assertEqual(BitReflection.HALFWORD.apply(step), 0x4C42)
        self.assertEqual(BitReflection.WORD.apply(step), 0x4C42)

    def test_apply_32bit_step(self):
        step = Step.data32(0x423268A4)
        self.assertEqual(BitReflection.BYTE.apply(step), 0x424C1625)
        self.assertEqual(BitReflection.HALFWORD.apply(step), 0x4C422516)
        self.assertEqual(BitReflection.WORD.apply(step), 0x2516_4C42)


class StepTestCase(unittest.TestCase):
    def test_constructors(self):
        self.assertEqual(Step.data8(0x42), Step(8, 0x42))
        self.assertEqual(Step.data16(0x4232).width, 16)
        self.assertEqual(Step.data32(0xAD91FE38).value, 0xAD91FE38)

    def test_value_must_fit(self):
        with self.assertRaises(ValueError):
            Step.data8(0x100)
        with self.assertRaises(ValueError):
            Step.data16(0x10000)
        with self.assertRaises(ValueError):
            Step(24, 0)

    def test_repr(self):
        self.assertEqual(repr(Step.data16(0x4232)), "Step.data16(0x4232)")


class CrcCalculationTestCase(unittest.TestCase):
    def setUp(self):
        self.config = CrcConfig(BitReflection.BYTE, True, 0xFFFF_FFFF, Polynomial.crc8(0x07))

    def test_config(self):
        self.assertIs(self.config.reflect_input, BitReflection.BYTE)
        self.assertIs(self.config.reflect_output, True)
        self.assertEqual(self.config.initial_value, 0xFFFF_FFFF)
        self.assertEqual(self.config.polynomial, Polynomial.crc8(0x07))

    def test_config_immutable(self):
        with self.assertRaises(AttributeError):
            self.config.initial_value = 0

    def test_config_checks(self):
        with self.assertRaises(TypeError):
            CrcConfig(1, False, 0, Polynomial.crc8(0x07))
        with self.assertRaises(TypeError):
            CrcConfig(BitReflection.NONE, False, 0, 0x07)
        with self.assertRaises(ValueError):
            CrcConfig(BitReflection.NONE, False, 0x1_0000_0000, Polynomial.crc8(0x07))

    def test_steps_are_ordered_tuple(self):
        steps = [Step.data8(0x42), Step.data16(0x4232)]
        calculation = CrcCalculation(self.config, steps)
        steps.append(Step.data8(0x00))
        self.assertEqual(calculation.steps, (Step.data8(0x42), Step.data16(0x4232)))

    def test_steps_checked(self):
        with self.assertRaises(TypeError):
            CrcCalculation(self.config, [0x42])

    def test_footprint(self):
        self.assertEqual(CrcCalculation(self.config, []).footprint, 16)
        self.assertEqual(CrcCalculation(self.config, [Step.data8(1)] * 4).footprint, 48)
