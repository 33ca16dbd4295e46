"""
Unit tests for the numeric value abstraction.
"""

import unittest
from decimal import Decimal, localcontext

from indicore.errors import ConfigurationError, NumericTypeMismatchError
from indicore.num.base import NaN
from indicore.num.decimal_num import DecimalNum, DecimalNumFactory
from indicore.num.double_num import DoubleNum, DoubleNumFactory
from indicore.utils.numeric import D, num_factory_for


class TestDecimalNum(unittest.TestCase):
    """Test the exact decimal backing."""

    def setUp(self):
        self.factory = DecimalNumFactory()
        self.d = self.factory.num_of

    def test_arithmetic(self):
        self.assertEqual(self.d(2) + self.d(3), self.d(5))
        self.assertEqual(self.d(2) - self.d(3), self.d(-1))
        self.assertEqual(self.d(2) * self.d(3), self.d(6))
        self.assertEqual(self.d(3) / self.d(2), self.d("1.5"))
        self.assertEqual(self.d(7) % 3, self.d(1))
        self.assertEqual(self.d(2) ** 10, self.d(1024))

    def test_exact_decimal_fractions(self):
        self.assertEqual(self.d(0.1) + self.d(0.2), self.d("0.3"))

    def test_operations_return_new_values(self):
        a = self.d(10)
        b = a + 1
        self.assertEqual(a, self.d(10))
        self.assertIsNot(a, b)

    def test_python_numbers_coerced(self):
        self.assertEqual(self.d(5) * 2, self.d(10))
        self.assertEqual(2 * self.d(5), self.d(10))
        self.assertEqual(10 - self.d(4), self.d(6))
        self.assertEqual(1 / self.d(4), self.d("0.25"))
        self.assertTrue(self.d(3) == 3)
        self.assertTrue(self.d(3) > 2)

    def test_division_by_zero_is_nan(self):
        self.assertTrue((self.d(1) / self.d(0)).is_nan())
        self.assertTrue((self.d(1) / 0).is_nan())
        self.assertTrue((self.d(1) % 0).is_nan())

    def test_undefined_results_are_nan(self):
        self.assertTrue(self.d(-4).sqrt().is_nan())
        self.assertTrue(self.d(0).log().is_nan())
        self.assertTrue(self.d(-1).log().is_nan())
        self.assertTrue((self.d(0) ** -1).is_nan())
        self.assertTrue((self.d(-8) ** self.d("0.5")).is_nan())

    def test_sqrt_log_pow(self):
        self.assertEqual(self.d(16).sqrt(), self.d(4))
        self.assertTrue(self.d(1).log().is_zero())
        self.assertTrue(abs(float(self.d(2) ** self.d("0.5")) - 2 ** 0.5) < 1e-12)

    def test_rounding_helpers(self):
        self.assertEqual(self.d("2.5").floor(), self.d(2))
        self.assertEqual(self.d("-2.5").ceil(), self.d(-2))
        self.assertEqual(abs(self.d(-3)), self.d(3))
        self.assertEqual(-self.d(3), self.d(-3))

    def test_min_max(self):
        self.assertEqual(self.d(1).min(self.d(2)), self.d(1))
        self.assertEqual(self.d(1).max(self.d(2)), self.d(2))

    def test_predicates(self):
        self.assertTrue(self.d(0).is_zero())
        self.assertTrue(self.d(1).is_positive())
        self.assertTrue(self.d(-1).is_negative())
        self.assertTrue(self.d(0).is_positive_or_zero())
        self.assertTrue(self.d(0).is_negative_or_zero())

    def test_constants(self):
        num = self.d(42)
        self.assertTrue(num.zero().is_zero())
        self.assertEqual(num.one(), self.d(1))
        self.assertEqual(num.hundred(), self.d(100))
        self.assertEqual(num.name, "DecimalNum")

    def test_context_independent_of_thread_context(self):
        with localcontext() as ctx:
            ctx.prec = 5
            result = self.d(1) / self.d(3)
        self.assertEqual(str(result.delegate), "0." + "3" * 32)

    def test_precision_configurable(self):
        factory = DecimalNumFactory(precision=8)
        result = factory.num_of(2) / factory.num_of(3)
        self.assertEqual(str(result.delegate), "0.66666667")

    def test_invalid_precision(self):
        with self.assertRaises(ConfigurationError):
            DecimalNumFactory(precision=0)

    def test_reproducible_sequence(self):
        def run():
            value = self.d("1.0950")
            for i in range(1, 200):
                value = (value * self.d("1.0001") + self.d(i) / 7).sqrt()
            return str(value)

        self.assertEqual(run(), run())

    def test_hashable(self):
        cache = {self.d(1): "one"}
        self.assertEqual(cache[self.d(1)], "one")
        self.assertIsInstance(self.d(1), DecimalNum)


class TestDoubleNum(unittest.TestCase):
    """Test the float backing."""

    def setUp(self):
        self.factory = DoubleNumFactory()
        self.f = self.factory.num_of

    def test_arithmetic(self):
        self.assertEqual(self.f(2) + self.f(3), self.f(5))
        self.assertEqual(self.f(3) / self.f(2), self.f(1.5))
        self.assertEqual(self.f(7) % 3, self.f(1))
        self.assertIsInstance(self.f(1), DoubleNum)

    def test_binary_float_semantics(self):
        self.assertNotEqual(self.f(0.1) + self.f(0.2), self.f(0.3))

    def test_division_by_zero_is_nan(self):
        self.assertTrue((self.f(1) / 0).is_nan())

    def test_overflow_is_nan(self):
        self.assertTrue((self.f(1e308) * 10).is_nan())
        self.assertTrue((self.f(10) ** 400).is_nan())

    def test_undefined_results_are_nan(self):
        self.assertTrue(self.f(-4).sqrt().is_nan())
        self.assertTrue(self.f(0).log().is_nan())
        self.assertTrue((self.f(-8) ** self.f(0.5)).is_nan())

    def test_ieee_nan_normalised(self):
        self.assertIs(self.f(float('nan')), NaN)

    def test_unsupported_type(self):
        with self.assertRaises(TypeError):
            self.f(True)
        with self.assertRaises(TypeError):
            self.f([1])


class TestNaN(unittest.TestCase):
    """Test the NaN sentinel."""

    def setUp(self):
        self.d = DecimalNumFactory().num_of
        self.f = DoubleNumFactory().num_of

    def test_comparisons_false(self):
        self.assertFalse(NaN == NaN)
        self.assertFalse(NaN < self.d(1))
        self.assertFalse(NaN > self.d(1))
        self.assertFalse(NaN <= NaN)
        self.assertFalse(self.d(1) == NaN)
        self.assertFalse(self.d(1) < NaN)
        self.assertFalse(self.d(1) >= NaN)
        self.assertFalse(NaN.is_zero())

    def test_propagation(self):
        for num in (self.d(5), self.f(5)):
            self.assertTrue((num + NaN).is_nan())
            self.assertTrue((NaN + num).is_nan())
            self.assertTrue((num * NaN).is_nan())
            self.assertTrue((num / NaN).is_nan())
            self.assertTrue((num ** NaN).is_nan())
            self.assertTrue(num.max(NaN).is_nan())
            self.assertTrue(num.min(NaN).is_nan())
        self.assertTrue((1 + NaN).is_nan())
        self.assertTrue(NaN.sqrt().is_nan())
        self.assertTrue((-NaN).is_nan())

    def test_shared_by_backings(self):
        self.assertIs(DecimalNumFactory().num_of("NaN"), NaN)
        self.assertIs(DecimalNumFactory().num_of(float('nan')), NaN)
        self.assertIs(DecimalNumFactory().num_of(Decimal('Infinity')), NaN)
        self.assertIs(DoubleNumFactory().num_of(NaN), NaN)
        self.assertIs(NaN.zero(), NaN)
        self.assertEqual(str(NaN), "NaN")


class TestMixedBackings(unittest.TestCase):
    """Combining backings is a caller error."""

    def test_mixing_raises(self):
        d = DecimalNumFactory().num_of(1)
        f = DoubleNumFactory().num_of(1)
        with self.assertRaises(NumericTypeMismatchError):
            d + f
        with self.assertRaises(TypeError):
            f < d

    def test_equality_across_backings_is_false(self):
        d = DecimalNumFactory().num_of(1)
        f = DoubleNumFactory().num_of(1)
        self.assertFalse(d == f)
        self.assertTrue(d != f)
        self.assertNotIn(d, [f])
        self.assertTrue(NaN != d)

    def test_bool_is_not_a_number(self):
        d = DecimalNumFactory().num_of(1)
        f = DoubleNumFactory().num_of(0)
        self.assertFalse(d == True)
        self.assertTrue(f != False)
        self.assertNotIn(d, [True, None, "1"])
        with self.assertRaises(TypeError):
            d + True

    def test_explicit_conversion_allowed(self):
        f = DoubleNumFactory().num_of(1.5)
        d = DecimalNumFactory().num_of(f)
        self.assertEqual(d, DecimalNumFactory().num_of("1.5"))


class TestNumericUtils(unittest.TestCase):
    """Test conversion helpers."""

    def test_D(self):
        self.assertEqual(D(0.1), Decimal("0.1"))
        self.assertEqual(D(3), Decimal(3))
        self.assertEqual(D(" 1.25 "), Decimal("1.25"))
        with self.assertRaises(TypeError):
            D(True)
        with self.assertRaises(TypeError):
            D([])

    def test_num_factory_for(self):
        self.assertIsInstance(num_factory_for({"type": "double"}), DoubleNumFactory)
        factory = num_factory_for(None)
        self.assertIsInstance(factory, DecimalNumFactory)
        self.assertEqual(factory.precision, 32)
        self.assertEqual(num_factory_for({"type": "decimal", "precision": 10}).precision, 10)
        with self.assertRaises(ConfigurationError):
            num_factory_for({"type": "quad"})


if __name__ == '__main__':
    unittest.main()
