# offers/tests/test_value_stack.py
from decimal import Decimal
from types import SimpleNamespace

from django.test import SimpleTestCase

from offers.value_stack import calculate_value_stack, sum_values, value_multiplier


def product(value, is_bonus=False):
    return SimpleNamespace(value=Decimal(str(value)), is_bonus=is_bonus)


class ValueStackTests(SimpleTestCase):
    def test_empty_product_set(self):
        stack = calculate_value_stack([], Decimal("100"))
        self.assertEqual(stack.total_value, Decimal("0"))
        self.assertEqual(stack.main_value, Decimal("0"))
        self.assertEqual(stack.bonus_value, Decimal("0"))
        self.assertEqual(stack.value_multiplier, Decimal("0"))
        self.assertEqual(stack.main_products, ())
        self.assertEqual(stack.bonuses, ())

    def test_main_and_bonus_partition(self):
        main, bonus = product(150), product(50, is_bonus=True)
        stack = calculate_value_stack([main, bonus], Decimal("100"))
        self.assertEqual(stack.total_value, Decimal("200"))
        self.assertEqual(stack.main_value, Decimal("150"))
        self.assertEqual(stack.bonus_value, Decimal("50"))
        self.assertEqual(stack.value_multiplier, Decimal("2.0"))
        self.assertEqual(stack.main_products, (main,))
        self.assertEqual(stack.bonuses, (bonus,))

    def test_sum_tolerates_non_decimal_values(self):
        items = [SimpleNamespace(value=1.5), SimpleNamespace(value="2.25"), SimpleNamespace(value=None)]
        self.assertEqual(sum_values(items), Decimal("3.75"))


class ValueMultiplierTests(SimpleTestCase):
    def test_zero_or_missing_price_gives_zero(self):
        self.assertEqual(value_multiplier(Decimal("500"), Decimal("0")), Decimal("0"))
        self.assertEqual(value_multiplier(Decimal("500"), None), Decimal("0"))

    def test_rounds_to_one_decimal(self):
        self.assertEqual(value_multiplier(Decimal("100"), Decimal("3")), Decimal("33.3"))
        self.assertEqual(value_multiplier(Decimal("658"), Decimal("47")), Decimal("14.0"))

    def test_half_rounds_up(self):
        self.assertEqual(value_multiplier(Decimal("1"), Decimal("4")), Decimal("0.3"))
        self.assertEqual(value_multiplier(Decimal("21"), Decimal("20")), Decimal("1.1"))
