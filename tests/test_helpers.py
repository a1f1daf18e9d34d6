import logging
import random
import unittest

from dirham_pay.utils.helpers import (
    configure_logging,
    format_amount,
    format_currency,
    format_phone,
    generate_transaction_id,
    mask_card_number,
    round_half_up,
)


class TestHelpers(unittest.TestCase):

    def test_round_half_up(self):
        self.assertEqual(round_half_up(0.125), 0.13)
        self.assertEqual(round_half_up(10), 10.0)

    def test_round_half_up_works_on_binary_value(self):
        # 1.005 and 2.675 are stored just below the half
        self.assertEqual(round_half_up(1.005), 1.0)
        self.assertEqual(round_half_up(2.675), 2.67)

    def test_negative_halves_round_towards_positive(self):
        self.assertEqual(round_half_up(-0.125), -0.12)

    def test_round_half_up_huge_values(self):
        self.assertAlmostEqual(round_half_up(1e27) / 1e27, 1.0)
        self.assertEqual(round_half_up(float("inf")), float("inf"))

    def test_format_amount(self):
        self.assertEqual(format_amount(100.0), "100")
        self.assertEqual(format_amount(100), "100")
        self.assertEqual(format_amount(100.5), "100.5")

    def test_configure_logging_is_idempotent(self):
        pkg_logger = logging.getLogger("dirham_pay")
        configure_logging("INFO")
        configure_logging("DEBUG")
        named = [h for h in pkg_logger.handlers if h.get_name() == "dirham_pay"]
        self.assertEqual(len(named), 1)
        self.assertTrue(pkg_logger.propagate)

    def test_transaction_id_format(self):
        tx_id = generate_transaction_id(random.Random(7))
        self.assertRegex(tx_id, r"^TX-\d{13,}-[0-9A-Z]{9}$")

    def test_format_currency(self):
        self.assertEqual(format_currency(1234.5), "MAD 1,234.50")
        self.assertEqual(format_currency(1234.5, locale="fr"), "1 234,50 MAD")

    def test_format_phone(self):
        self.assertEqual(format_phone("21261234567"), "+212 61 234 567")
        self.assertEqual(format_phone("+21261234567"), "+212 61 234 567")

    def test_mask_card_number(self):
        self.assertEqual(mask_card_number("1111 2222 3333 4444"), "**** **** **** 4444")


if __name__ == '__main__':
    unittest.main()
