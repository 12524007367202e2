import unittest
from datetime import date
from decimal import Decimal

from common.models.bookings import BookingType
from common.services.pricing_service import PricingService
from common.utils.settings import FeePolicy


class TestPricingService(unittest.TestCase):

    def setUp(self):
        self.pricing = PricingService()

    def test_place_is_priced_per_night(self):
        quote = self.pricing.compute_price(
            BookingType.PLACE, 1000, 2, date(2024, 1, 10), date(2024, 1, 13)
        )

        self.assertEqual(quote.price, Decimal("3000"))
        self.assertEqual(quote.service_fee, Decimal("150"))
        self.assertEqual(quote.total_amount, Decimal("3150"))

    def test_place_price_ignores_guest_count(self):
        one = self.pricing.compute_price(
            BookingType.PLACE, 1000, 1, date(2024, 1, 10), date(2024, 1, 11)
        )
        many = self.pricing.compute_price(
            BookingType.PLACE, 1000, 6, date(2024, 1, 10), date(2024, 1, 11)
        )

        self.assertEqual(one, many)

    def test_experience_is_priced_per_guest(self):
        quote = self.pricing.compute_price(BookingType.EXPERIENCE, 500, 4)

        self.assertEqual(quote.price, Decimal("2000"))
        self.assertEqual(quote.service_fee, Decimal("100"))
        self.assertEqual(quote.total_amount, Decimal("2100"))

    def test_service_is_priced_per_guest(self):
        quote = self.pricing.compute_price(BookingType.SERVICE, 250, 2)

        self.assertEqual(quote.price, Decimal("500"))

    def test_minimum_fee_applies_to_small_prices(self):
        self.assertEqual(self.pricing.service_fee(Decimal("0")), Decimal("50"))
        self.assertEqual(self.pricing.service_fee(Decimal("999.99")), Decimal("50"))
        self.assertEqual(self.pricing.service_fee(Decimal("1000")), Decimal("50"))
        self.assertEqual(self.pricing.service_fee(Decimal("1000.20")), Decimal("50.01"))

    def test_fee_is_rounded_to_cents(self):
        self.assertEqual(self.pricing.service_fee(Decimal("1234.56")), Decimal("61.73"))

    def test_zero_price_still_pays_minimum(self):
        quote = self.pricing.compute_price(BookingType.EXPERIENCE, 0, 3)

        self.assertEqual(quote.price, Decimal("0"))
        self.assertEqual(quote.service_fee, Decimal("50"))
        self.assertEqual(quote.total_amount, Decimal("50"))

    def test_total_always_price_plus_fee(self):
        for base in (0, 1, 19.99, 333.33, 1000, 87654.32):
            quote = self.pricing.compute_price(BookingType.SERVICE, base, 3)
            self.assertEqual(quote.total_amount, quote.price + quote.service_fee)
            self.assertEqual(
                quote.service_fee,
                max(Decimal("50"), (quote.price * Decimal("0.05")).quantize(Decimal("0.01"))),
            )

    def test_fee_policy_is_injected(self):
        pricing = PricingService(FeePolicy(minimum_fee=Decimal("0"), fee_rate=Decimal("0.10")))

        quote = pricing.compute_price(BookingType.EXPERIENCE, 100, 1)

        self.assertEqual(quote.service_fee, Decimal("10"))

    def test_nights(self):
        self.assertEqual(PricingService.nights(date(2024, 2, 27), date(2024, 3, 2)), 4)


if __name__ == "__main__":
    unittest.main()
