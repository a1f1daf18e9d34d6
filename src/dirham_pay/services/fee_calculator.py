# src/dirham_pay/services/fee_calculator.py
from typing import Optional

from dirham_pay.core.catalog import DEFAULT_CATALOG, PaymentMethodCatalog
from dirham_pay.models.payment import FeeBreakdown
from dirham_pay.utils.helpers import round_half_up


class FeeCalculator:
    def __init__(self, catalog: Optional[PaymentMethodCatalog] = None):
        self.catalog = catalog or DEFAULT_CATALOG

    def calculate(self, amount: float, method_id: str) -> FeeBreakdown:
        """
        Fee breakdown for paying `amount` MAD with `method_id`.

        Unknown methods and methods without a fee schedule cost nothing.
        The percentage fee is rounded first and the total is then rounded
        again from the rounded fee, so `total` can differ by one cent from
        rounding `amount * (1 + pct/100) + fixed` once.
        """
        method = self.catalog.get_payment_method(method_id)
        if method is None or method.fees is None:
            return FeeBreakdown(
                base_amount=amount,
                percentage_fee=0.0,
                fixed_fee=0.0,
                total=amount,
            )

        percentage_fee = round_half_up(amount * method.fees.percentage / 100)
        fixed_fee = method.fees.fixed
        return FeeBreakdown(
            base_amount=amount,
            percentage_fee=percentage_fee,
            fixed_fee=fixed_fee,
            total=round_half_up(amount + percentage_fee + fixed_fee),
        )


def calculate_payment_fees(
    amount: float,
    method_id: str,
    catalog: Optional[PaymentMethodCatalog] = None,
) -> FeeBreakdown:
    return FeeCalculator(catalog).calculate(amount, method_id)
