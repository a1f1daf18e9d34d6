# src/dirham_pay/services/payment_validator.py
from typing import Optional

from dirham_pay.config import Config
from dirham_pay.core.catalog import DEFAULT_CATALOG, PaymentMethodCatalog
from dirham_pay.models.payment import PaymentRequest, PaymentValidation


class PaymentValidator:
    """
    Business-rule checks for a payment request.

    Every rule is evaluated and all failures are reported together;
    nothing here raises.
    """

    def __init__(
        self,
        catalog: Optional[PaymentMethodCatalog] = None,
        max_amount: float = Config.MAX_PAYMENT_AMOUNT,
        currency: str = Config.CURRENCY,
    ):
        self.catalog = catalog or DEFAULT_CATALOG
        self.max_amount = max_amount
        self.currency = currency

    def validate(self, request: PaymentRequest) -> PaymentValidation:
        errors = []

        # ----- Amount -----
        if request.amount <= 0:
            errors.append("Amount must be greater than 0")
        if request.amount > self.max_amount:
            errors.append(
                f"Amount exceeds maximum limit of {self.max_amount:,.0f} {self.currency}"
            )

        # ----- Method -----
        method = self.catalog.get_payment_method(request.method_id)
        if method is None:
            errors.append("Invalid payment method")
        elif not method.is_available:
            errors.append("Selected payment method is not available")

        # ----- Currency -----
        if request.currency != self.currency:
            errors.append(f"Only {self.currency} currency is supported")

        return PaymentValidation(is_valid=not errors, errors=errors)


def validate_payment(
    request: PaymentRequest,
    catalog: Optional[PaymentMethodCatalog] = None,
) -> PaymentValidation:
    return PaymentValidator(catalog).validate(request)
