# src/dirham_pay/core/catalog.py
from types import MappingProxyType
from typing import Iterable, Iterator, List, Optional

from dirham_pay.models.payment_method import FeeSchedule, PaymentMethod, PaymentMethodType


class PaymentMethodCatalog:
    """
    Read-only registry of payment methods, kept in declaration order.

    The order is the display order used by the UI; lookups are by id.
    """

    def __init__(self, methods: Iterable[PaymentMethod]):
        by_id = {}
        for method in methods:
            if method.id in by_id:
                raise ValueError(f"Duplicate payment method id: {method.id!r}")
            by_id[method.id] = method
        self._methods = MappingProxyType(by_id)

    def get_available_methods(self) -> List[PaymentMethod]:
        return [m for m in self._methods.values() if m.is_available]

    def get_popular_methods(self) -> List[PaymentMethod]:
        return [m for m in self._methods.values() if m.is_popular and m.is_available]

    def get_payment_method(self, method_id: str) -> Optional[PaymentMethod]:
        return self._methods.get(method_id)

    def __contains__(self, method_id: object) -> bool:
        return method_id in self._methods

    def __iter__(self) -> Iterator[PaymentMethod]:
        return iter(self._methods.values())

    def __len__(self) -> int:
        return len(self._methods)


def default_catalog() -> PaymentMethodCatalog:
    """
    Payment methods offered in Morocco, ordered by how often they are used.
    """
    methods = [
        PaymentMethod(
            id="card-visa-mastercard",
            type=PaymentMethodType.CARD,
            label="Debit Card",
            description="Visa or Mastercard",
            icon="💳",
            is_popular=True,
            instructions=(
                "Enter your card number",
                "Provide expiration date and CVV",
                "Complete 3D Secure verification",
                "Transaction completed",
            ),
            fees=FeeSchedule(percentage=1.5, fixed=0),
        ),
        PaymentMethod(
            id="bank-transfer",
            type=PaymentMethodType.BANK,
            label="Bank Transfer",
            description="Virement bancaire - Direct bank transfer",
            icon="🏦",
            is_popular=True,
            instructions=(
                "Provide your IBAN (starts with MA)",
                "Confirm bank details",
                "Transfer reference will be provided",
                "Bank processing takes 1-2 business days",
            ),
            fees=FeeSchedule(percentage=0, fixed=5),
        ),
        PaymentMethod(
            id="wallet-inwi-orange",
            type=PaymentMethodType.WALLET,
            label="Mobile Wallet",
            description="Inwi Money / Orange Money",
            icon="📱",
            is_popular=True,
            instructions=(
                "Enter your phone number",
                "Select your provider (Inwi/Orange)",
                "Confirm the USSD prompt on your phone",
                "Enter the verification code",
            ),
            fees=FeeSchedule(percentage=1, fixed=0),
        ),
        PaymentMethod(
            id="cash-plus",
            type=PaymentMethodType.CASH_PLUS,
            label="Cash Plus",
            description="Moroccan cash payment network",
            icon="💵",
            is_popular=True,
            instructions=(
                "Generate a payment voucher",
                "Visit any Cash Plus partner location",
                "Present the voucher and complete payment",
                "Receive confirmation receipt",
            ),
            fees=FeeSchedule(percentage=2, fixed=0),
        ),
        PaymentMethod(
            id="cih-bank",
            type=PaymentMethodType.CIH_BANK,
            label="CIH Bank Direct",
            description="Direct CIH Bank account transfer",
            icon="🏛️",
            is_popular=False,
            instructions=(
                "Login with your CIH Bank credentials",
                "Select 'Make Payment' option",
                "Enter recipient and amount",
                "Confirm with your CIH security method",
            ),
            fees=FeeSchedule(percentage=0, fixed=0),
        ),
        PaymentMethod(
            id="attijariwafa-bank",
            type=PaymentMethodType.ATTIJARIWAFA_BANK,
            label="Attijariwafa Bank Direct",
            description="Direct Attijariwafa Bank account transfer",
            icon="🏛️",
            is_popular=False,
            instructions=(
                "Login with your Attijariwafa Bank credentials",
                "Select 'Make Payment' option",
                "Enter recipient and amount",
                "Confirm with your bank security method",
            ),
            fees=FeeSchedule(percentage=0, fixed=0),
        ),
        PaymentMethod(
            id="cod",
            type=PaymentMethodType.COD,
            label="Cash on Delivery",
            description="Pay when you receive",
            icon="📦",
            is_popular=True,
            instructions=(
                "Confirm your delivery address",
                "Select 'Cash on Delivery' option",
                "Payment will be collected at delivery",
                "Keep your delivery receipt",
            ),
            fees=FeeSchedule(percentage=0, fixed=20),
        ),
        PaymentMethod(
            id="app-balance",
            type=PaymentMethodType.APP_BALANCE,
            label="App Balance",
            description="Use your in-app wallet",
            icon="💰",
            is_popular=True,
            instructions=(
                "Check your available balance",
                "Confirm the transaction amount",
                "Enter your app PIN or biometric",
                "Transaction completed instantly",
            ),
            fees=FeeSchedule(percentage=0, fixed=0),
        ),
    ]
    return PaymentMethodCatalog(methods)


DEFAULT_CATALOG = default_catalog()


def get_available_methods() -> List[PaymentMethod]:
    return DEFAULT_CATALOG.get_available_methods()


def get_popular_methods() -> List[PaymentMethod]:
    return DEFAULT_CATALOG.get_popular_methods()


def get_payment_method(method_id: str) -> Optional[PaymentMethod]:
    return DEFAULT_CATALOG.get_payment_method(method_id)
