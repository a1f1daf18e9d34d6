# src/dirham_pay/models/payment_method.py
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Tuple


class PaymentMethodType(str, Enum):
    CARD = "card"
    BANK = "bank"
    WALLET = "wallet"
    COD = "cod"
    APP_BALANCE = "app-balance"
    CASH_PLUS = "cash-plus"
    CIH_BANK = "cih-bank"
    ATTIJARIWAFA_BANK = "attijariwafa-bank"


@dataclass(frozen=True)
class FeeSchedule:
    percentage: float = 0.0     # 0–100
    fixed: float = 0.0          # MAD

    def __post_init__(self) -> None:
        if self.percentage < 0 or self.percentage > 100:
            raise ValueError("Fee percentage must be between 0 and 100.")
        if self.fixed < 0:
            raise ValueError("Fixed fee must not be negative.")


@dataclass(frozen=True)
class PaymentMethod:
    id: str
    type: PaymentMethodType
    label: str
    description: str = ""
    icon: str = ""
    instructions: Tuple[str, ...] = field(default_factory=tuple)
    is_available: bool = True
    is_popular: bool = False
    # None means the method charges nothing
    fees: Optional[FeeSchedule] = None
