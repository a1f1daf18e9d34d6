from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from dirham_pay.utils.helpers import round_half_up


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class PaymentRequest:
    amount: float
    method_id: str
    currency: str = "MAD"
    description: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FeeBreakdown:
    base_amount: float
    percentage_fee: float
    fixed_fee: float
    total: float

    @property
    def fee(self) -> float:
        return round_half_up(self.percentage_fee + self.fixed_fee)


@dataclass
class PaymentValidation:
    is_valid: bool
    errors: List[str] = field(default_factory=list)

    @property
    def first_error(self) -> str:
        return self.errors[0] if self.errors else "Payment validation failed"


@dataclass
class PaymentResponse:
    success: bool
    transaction_id: str
    amount: float
    fee: float
    total: float
    timestamp: str
    status: PaymentStatus
    message: str


@dataclass
class PaymentStatusResult:
    transaction_id: str
    status: PaymentStatus
    timestamp: str


@dataclass
class RefundResult:
    success: bool
    original_transaction_id: str
    refund_transaction_id: str
    timestamp: str
    message: str
