from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

from dirham_pay.models.payment import PaymentStatus
from dirham_pay.models.payment_method import PaymentMethodType

class ORMSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

class FeeScheduleSchema(ORMSchema):
    percentage: float
    fixed: float

class PaymentMethodSchema(ORMSchema):
    id: str
    type: PaymentMethodType
    label: str
    description: str
    icon: str
    instructions: List[str]
    is_available: bool
    is_popular: bool
    fees: Optional[FeeScheduleSchema] = None

class PaymentRequestSchema(BaseModel):
    amount: float
    method_id: str
    currency: str = "MAD"
    description: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

class FeeQuoteSchema(BaseModel):
    amount: float
    method_id: str

class FeeBreakdownSchema(ORMSchema):
    base_amount: float
    percentage_fee: float
    fixed_fee: float
    total: float

class PaymentValidationSchema(ORMSchema):
    is_valid: bool
    errors: List[str]

class PaymentResponseSchema(ORMSchema):
    success: bool
    transaction_id: str
    amount: float
    fee: float
    total: float
    timestamp: str
    status: PaymentStatus
    message: str

class PaymentStatusSchema(ORMSchema):
    transaction_id: str
    status: PaymentStatus
    timestamp: str

class RefundRequestSchema(BaseModel):
    reason: str = ""

class RefundResponseSchema(ORMSchema):
    success: bool
    original_transaction_id: str
    refund_transaction_id: str
    timestamp: str
    message: str

class ErrorResponseSchema(BaseModel):
    detail: str
