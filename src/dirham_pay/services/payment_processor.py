"""
Mock payment processor for the Moroccan payment demo.

There is no payment backend yet: processing is simulated with a fixed
delay and a small random failure rate so that the UI can exercise its
loading, success and error screens.

Core responsibilities:
- Re-validate the request (amount bounds, method, currency)
- Compute the fee breakdown for the chosen method
- Generate a local transaction id
- Simulate latency and a downstream failure, then build the response

Nothing is stored: every call returns a fresh `PaymentResponse` and the
processor keeps no per-payment state, so concurrent calls are independent.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from dirham_pay.config import Config
from dirham_pay.core.catalog import DEFAULT_CATALOG, PaymentMethodCatalog
from dirham_pay.models.payment import (
    PaymentRequest,
    PaymentResponse,
    PaymentStatus,
    PaymentStatusResult,
    RefundResult,
)
from dirham_pay.services.fee_calculator import FeeCalculator
from dirham_pay.services.payment_validator import PaymentValidator
from dirham_pay.utils.helpers import (
    format_amount,
    generate_refund_id,
    generate_transaction_id,
    log_transaction,
    now_iso,
)

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Payment failed. Please try again or use a different payment method."

FailureInjector = Callable[[], bool]
Sleep = Callable[[float], Awaitable[None]]


@dataclass
class PaymentProcessorConfig:
    """
    Policy values for the mock processor.

    Set `processing_delay_seconds` to 0 in tests; the failure rate only
    applies to requests that passed validation.
    """
    currency: str = Config.CURRENCY
    max_amount: float = Config.MAX_PAYMENT_AMOUNT
    processing_delay_seconds: float = Config.PROCESSING_DELAY_SECONDS
    failure_rate: float = Config.FAILURE_RATE


class RandomFailureInjector:
    """Decides whether a simulated downstream failure happens."""

    def __init__(self, rate: float = Config.FAILURE_RATE, rng: Optional[random.Random] = None):
        if not 0 <= rate <= 1:
            raise ValueError("Failure rate must be between 0 and 1.")
        self.rate = rate
        self.rng = rng or random.Random()

    def __call__(self) -> bool:
        return self.rng.random() < self.rate


class PaymentProcessor:
    """
    Validates, prices and "processes" a payment request.

    Collaborators are injectable so tests can swap the catalog, force
    either outcome and skip the delay:
    - `failure_injector`: zero-argument callable, True means fail
    - `sleep`: coroutine function used for the simulated latency
    """

    def __init__(
        self,
        catalog: Optional[PaymentMethodCatalog] = None,
        config: Optional[PaymentProcessorConfig] = None,
        failure_injector: Optional[FailureInjector] = None,
        sleep: Optional[Sleep] = None,
    ) -> None:
        self.catalog: PaymentMethodCatalog = catalog or DEFAULT_CATALOG
        self.config: PaymentProcessorConfig = config or PaymentProcessorConfig()
        self.validator = PaymentValidator(
            self.catalog,
            max_amount=self.config.max_amount,
            currency=self.config.currency,
        )
        self.fee_calculator = FeeCalculator(self.catalog)
        self.failure_injector: FailureInjector = (
            failure_injector or RandomFailureInjector(self.config.failure_rate)
        )
        self._sleep: Sleep = sleep or asyncio.sleep

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    async def process_payment(self, request: PaymentRequest) -> PaymentResponse:
        """
        Process a payment request.

        Invalid requests return at once with an empty transaction id and
        the first validation error as message. Valid requests wait for the
        simulated latency and then complete or fail.

        Business-rule failures never raise; they come back as
        `success=False`.
        """
        validation = self.validator.validate(request)
        if not validation.is_valid:
            logger.warning(
                "Rejected payment of %s %s via %s: %s",
                request.amount,
                request.currency,
                request.method_id,
                "; ".join(validation.errors),
            )
            return PaymentResponse(
                success=False,
                transaction_id="",
                amount=request.amount,
                fee=0.0,
                total=request.amount,
                timestamp=now_iso(),
                status=PaymentStatus.FAILED,
                message=validation.first_error,
            )

        breakdown = self.fee_calculator.calculate(request.amount, request.method_id)
        tx_id = generate_transaction_id()
        logger.debug("Processing %s: %s", tx_id, breakdown)

        await self._sleep(self.config.processing_delay_seconds)

        if self.failure_injector():
            logger.info("Payment %s failed during processing", tx_id)
            return PaymentResponse(
                success=False,
                transaction_id=tx_id,
                amount=request.amount,
                fee=breakdown.fee,
                total=breakdown.total,
                timestamp=now_iso(),
                status=PaymentStatus.FAILED,
                message=FAILURE_MESSAGE,
            )

        logger.info("Payment %s completed, total %s %s", tx_id, breakdown.total, request.currency)
        return PaymentResponse(
            success=True,
            transaction_id=tx_id,
            amount=request.amount,
            fee=breakdown.fee,
            total=breakdown.total,
            timestamp=now_iso(),
            status=PaymentStatus.COMPLETED,
            message=f"Payment of {format_amount(request.amount)} {request.currency} processed successfully",
        )

    # ------------------------------------------------------------------
    # Mock lookups (no backend yet)
    # ------------------------------------------------------------------
    async def get_payment_status(self, transaction_id: str) -> PaymentStatusResult:
        """
        Always reports the transaction as completed.
        """
        return PaymentStatusResult(
            transaction_id=transaction_id,
            status=PaymentStatus.COMPLETED,
            timestamp=now_iso(),
        )

    async def refund_payment(self, transaction_id: str, reason: str) -> RefundResult:
        """
        Always succeeds with a fresh refund id.
        """
        log_transaction(f"Refund initiated for {transaction_id}. Reason: {reason}")
        return RefundResult(
            success=True,
            original_transaction_id=transaction_id,
            refund_transaction_id=generate_refund_id(),
            timestamp=now_iso(),
            message="Refund processed successfully",
        )


async def process_payment(
    request: PaymentRequest,
    catalog: Optional[PaymentMethodCatalog] = None,
) -> PaymentResponse:
    return await PaymentProcessor(catalog).process_payment(request)
