# src/dirham_pay/services/payment_coordinator.py
import logging
from dataclasses import dataclass
from typing import Optional, Union

from dirham_pay.models.payment import PaymentRequest, PaymentResponse
from dirham_pay.services.payment_processor import PaymentProcessor

logger = logging.getLogger(__name__)


@dataclass
class PaymentProcessingState:
    is_loading: bool = False
    error: Optional[str] = None
    response: Optional[PaymentResponse] = None


@dataclass
class ProcessingFailure:
    error: str
    success: bool = False


class PaymentProcessingCoordinator:
    """
    Loading / error / response state around a single payment attempt.

    There is no queueing or cancellation: starting a second attempt while
    one is in flight lets both run, and whichever finishes last owns the
    state.
    """

    def __init__(self, processor: Optional[PaymentProcessor] = None):
        self.processor = processor or PaymentProcessor()
        self.state = PaymentProcessingState()

    async def process_payment_request(
        self, request: PaymentRequest
    ) -> Union[PaymentResponse, ProcessingFailure]:
        self.state = PaymentProcessingState(is_loading=True)

        try:
            validation = self.processor.validator.validate(request)
            if not validation.is_valid:
                error = validation.first_error
                self.state = PaymentProcessingState(error=error)
                return ProcessingFailure(error)

            response = await self.processor.process_payment(request)
            self.state = PaymentProcessingState(response=response)
            return response
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected error while processing payment")
            error = str(exc) or "An unexpected error occurred"
            self.state = PaymentProcessingState(error=error)
            return ProcessingFailure(error)

    def reset_state(self) -> None:
        self.state = PaymentProcessingState()
