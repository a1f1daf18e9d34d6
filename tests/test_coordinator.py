import unittest

from dirham_pay.models.payment import PaymentRequest, PaymentStatus
from dirham_pay.services.payment_coordinator import (
    PaymentProcessingCoordinator,
    PaymentProcessingState,
    ProcessingFailure,
)
from dirham_pay.services.payment_processor import PaymentProcessor, PaymentProcessorConfig


class ExplodingProcessor(PaymentProcessor):
    def __init__(self, message):
        super().__init__(failure_injector=lambda: False)
        self.message = message

    async def process_payment(self, request):
        raise RuntimeError(self.message)


class TestPaymentProcessingCoordinator(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.seen_loading = []

        async def sleep(delay):
            self.seen_loading.append(self.coordinator.state.is_loading)

        processor = PaymentProcessor(
            config=PaymentProcessorConfig(processing_delay_seconds=0),
            failure_injector=lambda: False,
            sleep=sleep,
        )
        self.coordinator = PaymentProcessingCoordinator(processor)

    async def test_success_sets_response(self):
        result = await self.coordinator.process_payment_request(
            PaymentRequest(amount=120, method_id="app-balance")
        )

        self.assertTrue(result.success)
        self.assertEqual(result.status, PaymentStatus.COMPLETED)
        self.assertEqual(self.seen_loading, [True])
        state = self.coordinator.state
        self.assertFalse(state.is_loading)
        self.assertIsNone(state.error)
        self.assertIs(state.response, result)

    async def test_validation_failure_short_circuits(self):
        result = await self.coordinator.process_payment_request(
            PaymentRequest(amount=5, method_id="cod", currency="EUR")
        )

        self.assertIsInstance(result, ProcessingFailure)
        self.assertFalse(result.success)
        self.assertEqual(result.error, "Only MAD currency is supported")
        self.assertEqual(self.seen_loading, [])
        self.assertEqual(
            self.coordinator.state,
            PaymentProcessingState(error="Only MAD currency is supported"),
        )

    async def test_unexpected_error_is_captured(self):
        coordinator = PaymentProcessingCoordinator(ExplodingProcessor("gateway down"))
        with self.assertLogs("dirham_pay.services.payment_coordinator", level="ERROR"):
            result = await coordinator.process_payment_request(
                PaymentRequest(amount=5, method_id="cod")
            )

        self.assertEqual(result.error, "gateway down")
        self.assertFalse(coordinator.state.is_loading)
        self.assertEqual(coordinator.state.error, "gateway down")
        self.assertIsNone(coordinator.state.response)

    async def test_unexpected_error_without_message(self):
        coordinator = PaymentProcessingCoordinator(ExplodingProcessor(""))
        with self.assertLogs("dirham_pay.services.payment_coordinator", level="ERROR"):
            result = await coordinator.process_payment_request(
                PaymentRequest(amount=5, method_id="cod")
            )
        self.assertEqual(result.error, "An unexpected error occurred")

    async def test_new_attempt_clears_previous_response(self):
        await self.coordinator.process_payment_request(PaymentRequest(amount=1, method_id="cod"))
        await self.coordinator.process_payment_request(PaymentRequest(amount=0, method_id="cod"))
        self.assertIsNone(self.coordinator.state.response)
        self.assertEqual(self.coordinator.state.error, "Amount must be greater than 0")

    async def test_reset_state(self):
        await self.coordinator.process_payment_request(PaymentRequest(amount=1, method_id="cod"))
        self.coordinator.reset_state()
        self.assertEqual(self.coordinator.state, PaymentProcessingState())


if __name__ == '__main__':
    unittest.main()
