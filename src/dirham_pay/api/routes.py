import asyncio

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from dirham_pay.api.schemas import (
    ErrorResponseSchema,
    FeeBreakdownSchema,
    FeeQuoteSchema,
    PaymentMethodSchema,
    PaymentRequestSchema,
    PaymentResponseSchema,
    PaymentStatusSchema,
    PaymentValidationSchema,
    RefundRequestSchema,
    RefundResponseSchema,
)
from dirham_pay.models.payment import PaymentRequest
from dirham_pay.services.payment_processor import PaymentProcessor

api = Blueprint('api', __name__)


def _processor() -> PaymentProcessor:
    return current_app.extensions['dirham_pay.processor']


def _dump(schema, obj):
    return schema.model_validate(obj).model_dump(mode='json')


def _payment_request() -> PaymentRequest:
    body = PaymentRequestSchema.model_validate(request.get_json(silent=True) or {})
    return PaymentRequest(**body.model_dump())


@api.errorhandler(ValidationError)
def handle_validation_error(exc):
    return jsonify(ErrorResponseSchema(detail=str(exc)).model_dump()), 400


@api.route('/payment-methods', methods=['GET'])
def list_payment_methods():
    methods = _processor().catalog.get_available_methods()
    return jsonify([_dump(PaymentMethodSchema, m) for m in methods]), 200


@api.route('/payment-methods/popular', methods=['GET'])
def list_popular_methods():
    methods = _processor().catalog.get_popular_methods()
    return jsonify([_dump(PaymentMethodSchema, m) for m in methods]), 200


@api.route('/payment-methods/<method_id>', methods=['GET'])
def get_payment_method(method_id):
    method = _processor().catalog.get_payment_method(method_id)
    if method is None:
        detail = f"Payment method '{method_id}' not found"
        return jsonify(ErrorResponseSchema(detail=detail).model_dump()), 404
    return jsonify(_dump(PaymentMethodSchema, method)), 200


@api.route('/payments/fees', methods=['POST'])
def quote_fees():
    quote = FeeQuoteSchema.model_validate(request.get_json(silent=True) or {})
    breakdown = _processor().fee_calculator.calculate(quote.amount, quote.method_id)
    return jsonify(_dump(FeeBreakdownSchema, breakdown)), 200


@api.route('/payments/validate', methods=['POST'])
def validate_payment():
    validation = _processor().validator.validate(_payment_request())
    return jsonify(_dump(PaymentValidationSchema, validation)), 200


@api.route('/payments/process', methods=['POST'])
def process_payment():
    response = asyncio.run(_processor().process_payment(_payment_request()))
    return jsonify(_dump(PaymentResponseSchema, response)), 200


@api.route('/payments/<transaction_id>', methods=['GET'])
def get_payment_status(transaction_id):
    result = asyncio.run(_processor().get_payment_status(transaction_id))
    return jsonify(_dump(PaymentStatusSchema, result)), 200


@api.route('/payments/<transaction_id>/refund', methods=['POST'])
def refund_payment(transaction_id):
    body = RefundRequestSchema.model_validate(request.get_json(silent=True) or {})
    result = asyncio.run(_processor().refund_payment(transaction_id, body.reason))
    return jsonify(_dump(RefundResponseSchema, result)), 200
