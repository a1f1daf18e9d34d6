from flask import Flask
from dirham_pay.config import Config
from dirham_pay.api.routes import api
from dirham_pay.services.payment_processor import PaymentProcessor, PaymentProcessorConfig
from dirham_pay.utils.helpers import configure_logging

def create_app(config=Config, processor=None):
    app = Flask(__name__)
    app.config.from_object(config)

    configure_logging(app.config['LOG_LEVEL'])

    app.extensions['dirham_pay.processor'] = processor or PaymentProcessor(
        config=PaymentProcessorConfig(
            currency=app.config['CURRENCY'],
            max_amount=app.config['MAX_PAYMENT_AMOUNT'],
            processing_delay_seconds=app.config['PROCESSING_DELAY_SECONDS'],
            failure_rate=app.config['FAILURE_RATE'],
        )
    )
    app.register_blueprint(api)

    return app

if __name__ == "__main__":
    app = create_app()
    app.run(debug=app.config['DEBUG'])
