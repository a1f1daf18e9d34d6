import os


class Config:
    CURRENCY = "MAD"
    MAX_PAYMENT_AMOUNT = 1_000_000
    # Simulated network/processing latency for the mock processor, in seconds.
    PROCESSING_DELAY_SECONDS = float(os.getenv("DIRHAM_PAY_PROCESSING_DELAY", "1.5"))
    FAILURE_RATE = float(os.getenv("DIRHAM_PAY_FAILURE_RATE", "0.05"))
    LOG_LEVEL = os.getenv("DIRHAM_PAY_LOG_LEVEL", "INFO")
    DEBUG = True  # Set to False in production
