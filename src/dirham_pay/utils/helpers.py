import logging
import math
import random
import re
import string
import sys
import time
from datetime import datetime, timezone
from typing import Optional

_BASE36 = string.digits + string.ascii_uppercase


def round_half_up(value: float, places: int = 2) -> float:
    """
    Round halves towards +inf on the binary value: floor(x * 100 + 0.5) / 100.

    1.005 is stored just below 1.005 and rounds to 1.0; -0.125 rounds to -0.12.
    """
    if not math.isfinite(value):
        return value
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def format_amount(amount) -> str:
    """Plain amount for messages: 100.0 -> "100", 100.5 -> "100.5"."""
    if float(amount).is_integer():
        return str(int(amount))
    return str(amount)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def generate_transaction_id(rng: Optional[random.Random] = None) -> str:
    """
    Local transaction id: TX-<epoch ms>-<9 uppercase base36 chars>.

    Uniqueness is probabilistic; two calls in the same millisecond only
    differ by the random suffix.
    """
    rng = rng or random
    suffix = "".join(rng.choice(_BASE36) for _ in range(9))
    return f"TX-{int(time.time() * 1000)}-{suffix}"


def generate_refund_id() -> str:
    return f"RFD-{int(time.time() * 1000)}"


def format_currency(amount, locale="en"):
    """
    Format an amount in Moroccan Dirham.

    "en" -> "MAD 1,234.50", "fr" -> "1 234,50 MAD"
    """
    if locale == "fr":
        text = "{:,.2f}".format(amount).replace(",", " ").replace(".", ",")
        return f"{text} MAD"
    return "MAD {:,.2f}".format(amount)


def format_phone(phone):
    # +21261234567 -> +212 61 234 567
    if not phone.startswith("+"):
        phone = "+" + phone
    return re.sub(r"(\+\d{3})(\d{2})(\d{3})(\d{3})", r"\1 \2 \3 \4", phone)


def mask_card_number(card_number):
    last_four = re.sub(r"\s", "", card_number)[-4:]
    return f"**** **** **** {last_four}"


def configure_logging(level="INFO"):
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    handler.set_name("dirham_pay")
    pkg_logger = logging.getLogger("dirham_pay")
    pkg_logger.setLevel(level)
    if not any(h.get_name() == "dirham_pay" for h in pkg_logger.handlers):
        pkg_logger.addHandler(handler)


def log_transaction(transaction_details):
    logging.getLogger("dirham_pay.transactions").info(
        "Transaction logged: %s", transaction_details
    )
