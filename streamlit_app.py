import os
import sys
import asyncio

import streamlit as st


# =========================================================
#  GENERAL HELPERS
# =========================================================

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
SRC_DIR = os.path.join(BASE_DIR, "src")

if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from dirham_pay.config import Config  # noqa: E402
from dirham_pay.models.payment import PaymentRequest  # noqa: E402
from dirham_pay.services.payment_coordinator import PaymentProcessingCoordinator  # noqa: E402
from dirham_pay.services.payment_processor import PaymentProcessor  # noqa: E402
from dirham_pay.utils.helpers import configure_logging, format_currency  # noqa: E402


def rerun():
    """Compatibility helper for rerunning the app."""
    try:
        st.rerun()
    except AttributeError:
        st.experimental_rerun()


def run_async(coro):
    return asyncio.run(coro)


# =========================================================
#  SESSION STATE INIT
# =========================================================

def init_state():
    if "processor" not in st.session_state:
        st.session_state.processor = PaymentProcessor()
    if "coordinator" not in st.session_state:
        st.session_state.coordinator = PaymentProcessingCoordinator(
            st.session_state.processor
        )
    if "history" not in st.session_state:
        st.session_state.history = []  # PaymentResponse objects, newest first


configure_logging(Config.LOG_LEVEL)
init_state()


def method_label(method) -> str:
    return f"{method.icon} {method.label} – {method.description}"


def fee_label(method) -> str:
    if method.fees is None or (method.fees.percentage == 0 and method.fees.fixed == 0):
        return "No fees"
    parts = []
    if method.fees.percentage:
        parts.append(f"{method.fees.percentage:g}%")
    if method.fees.fixed:
        parts.append(format_currency(method.fees.fixed))
    return " + ".join(parts)


# =========================================================
#  PAGES
# =========================================================

def page_overview():
    st.title("💸 Dirham Pay – Payment Demo")
    st.markdown(
        """
        A mock checkout for Moroccan payment methods:

        - 💳 Cards, bank transfers, mobile wallets, Cash Plus, COD, app balance
        - 🧮 Fee breakdown per method (percentage + fixed fee)
        - ✅ Validation of amount, method and currency (MAD only)
        - ⏳ Simulated processing with an occasional failure

        No money moves and nothing is persisted.
        """
    )


def page_methods():
    st.header("🏦 Payment Methods")

    catalog = st.session_state.processor.catalog
    only_popular = st.checkbox("Popular only", value=False)
    methods = catalog.get_popular_methods() if only_popular else catalog.get_available_methods()

    for method in methods:
        with st.expander(method_label(method)):
            st.write(f"**Fees:** {fee_label(method)}")
            for i, step in enumerate(method.instructions, start=1):
                st.write(f"{i}. {step}")


def page_checkout():
    st.header("🛒 Checkout")

    processor = st.session_state.processor
    coordinator = st.session_state.coordinator
    methods = processor.catalog.get_available_methods()

    amount = st.number_input("Amount (MAD)", min_value=0.0, value=120.0, step=10.0)
    labels = [method_label(m) for m in methods]
    picked = st.radio("Choose payment method", labels)
    method = methods[labels.index(picked)]

    breakdown = processor.fee_calculator.calculate(amount, method.id)
    col1, col2, col3 = st.columns(3)
    col1.metric("Amount", format_currency(breakdown.base_amount))
    col2.metric("Fees", format_currency(breakdown.fee))
    col3.metric("Total", format_currency(breakdown.total))

    with st.expander("How it works"):
        for i, step in enumerate(method.instructions, start=1):
            st.write(f"{i}. {step}")

    if st.button("Pay now", disabled=coordinator.state.is_loading):
        request = PaymentRequest(amount=amount, method_id=method.id, currency="MAD")
        with st.spinner("Processing payment…"):
            run_async(coordinator.process_payment_request(request))
        if coordinator.state.response is not None:
            st.session_state.history.insert(0, coordinator.state.response)
        rerun()

    state = coordinator.state
    if state.response is not None:
        resp = state.response
        if resp.success:
            st.success(f"✅ {resp.message}")
            st.write(f"**Transaction:** `{resp.transaction_id}`")
            st.write(f"**Total charged:** {format_currency(resp.total)}")
        else:
            st.error(f"❌ {resp.message}")
        if st.button("New payment"):
            coordinator.reset_state()
            rerun()
    elif state.error:
        st.error(f"❌ {state.error}")


def page_history():
    st.header("📜 This Session's Payments")

    processor = st.session_state.processor
    history = st.session_state.history

    if not history:
        st.write("No payments yet.")
        return

    for resp in history:
        icon = "✅" if resp.success else "❌"
        title = resp.transaction_id or "(rejected)"
        with st.expander(f"{icon} {title} – {format_currency(resp.total)}"):
            st.json(
                {
                    "status": resp.status.value,
                    "amount": resp.amount,
                    "fee": resp.fee,
                    "total": resp.total,
                    "timestamp": resp.timestamp,
                    "message": resp.message,
                }
            )
            if resp.success:
                reason = st.text_input("Refund reason", key=f"reason_{resp.transaction_id}")
                if st.button("Refund", key=f"refund_{resp.transaction_id}"):
                    refund = run_async(processor.refund_payment(resp.transaction_id, reason))
                    st.info(f"{refund.message} ({refund.refund_transaction_id})")


# =========================================================
#  MAIN
# =========================================================

def main():
    st.set_page_config(page_title="Dirham Pay", layout="wide")

    pages = {
        "Overview": page_overview,
        "Payment Methods": page_methods,
        "Checkout": page_checkout,
        "History": page_history,
    }

    choice = st.sidebar.radio("Navigate", list(pages.keys()))
    pages[choice]()


if __name__ == "__main__":
    main()
