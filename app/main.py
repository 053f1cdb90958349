"""
Streamlit Frontend for Bill Ledger

A single page:
1. Pick a person
2. Type an amount and press "Save Bill"
3. See per-person totals, the grand total, and the bill history

All state lives in BillLedgerViewModel, kept in the Streamlit session.
Widgets only forward user actions to it through callbacks, which run
before the page is redrawn.
"""

import streamlit as st

from bill_ledger.audit import configure_logging
from bill_ledger.config import get_settings
from bill_ledger.ledger import BillLedgerViewModel, ValidationError, create_view_model
from bill_ledger.ledger.display import format_money, total_card_html
from bill_ledger.models.bill import Bill, User
from bill_ledger.queries import format_amount


# Page configuration
st.set_page_config(
    page_title="Bill Record System",
    page_icon="🧾",
    layout="centered",
)

# Custom CSS for the total cards
st.markdown("""
<style>
    .total-card {
        padding: 16px;
        background-color: #ffffff;
        border-radius: 10px;
        border: 1px solid #e5e7eb;
        margin: 6px 0;
    }
    .grand-total-card {
        padding: 20px;
        background-color: #eff6ff;
        border-radius: 10px;
        margin: 10px 0;
    }
    .big-number {
        font-size: 2em;
        font-weight: bold;
        color: #111827;
    }
</style>
""", unsafe_allow_html=True)


AMOUNT_INPUT_KEY = "amount_input"


def get_view_model() -> BillLedgerViewModel:
    """Get or create this session's view-model (loads the stored ledger once)."""
    if "view_model" not in st.session_state:
        configure_logging(get_settings().log_level)
        st.session_state.view_model = create_view_model()
    return st.session_state.view_model


def money(value: str) -> str:
    return format_money(get_settings().currency_symbol, value)


# =============================================================================
# CALLBACKS
# =============================================================================

def on_select_user(user: User) -> None:
    get_view_model().select_user(user)


def on_amount_changed() -> None:
    get_view_model().set_pending_amount(st.session_state[AMOUNT_INPUT_KEY])


def on_save_bill() -> None:
    vm = get_view_model()
    vm.set_pending_amount(st.session_state[AMOUNT_INPUT_KEY])
    try:
        vm.save_bill()
    except ValidationError:
        # vm.error holds the message shown in the banner
        return
    st.session_state[AMOUNT_INPUT_KEY] = vm.pending_amount


def on_delete_bill(bill_id: int) -> None:
    get_view_model().delete_bill(bill_id)


# =============================================================================
# RENDERING
# =============================================================================

def render_entry_form(vm: BillLedgerViewModel) -> None:
    """User buttons, amount input, save button and error banner."""
    st.title("Bill Record System")

    columns = st.columns(len(vm.users))
    for column, user in zip(columns, vm.users):
        with column:
            st.button(
                user.name,
                key=f"select_user_{user.id}",
                type="primary" if vm.is_selected(user) else "secondary",
                on_click=on_select_user,
                args=(user,),
                use_container_width=True,
            )

    if AMOUNT_INPUT_KEY not in st.session_state:
        st.session_state[AMOUNT_INPUT_KEY] = vm.pending_amount

    col1, col2 = st.columns([3, 1])
    with col1:
        st.text_input(
            "Amount",
            key=AMOUNT_INPUT_KEY,
            placeholder="Enter amount",
            on_change=on_amount_changed,
            label_visibility="collapsed",
        )
    with col2:
        st.button("Save Bill", type="primary", on_click=on_save_bill, use_container_width=True)

    if vm.error:
        st.error(vm.error)


def render_totals(vm: BillLedgerViewModel) -> None:
    """One card per user, then the grand total."""
    columns = st.columns(len(vm.users))
    for column, (user, total) in zip(columns, vm.user_totals()):
        with column:
            st.markdown(total_card_html(user.name, money(total)), unsafe_allow_html=True)

    st.markdown(
        total_card_html(
            "Total Amount",
            money(vm.grand_total()),
            css_class="grand-total-card",
            heading="h3",
        ),
        unsafe_allow_html=True,
    )


def render_bill_row(bill: Bill, index: int) -> None:
    col1, col2, col3 = st.columns([3, 2, 1])
    with col1:
        st.markdown(f"**{bill.user_name}**")
        st.caption(bill.created_at.astimezone().strftime("%x"))
    with col2:
        st.markdown(f"**{money(format_amount(bill.amount))}**")
    with col3:
        st.button(
            "Delete",
            key=f"delete_{index}_{bill.id}",
            on_click=on_delete_bill,
            args=(bill.id,),
        )


def render_history(vm: BillLedgerViewModel) -> None:
    """Bill history in the order bills were recorded."""
    st.subheader("Bill History")
    if not vm.bills:
        st.info("No bills recorded yet.")
        return
    for index, bill in enumerate(vm.bills):
        render_bill_row(bill, index)


def main():
    """Main application entry point."""
    vm = get_view_model()
    render_entry_form(vm)
    st.markdown("---")
    render_totals(vm)
    st.markdown("---")
    render_history(vm)


if __name__ == "__main__":
    main()
