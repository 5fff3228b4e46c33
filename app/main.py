"""
Streamlit Frontend for Expense Ledger

DESIGN PRINCIPLES:
1. Simple, clear interface
2. Clear error messages in simple language
3. Visual feedback for all operations
4. No hidden actions

The UI holds no ledger logic. Every button goes through LedgerService,
which validates, locks and audits.
"""

from datetime import date

import streamlit as st

from src.config import get_settings
from src.ledger import LedgerError
from src.models.audit import AUDIT_ROW_COLUMNS
from src.orchestrator import LedgerService, create_app_components

ALL_CATEGORIES = "(all)"


# Page configuration
st.set_page_config(
    page_title="Expense Ledger",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)


@st.cache_resource
def get_components():
    """Get or create application components (cached)."""
    return create_app_components()


def main():
    """Main application entry point."""
    service, audit_storage = get_components()

    app_settings = get_settings().app

    st.sidebar.title("💰 Expense Ledger")
    st.sidebar.caption(f"Environment: {app_settings.app_environment}")
    if app_settings.debug_mode:
        st.sidebar.caption("🐞 Debug logging is on")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["➕ Add Expense", "📋 Transactions", "📊 Reports", "🧾 Audit Log"],
        index=0,
    )

    if page == "➕ Add Expense":
        render_add_page(service)
    elif page == "📋 Transactions":
        render_transactions_page(service)
    elif page == "📊 Reports":
        render_reports_page(service)
    elif page == "🧾 Audit Log":
        render_audit_page(audit_storage)


def render_add_page(service: LedgerService):
    """Render the add-expense form."""
    st.title("➕ Add Expense")

    known = service.known_categories()

    with st.form("add_expense", clear_on_submit=True):
        amount = st.number_input("Amount *", min_value=0.0, step=1.0, format="%.2f")
        description = st.text_input("Description")
        existing = st.selectbox("Category", options=["(new category)"] + known)
        new_category = st.text_input(
            "New category name",
            help="Used when '(new category)' is selected",
        )
        submitted = st.form_submit_button("💾 Save", type="primary")

    if not submitted:
        return

    category = new_category if existing == "(new category)" else existing
    if not category:
        st.error("Please choose or enter a category.")
        return

    try:
        review = service.add_expense(str(amount), description, category)
    except LedgerError as e:
        st.error(f"Could not save expense: {e}")
        return

    st.success(f"Saved {amount:.2f} under {category}.")
    if review.has_warnings:
        st.warning(service.ledger.validator.get_user_friendly_summary(review))


def transaction_rows(transactions, selected: str) -> list[dict]:
    """Table rows for the transactions matching the category filter."""
    return [
        {"position": position, **t.to_display_dict()}
        for position, t in enumerate(transactions)
        if selected == ALL_CATEGORIES or t.category == selected
    ]


def empty_table_message(transactions, selected: str) -> str:
    if not transactions:
        return "No transactions recorded yet."
    return f"No transactions in category '{selected}'."


def render_transactions_page(service: LedgerService):
    """Render the transaction table with edit and remove controls."""
    st.title("📋 Transactions")

    categories = [ALL_CATEGORIES] + service.known_categories()
    selected = st.selectbox("Filter by category", options=categories)

    transactions = service.get_all_transactions()
    rows = transaction_rows(transactions, selected)

    if not rows:
        st.info(empty_table_message(transactions, selected))
        return

    st.dataframe(rows, use_container_width=True)

    st.markdown("### Edit or remove")
    position = st.number_input(
        "Position",
        min_value=0,
        max_value=len(transactions) - 1,
        step=1,
    )
    current = transactions[int(position)]

    col1, col2 = st.columns(2)
    with col1:
        with st.form("edit_transaction"):
            amount = st.number_input(
                "Amount",
                min_value=0.0,
                value=float(current.amount),
                format="%.2f",
            )
            description = st.text_input("Description", value=current.description)
            known = service.known_categories()
            category = st.selectbox(
                "Category",
                options=known,
                index=known.index(current.category) if current.category in known else 0,
            )
            if st.form_submit_button("✏️ Update"):
                try:
                    review = service.update_transaction(
                        int(position), str(amount), description, category
                    )
                    st.success(f"Transaction {int(position)} updated.")
                    if review.has_warnings:
                        st.warning(service.ledger.validator.get_user_friendly_summary(review))
                except LedgerError as e:
                    st.error(f"Could not update: {e}")

    with col2:
        if st.button("🗑️ Remove", type="secondary"):
            try:
                service.remove_transaction(int(position))
                st.success(f"Transaction {int(position)} removed.")
                st.rerun()
            except LedgerError as e:
                st.error(f"Could not remove: {e}")


def render_reports_page(service: LedgerService):
    """Render balance, monthly and by-category reports."""
    st.title("📊 Reports")

    default_income = float(get_settings().ledger.default_monthly_income)
    income = st.number_input("Monthly income", value=default_income, step=100.0)
    try:
        st.metric("Balance", f"{service.get_balance(str(income))}")
    except LedgerError as e:
        st.error(f"Could not compute balance: {e}")

    st.markdown("### Monthly report")
    today = date.today()
    col1, col2 = st.columns(2)
    with col1:
        month = st.number_input("Month", min_value=1, max_value=12, value=today.month)
    with col2:
        year = st.number_input("Year", min_value=1900, max_value=9999, value=today.year)

    try:
        st.code(service.generate_monthly_report(int(month), int(year)))
    except LedgerError as e:
        st.error(str(e))

    st.markdown("### By category")
    summary = service.category_summary()
    if summary.categories:
        st.bar_chart({entry.category: float(entry.total) for entry in summary.categories})
    st.code(service.generate_expense_by_category_report())


def render_audit_page(audit_storage):
    """Render the most recent audit events."""
    st.title("🧾 Audit Log")

    limit = st.slider("Events to show", min_value=10, max_value=500, value=50)
    events = audit_storage.get_recent_events(limit=limit)

    if not events:
        st.info("Nothing has happened yet.")
        return

    st.dataframe(
        [dict(zip(AUDIT_ROW_COLUMNS, e.to_row())) for e in events],
        use_container_width=True,
    )


if __name__ == "__main__":
    main()
