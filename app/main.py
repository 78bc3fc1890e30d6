"""
Streamlit Frontend for ZenMoney

This is the user interface for tracking day-to-day income and expenses.

DESIGN PRINCIPLES:
1. Simple, clear interface
2. Every number on screen is recomputed from the one transaction list
3. Explicit confirmation before anything is deleted
4. Clear error messages in simple language
5. Advisor failures show up in the chat, never as a crash

Views never keep their own copy of the data. Everything shown is derived
from AppState on each rerun.
"""

import asyncio
import html
from datetime import date
from typing import Optional

import streamlit as st

from zenmoney.analytics import (
    build_monthly_trend,
    category_shares,
    compute_totals,
    currency_symbol,
    filter_by_window,
    filter_transaction_list,
    format_compact,
    format_currency,
    format_date,
    format_signed,
    group_by_category,
    select_recent,
)
from zenmoney.categories import categories_for, fallback_category, find_category, icon_glyph
from zenmoney.config import get_settings, validate_all_settings
from zenmoney.models.transaction import (
    ChatRole,
    TimeWindow,
    Transaction,
    TransactionDraft,
    TransactionFilter,
    TransactionType,
    month_key,
)
from zenmoney.orchestrator import AdvisorFlow, TransactionFlow, create_app_components
from zenmoney.state import AppState
from zenmoney.validation import TransactionValidator


# Page configuration
st.set_page_config(
    page_title="ZenMoney",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .balance-box {
        padding: 20px;
        background-color: #1e293b;
        color: #ffffff;
        border-radius: 10px;
        margin: 10px 0;
    }
    .income-box {
        padding: 20px;
        background-color: #dcfce7;
        border-radius: 10px;
        border-left: 5px solid #22c55e;
        margin: 10px 0;
    }
    .expense-box {
        padding: 20px;
        background-color: #fee2e2;
        border-radius: 10px;
        border-left: 5px solid #ef4444;
        margin: 10px 0;
    }
    .error-box {
        padding: 20px;
        background-color: #f8d7da;
        border-radius: 10px;
        border-left: 5px solid #dc3545;
        margin: 10px 0;
    }
    .big-number {
        font-size: 2.2em;
        font-weight: bold;
    }
</style>
""", unsafe_allow_html=True)

PAGES = ["🏠 Dashboard", "📜 Transactions", "📊 Analytics", "🤖 AI Advisor"]

WINDOW_LABELS = {
    TimeWindow.MONTH: "This Month",
    TimeWindow.YEAR: "This Year",
    TimeWindow.ALL: "All Time",
}

# Only used to phrase form errors; saving goes through TransactionFlow
FORM_VALIDATOR = TransactionValidator()


def money(amount, signed_income: Optional[bool] = None) -> str:
    """Format an amount in the configured display currency."""
    symbol = currency_symbol(get_settings().app.currency_code)
    if signed_income is None:
        return format_currency(amount, symbol)
    return format_signed(amount, signed_income, symbol)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_components():
    """Get or create application components (cached)."""
    try:
        return create_app_components(use_storage=True)
    except Exception as e:
        st.error(f"Failed to initialize storage: {e}")
        return create_app_components(use_storage=False)


def init_session_state():
    """UI-only state: which form is open and what is being confirmed."""
    defaults = {
        "form_mode": None,  # None, "add", "edit"
        "editing_id": None,
        "confirm_delete": False,
        "form_errors": "",
        "form_type": TransactionType.EXPENSE,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def open_form(transaction: Optional[Transaction] = None):
    """Open the add form, or the edit form pre-filled from a transaction."""
    st.session_state.form_mode = "edit" if transaction else "add"
    st.session_state.editing_id = transaction.id if transaction else None
    st.session_state.form_type = transaction.type if transaction else TransactionType.EXPENSE
    st.session_state.confirm_delete = False
    st.session_state.form_errors = ""


def close_form():
    st.session_state.form_mode = None
    st.session_state.editing_id = None
    st.session_state.confirm_delete = False
    st.session_state.form_errors = ""


def main():
    """Main application entry point."""
    state, transaction_flow, advisor_flow = get_components()
    init_session_state()

    # Sidebar navigation
    st.sidebar.title("💰 ZenMoney")
    st.sidebar.markdown("---")

    page = st.sidebar.radio("Navigate to:", PAGES, index=0)

    st.sidebar.markdown("---")
    if st.sidebar.button("➕ Add Transaction", type="primary"):
        open_form()

    render_settings_status()

    if st.session_state.form_mode:
        render_transaction_form(state, transaction_flow)
        st.markdown("---")

    # Route to appropriate page
    if page == "🏠 Dashboard":
        render_dashboard_page(state)
    elif page == "📜 Transactions":
        render_transactions_page(state)
    elif page == "📊 Analytics":
        render_analytics_page(state)
    elif page == "🤖 AI Advisor":
        render_advisor_page(state, advisor_flow)


# =============================================================================
# SHARED WIDGETS
# =============================================================================

def category_display(transaction: Transaction) -> tuple[str, str]:
    """(glyph, label) for a transaction's category, with fallback."""
    option = find_category(transaction.category, transaction.type)
    if option is None:
        option = fallback_category(transaction.category, transaction.type)
    return icon_glyph(option.icon), option.label


def render_transaction_row(transaction: Transaction, key_prefix: str):
    """One list row: icon, description, category/date, signed amount, edit."""
    glyph, label = category_display(transaction)
    col1, col2, col3 = st.columns([6, 3, 1])

    with col1:
        st.markdown(
            f"{glyph} **{html.escape(transaction.description)}**  \n"
            f"<small>{label} · {format_date(transaction.date)}</small>",
            unsafe_allow_html=True,
        )
    with col2:
        color = "#16a34a" if transaction.is_income else "#dc2626"
        st.markdown(
            f"<div style='text-align:right;color:{color};font-weight:bold'>"
            f"{money(transaction.amount, signed_income=transaction.is_income)}</div>",
            unsafe_allow_html=True,
        )
    with col3:
        if st.button("✏️", key=f"{key_prefix}-edit-{transaction.id}", help="Edit"):
            open_form(transaction)
            st.rerun()


def render_vega_chart(spec: dict):
    st.vega_lite_chart(spec=spec)


# =============================================================================
# ADD / EDIT FORM
# =============================================================================

def render_transaction_form(state: AppState, transaction_flow: TransactionFlow):
    """Add or edit a transaction. Delete needs a second click to confirm."""
    editing = None
    if st.session_state.form_mode == "edit":
        editing = state.find(st.session_state.editing_id)
        if editing is None:
            # Deleted elsewhere while the form was open
            close_form()
            st.rerun()

    draft = TransactionDraft.from_transaction(editing) if editing else TransactionDraft()

    st.subheader("✏️ Edit Transaction" if editing else "➕ New Transaction")

    # Type sits outside the form so the category list follows it immediately
    transaction_type = st.radio(
        "Type",
        options=list(TransactionType),
        index=list(TransactionType).index(st.session_state.form_type),
        format_func=lambda t: "📉 Expense" if t == TransactionType.EXPENSE else "📈 Income",
        horizontal=True,
    )
    st.session_state.form_type = transaction_type

    options = categories_for(transaction_type)
    option_ids = [o.id for o in options]
    category_index = option_ids.index(draft.category) if draft.category in option_ids else 0

    with st.form("transaction_form", clear_on_submit=False):
        amount = st.text_input(
            f"Amount ({currency_symbol(get_settings().app.currency_code)}) *",
            value=draft.amount or "",
            placeholder="e.g. 150000",
        )
        description = st.text_input(
            "Description *",
            value=draft.description or "",
            max_chars=200,
        )
        category = st.selectbox(
            "Category *",
            options=option_ids,
            index=category_index,
            format_func=lambda cid: (
                f"{icon_glyph(options[option_ids.index(cid)].icon)} "
                f"{options[option_ids.index(cid)].label}"
            ),
        )
        transaction_date = st.date_input(
            "Date",
            value=draft.date or date.today(),
        )

        col1, col2 = st.columns(2)
        with col1:
            submitted = st.form_submit_button("💾 Save", type="primary")
        with col2:
            cancelled = st.form_submit_button("Cancel")

    if cancelled:
        close_form()
        st.rerun()

    if submitted:
        new_draft = TransactionDraft(
            type=transaction_type,
            amount=amount,
            description=description,
            category=category,
            date=transaction_date,
        )
        saved, result = transaction_flow.save_draft(
            new_draft,
            editing_id=editing.id if editing else None,
        )
        if saved is not None:
            close_form()
            st.toast(f"Saved: {saved.description}")
            st.rerun()
        st.session_state.form_errors = (
            FORM_VALIDATOR.get_user_friendly_summary(result) if result.has_errors else ""
        )

    if st.session_state.form_errors:
        summary = html.escape(st.session_state.form_errors).replace("\n", "<br>")
        st.markdown(f"""
        <div class="error-box">
            <h4>⚠️ Please fix the following</h4>
            <p>{summary}</p>
        </div>
        """, unsafe_allow_html=True)

    if editing:
        if not st.session_state.confirm_delete:
            if st.button("🗑️ Delete Transaction"):
                st.session_state.confirm_delete = True
                st.rerun()
        else:
            st.warning("Delete this transaction? This cannot be undone.")
            col1, col2 = st.columns(2)
            with col1:
                if st.button("Yes, delete", type="primary"):
                    transaction_flow.delete(editing.id)
                    close_form()
                    st.rerun()
            with col2:
                if st.button("Keep it"):
                    st.session_state.confirm_delete = False
                    st.rerun()


# =============================================================================
# PAGES
# =============================================================================

def render_dashboard_page(state: AppState):
    """Balance summary and the most recent transactions."""
    st.title("🏠 Dashboard")

    totals = compute_totals(state.transactions)

    st.markdown(f"""
    <div class="balance-box">
        <p>Total Balance</p>
        <p class="big-number">{money(totals.balance)}</p>
    </div>
    """, unsafe_allow_html=True)

    col1, col2 = st.columns(2)
    with col1:
        st.markdown(f"""
        <div class="income-box">
            <p>📈 Income</p>
            <h3>{money(totals.income)}</h3>
        </div>
        """, unsafe_allow_html=True)
    with col2:
        st.markdown(f"""
        <div class="expense-box">
            <p>📉 Expense</p>
            <h3>{money(totals.expense)}</h3>
        </div>
        """, unsafe_allow_html=True)

    st.markdown("### Recent Transactions")
    recent = select_recent(state.transactions, get_settings().app.recent_transactions_limit)
    if not recent:
        st.info("No transactions yet. Use '➕ Add Transaction' to record your first one.")
        return

    for transaction in recent:
        render_transaction_row(transaction, key_prefix="recent")


def render_transactions_page(state: AppState):
    """Month-scoped, searchable transaction history."""
    st.title("📜 Transactions")

    col1, col2, col3 = st.columns([2, 3, 2])

    with col1:
        picked = st.date_input(
            "Month",
            value=date.today(),
            help="Any day in the month you want to see",
        )
    with col2:
        search_text = st.text_input("Search", placeholder="Search description...")
    with col3:
        type_filter = st.selectbox(
            "Type",
            options=[None, TransactionType.INCOME, TransactionType.EXPENSE],
            format_func=lambda t: "All" if t is None else t.value.title(),
        )

    criteria = TransactionFilter(
        type=type_filter,
        search_text=search_text,
        month_key=month_key(picked),
    )
    matches = filter_transaction_list(state.transactions, criteria)

    st.markdown("---")
    if not matches:
        st.info("No transactions found for this month and filter.")
        return

    for transaction in matches:
        render_transaction_row(transaction, key_prefix="history")


def render_breakdown(transactions: list[Transaction], transaction_type: TransactionType):
    """Donut and percentage list for one transaction type."""
    stats = group_by_category(transactions, transaction_type)
    shares = category_shares(stats)
    title = "Expense" if transaction_type == TransactionType.EXPENSE else "Income"

    st.markdown(f"#### {title} Breakdown")
    if not shares:
        st.info(f"No {title.lower()} data for this period.")
        return

    total = sum(s.value for s in stats)
    render_vega_chart({
        "data": {"values": [
            {"category": share.stat.name, "amount": float(share.stat.value)}
            for share in shares
        ]},
        "mark": {"type": "arc", "innerRadius": 60},
        "encoding": {
            "theta": {"field": "amount", "type": "quantitative", "stack": True},
            "color": {
                "field": "category",
                "type": "nominal",
                "scale": {
                    "domain": [share.stat.name for share in shares],
                    "range": [share.stat.color for share in shares],
                },
                "legend": None,
            },
            "tooltip": [
                {"field": "category", "type": "nominal"},
                {"field": "amount", "type": "quantitative", "format": ",.0f"},
            ],
        },
        "title": f"Total {format_compact(total)}",
    })

    for share in shares:
        st.markdown(
            f"{icon_glyph(share.stat.icon)} **{share.stat.name}** "
            f"· {money(share.stat.value)} ({share.percent}%)"
        )
        st.progress(share.percent / 100)


def render_analytics_page(state: AppState):
    """Category breakdowns and the monthly expense trend for a window."""
    st.title("📊 Analytics")

    window = st.radio(
        "Period",
        options=list(WINDOW_LABELS),
        format_func=lambda w: WINDOW_LABELS[w],
        horizontal=True,
    )

    in_window = filter_by_window(state.transactions, window)
    totals = compute_totals(in_window)

    col1, col2 = st.columns(2)
    col1.metric("Income", money(totals.income))
    col2.metric("Expense", money(totals.expense))

    col1, col2 = st.columns(2)
    with col1:
        render_breakdown(in_window, TransactionType.EXPENSE)
    with col2:
        render_breakdown(in_window, TransactionType.INCOME)

    st.markdown("#### Spending Trend")
    trend = build_monthly_trend(state.transactions, window)
    if not trend:
        st.info("No expenses in this period.")
        return

    render_vega_chart({
        "data": {"values": [
            {"month": point.label, "amount": float(point.value)}
            for point in trend
        ]},
        "mark": {"type": "bar", "color": "#ef4444", "cornerRadiusEnd": 4},
        "encoding": {
            # Keep bucket order; vega-lite sorts nominal axes by default
            "x": {"field": "month", "type": "nominal", "sort": None, "title": None},
            "y": {"field": "amount", "type": "quantitative", "title": "Rp"},
            "tooltip": [
                {"field": "month", "type": "nominal"},
                {"field": "amount", "type": "quantitative", "format": ",.0f"},
            ],
        },
    })


def render_advisor_page(state: AppState, advisor_flow: AdvisorFlow):
    """Chat with the Gemini-backed advisor."""
    col1, col2 = st.columns([5, 1])
    with col1:
        st.title("🤖 AI Advisor")
    with col2:
        if st.button("🧹 Clear chat"):
            advisor_flow.clear()
            st.rerun()

    for message in state.messages:
        role = "user" if message.role == ChatRole.USER else "assistant"
        with st.chat_message(role):
            if message.is_error:
                st.error(message.text)
            else:
                st.markdown(message.text)

    question = st.chat_input(
        "Ask about your finances...",
        disabled=state.is_busy,
    )
    if question:
        with st.spinner("Thinking..."):
            run_async(advisor_flow.ask(question))
        st.rerun()


def render_settings_status():
    """Connection status for configured services."""
    with st.sidebar.expander("⚙️ Settings"):
        status = validate_all_settings()

        services = [
            ("Gemini (AI Advisor)", "gemini"),
            ("Local Storage", "storage"),
            ("App", "app"),
        ]

        for name, key in services:
            if status.get(key, False):
                st.success(f"✅ {name}")
            else:
                error = status.get(f"{key}_error", "Not configured")
                st.error(f"❌ {name} - {error}")

        st.caption(
            "Create a `.env` file with your API key to enable the advisor. "
            "See `.env.example` for the available variables."
        )


if __name__ == "__main__":
    main()
