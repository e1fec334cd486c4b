"""
Streamlit Frontend for Finance Tracker

Thin presentation layer over FinanceDataService. All figures come from
the reports package; this module only lays them out.

DESIGN PRINCIPLES:
1. Nothing is saved without an explicit "Add" click
2. Form errors are shown next to the form, which stays open
3. Load errors replace the page content with the message
"""

import asyncio
from datetime import date

import streamlit as st

from finance_tracker.config import get_settings, validate_all_settings
from finance_tracker.forms import GoalForm, TransactionForm
from finance_tracker.models import TransactionType
from finance_tracker.orchestrator import create_app_components
from finance_tracker.reports import (
    TransactionFilter,
    filter_transactions,
    goal_progress,
    has_invested_in_month,
)
from finance_tracker.services import FinanceDataService


st.set_page_config(
    page_title="Finance Tracker",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)


@st.cache_resource
def get_event_loop() -> asyncio.AbstractEventLoop:
    """One loop for the whole session so the HTTP client stays usable."""
    return asyncio.new_event_loop()


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    return get_event_loop().run_until_complete(coro)


@st.cache_resource
def get_service() -> FinanceDataService:
    """Create the data service and run the initial load (cached)."""
    service = create_app_components()
    run_async(service.load())
    return service


def money(value) -> str:
    return f"${value:,.2f}"


def main():
    """Main application entry point."""
    service = get_service()

    st.sidebar.title("💰 Finance Tracker")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📊 Dashboard", "📋 Transactions", "➕ New Transaction", "🎯 Goals", "⚙️ Settings"],
        index=0,
    )

    if st.sidebar.button("🔄 Reload data"):
        run_async(service.load())

    if page == "⚙️ Settings":
        render_settings_page()
        return

    if service.loading:
        st.info("Loading your financial universe...")
        return
    if service.error:
        st.error(f"Oops! Something went wrong. {service.error}")
        return

    render_investment_reminder(service)

    if page == "📊 Dashboard":
        render_dashboard_page(service)
    elif page == "📋 Transactions":
        render_transactions_page(service)
    elif page == "➕ New Transaction":
        render_new_transaction_page(service)
    elif page == "🎯 Goals":
        render_goals_page(service)


def render_investment_reminder(service: FinanceDataService):
    category_id = get_settings().app.investment_category_id
    if not has_invested_in_month(service.transactions, date.today(), category_id):
        st.warning(
            "**Friendly reminder:** you haven't logged an investment this month. "
            "Staying consistent is key to reaching your financial goals!"
        )


def render_dashboard_page(service: FinanceDataService):
    """Render totals, monthly flow, expense breakdown and goal bars."""
    st.title("📊 Dashboard Overview")
    summary = service.summary()

    col1, col2, col3 = st.columns(3)
    col1.metric("Total Income", money(summary.totals.income))
    col2.metric("Total Expenses", money(summary.totals.expenses))
    col3.metric("Current Balance", money(summary.totals.balance))

    left, right = st.columns([3, 2])
    with left:
        st.subheader("Monthly Flow")
        if summary.monthly:
            st.bar_chart(
                [
                    {
                        "month": m.period_label,
                        "income": float(m.income),
                        "expenses": float(m.expenses),
                    }
                    for m in summary.monthly
                ],
                x="month",
                y=["income", "expenses"],
                stack=False,
            )
        else:
            st.caption("No transactions yet.")
    with right:
        st.subheader("Expense Breakdown")
        if summary.expense_breakdown:
            st.dataframe(
                [{"Category": row.name, "Amount": money(row.amount)} for row in summary.expense_breakdown],
                hide_index=True,
                use_container_width=True,
            )
        else:
            st.caption("No expenses yet.")

    st.subheader("Active Goals")
    render_goal_bars(service)


def render_goal_bars(service: FinanceDataService):
    progress = goal_progress(service.goals)
    if not progress:
        st.caption("No goals set yet. Go to the Goals tab to create one!")
        return
    for row in progress:
        st.markdown(f"**{row.name}**: {money(row.current_amount)} / {money(row.target_amount)}")
        st.progress(row.fraction, text=f"{row.fraction:.0%}")


def render_transactions_page(service: FinanceDataService):
    """Render the filterable transaction history."""
    st.title("📋 Transactions History")

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        type_filter = st.selectbox(
            "Type",
            options=[None, TransactionType.INCOME, TransactionType.EXPENSE],
            format_func=lambda x: "All Types" if x is None else x.value.title(),
        )
    with col2:
        category_filter = st.selectbox(
            "Category",
            options=[None] + [c.id for c in service.registry],
            format_func=lambda x: "All Categories" if x is None else service.category_name(x),
        )
    with col3:
        start_date = st.date_input("From", value=None)
    with col4:
        end_date = st.date_input("To", value=None)

    try:
        criteria = TransactionFilter(
            type=type_filter,
            category_id=category_filter,
            start_date=start_date,
            end_date=end_date,
        )
    except ValueError as e:
        st.error(str(e))
        return

    rows = filter_transactions(service.transactions, criteria)
    if not rows:
        st.info("No transactions found for the selected filters.")
        return

    st.dataframe(
        [
            {
                "Date": t.date.isoformat(),
                "Description": t.description,
                "Amount": ("+" if t.signed_amount > 0 else "-") + money(abs(t.signed_amount)),
                "Category": ", ".join(
                    f"{service.category_name(s.category_id)}: {money(s.amount)}" if t.is_split
                    else service.category_name(s.category_id)
                    for s in t.splits
                ),
            }
            for t in rows
        ],
        hide_index=True,
        use_container_width=True,
    )


def render_new_transaction_page(service: FinanceDataService):
    """Render the add-transaction form with category splits."""
    st.title("➕ New Transaction")

    app_settings = get_settings().app
    if "transaction_form" not in st.session_state:
        st.session_state.transaction_form = TransactionForm(
            registry=service.registry,
            tolerance=app_settings.split_tolerance,
            enforce_category_kind=app_settings.enforce_category_kind,
        )
    form: TransactionForm = st.session_state.transaction_form

    kind = st.radio(
        "Type",
        options=[TransactionType.EXPENSE, TransactionType.INCOME],
        index=0 if form.type == TransactionType.EXPENSE else 1,
        format_func=lambda x: x.value.title(),
        horizontal=True,
    )
    if kind != form.type:
        form.set_type(kind)

    form.description = st.text_input("Description", value=form.description)
    form.date = st.date_input("Date", value=form.date)
    total = st.number_input(
        "Total Amount", value=float(form.total_amount), min_value=0.0, step=0.01, format="%.2f"
    )
    if total != float(form.total_amount):
        form.set_total_amount(total)

    st.markdown("### Categories")
    categories = form.available_categories
    category_ids = [c.id for c in categories]
    for index, split in enumerate(list(form.splits)):
        col1, col2, col3 = st.columns([2, 2, 1])
        with col1:
            chosen = st.selectbox(
                f"Category {index + 1}",
                options=category_ids,
                index=category_ids.index(split.category_id) if split.category_id in category_ids else 0,
                format_func=service.category_name,
                key=f"split_category_{form.type.value}_{index}",
            )
            if chosen != split.category_id:
                form.set_split_category(index, chosen)
        with col2:
            amount = st.number_input(
                f"Amount {index + 1}",
                value=float(split.amount),
                min_value=0.0,
                step=0.01,
                format="%.2f",
                key=f"split_amount_{index}_{len(form.splits)}",
            )
            if amount != float(split.amount):
                form.set_split_amount(index, amount)
        with col3:
            if st.button("🗑️", key=f"remove_split_{index}", disabled=len(form.splits) <= 1):
                form.remove_split(index)
                st.rerun()

    if st.button("➕ Split Transaction"):
        form.add_split()
        st.rerun()

    remaining = form.remaining
    if form.is_balanced:
        st.success(f"Unassigned amount: {money(remaining)}")
    else:
        st.warning(f"Unassigned amount: {money(remaining)}")

    if st.button("Add Transaction", type="primary", disabled=form.is_submitting):
        created = run_async(form.submit(service))
        if created is not None:
            st.success(f"Saved '{created.description}'.")
            form.reset()
        else:
            st.error(form.error)


def render_goals_page(service: FinanceDataService):
    """Render goal cards and the new-goal form."""
    st.title("🎯 Financial Goals")

    if not service.goals:
        st.info("You haven't set any goals yet. Use the form below to start planning for your future!")
    for goal in service.goals:
        with st.container(border=True):
            st.markdown(f"### {goal.name}")
            st.caption(f"Target Date: {goal.target_date.isoformat()}")
            st.progress(goal.progress, text=f"{goal.progress_percent:.0f}%")
            st.markdown(f"{money(goal.current_amount)} / {money(goal.target_amount)}")
            if goal.is_reached:
                st.success("Goal reached!")
            else:
                st.caption(f"{money(goal.remaining_amount)} to go")

    st.markdown("---")
    st.subheader("Create New Goal")
    if "goal_form" not in st.session_state:
        st.session_state.goal_form = GoalForm()
    form: GoalForm = st.session_state.goal_form

    with st.form("new_goal"):
        name = st.text_input("Goal Name", placeholder="e.g., New Car Fund")
        target_amount = st.number_input("Target Amount", min_value=0.0, step=0.01, format="%.2f")
        target_date = st.date_input("Target Date", min_value=date.today())
        submitted = st.form_submit_button("Create Goal")

    if submitted:
        form.name = name
        form.target_amount = target_amount
        form.target_date = target_date
        created = run_async(form.submit(service))
        if created is not None:
            st.success(f"Goal '{created.name}' created.")
            form.reset()
            st.rerun()
        else:
            st.error(form.error)


def render_settings_page():
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.markdown("### Configuration Status")
    status = validate_all_settings()
    for name, key in [("Data store", "store"), ("Application", "app")]:
        if status.get(key, False):
            st.success(f"✅ {name} - OK")
        else:
            st.error(f"❌ {name} - {status.get(f'{key}_error', 'Not configured')}")

    store = get_settings().store
    st.markdown(f"**Backend:** {store.backend}  \n**Base URL:** {store.base_url}")
    st.markdown(
        "Configure the store with `FINANCE_STORE_BASE_URL` (or a `.env` file). "
        "Set `FINANCE_STORE_BACKEND=memory` to run without a server."
    )


if __name__ == "__main__":
    main()
