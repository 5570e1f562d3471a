import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import date, datetime

import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from finance_core.config import SEED_PATH, TREND_MONTHS, setup_logging
from finance_core.domain import BudgetPeriod, Category, TransactionType, categories_for
from finance_core.events import BUDGET_ALERT, EventBus, watch_budgets
from finance_core.frames import analysis_frame, breakdown_frame, monthly_frame, transactions_frame
from finance_core.ledger import BudgetRegistry, Ledger
from finance_core.services import FinanceService
from finance_core.transforms import load_seed

setup_logging()
st.set_page_config(page_title="Finance Tracker", layout="wide")

TYPE_CODES = [t.value for t in TransactionType]
PERIOD_CODES = [p.value for p in BudgetPeriod]


def _bootstrap():
    transactions, budgets = load_seed(SEED_PATH)
    bus = EventBus()
    ledger = Ledger(transactions, bus=bus)
    registry = BudgetRegistry(budgets, bus=bus)
    watch_budgets(bus, ledger, registry)
    alerts = []
    bus.subscribe(BUDGET_ALERT, lambda event, payload: alerts.append(payload) or {})
    st.session_state.ledger = ledger
    st.session_state.registry = registry
    st.session_state.alerts = alerts


if "ledger" not in st.session_state:
    _bootstrap()

ledger = st.session_state.ledger
registry = st.session_state.registry
service = FinanceService(ledger, registry)


def money(x: float) -> str:
    return f"${x:,.2f}"


def category_codes(type_) -> list:
    return [c.value for c in categories_for(TransactionType(type_))]


def category_label(code: str) -> str:
    return Category(code).display_name


def as_date(value) -> date:
    return value.date() if isinstance(value, datetime) else value


def describe(t) -> str:
    return f"{as_date(t.date):%Y-%m-%d} · {t.description} · {money(t.amount)}"


def apply(result, done: str) -> None:
    """Show a rejected change inline; rerun after an accepted one so every view is fresh."""
    if result.is_left():
        error = result.get_error()
        st.error(error["message"])
        if error["error"] == "budget_exists":
            st.info("Use Edit budget to change the existing one.")
        return
    st.session_state.flash = done
    st.rerun()


st.sidebar.markdown("### 📅 Reference date")
as_of = st.sidebar.date_input("As of", value=date.today())
months = st.sidebar.slider("Trend months", min_value=3, max_value=24, value=TREND_MONTHS)
now = datetime(as_of.year, as_of.month, as_of.day)

menu = st.sidebar.radio("Menu", ["🏠 Overview", "🎯 Budgets", "🧾 Transactions"], key="menu")

report = service.dashboard(now=now, month_count=months)

if "flash" in st.session_state:
    st.success(st.session_state.pop("flash"))
for alert in st.session_state.alerts:
    st.warning(alert["alert"])
st.session_state.alerts.clear()

if menu == "🏠 Overview":
    summary = report["summary"]
    k1, k2, k3, k4 = st.columns(4)
    with k1:
        st.metric("Total Balance", money(summary.balance))
    with k2:
        st.metric("Monthly Income", money(summary.this_month_income), f"{summary.income_change_percent:+.1f}%")
    with k3:
        st.metric(
            "Monthly Expenses",
            money(summary.this_month_expenses),
            f"{summary.expense_change_percent:+.1f}%",
            delta_color="inverse",
        )
    with k4:
        st.metric("Savings Rate", f"{summary.savings_rate:.1f}%")

    df_month = monthly_frame(report["monthly_income"], report["monthly_expenses"])
    fig_ts = go.Figure()
    fig_ts.add_trace(go.Bar(x=df_month["month"], y=df_month["income"], name="Income"))
    fig_ts.add_trace(go.Bar(x=df_month["month"], y=df_month["expenses"], name="Expenses"))
    fig_ts.update_layout(barmode="group", template="plotly_dark", margin=dict(t=30, b=10, l=10, r=10))
    st.plotly_chart(fig_ts, width="stretch")
    stats = report["expense_stats"]
    st.caption(f"Expenses over {months} months: {money(stats.total)} (avg {money(stats.average)} / month)")

    df_cat = breakdown_frame(report["expense_breakdown"])
    if not df_cat.empty:
        fig_cat = px.pie(df_cat, values="amount", names="category_name", title="Expenses by Category")
        fig_cat.update_layout(height=350)
        st.plotly_chart(fig_cat, width="stretch")

    insights = report["insights"]
    st.header("💡 Spending Insights")
    c1, c2, c3 = st.columns(3)
    with c1:
        st.metric("This month", money(insights.this_month_total), f"{insights.spending_change_percent:+.1f}%", delta_color="inverse")
    with c2:
        st.metric("Projected total", money(insights.projected_monthly))
    with c3:
        st.metric("Daily average", money(insights.daily_average))

    st.subheader("Top Categories")
    if insights.top_categories:
        for item in insights.top_categories:
            st.markdown(f"- **{item.name}**: {money(item.amount)}")
    else:
        st.info("No expenses this month yet")

    if insights.budget_warnings:
        st.subheader("⚠ Budget Alerts")
        for w in insights.budget_warnings:
            line = f"{w.name}: {money(w.spent)} of {money(w.budget)} ({w.percentage:.0f}%)"
            (st.error if w.is_over else st.warning)(line)

    if insights.high_expenses:
        st.subheader("Recent High Expenses")
        for t in insights.high_expenses:
            st.markdown(f"- {t.description} · {t.category.display_name} · {t.date:%b %d} · **{money(t.amount)}**")

elif menu == "🎯 Budgets":
    st.title("🎯 Budget vs Actual")
    df_budget = analysis_frame(report["budgets"])
    if df_budget.empty:
        st.info("No budgets set yet. Create your first budget to see the comparison.")
    else:
        fig_b = go.Figure()
        fig_b.add_trace(go.Bar(x=df_budget["category_name"], y=df_budget["budget"], name="Budget"))
        fig_b.add_trace(go.Bar(x=df_budget["category_name"], y=df_budget["actual"], name="Actual"))
        fig_b.update_layout(barmode="group", template="plotly_dark")
        st.plotly_chart(fig_b, width="stretch")
        st.dataframe(df_budget, width="stretch")

    st.subheader("Add budget")
    with st.form("budget_form"):
        category = st.selectbox(
            "Category", category_codes(TransactionType.EXPENSE), format_func=category_label, key="budget_category"
        )
        amount = st.number_input("Amount", min_value=0.0, step=10.0, key="budget_amount")
        period = st.selectbox("Period", PERIOD_CODES, format_func=str.title, key="budget_period")
        if st.form_submit_button("Save budget"):
            apply(registry.add(category, amount, period), "Budget saved")

    budgets = registry.list_budgets()
    if budgets:
        st.subheader("Edit budget")
        budget_by_id = {b.id: b for b in budgets}
        chosen = budget_by_id[
            st.selectbox(
                "Budget",
                list(budget_by_id),
                format_func=lambda i: budget_by_id[i].category.display_name,
                key="edit_budget",
            )
        ]
        with st.form("edit_budget_form"):
            amount = st.number_input(
                "Amount", min_value=0.0, step=10.0, value=float(chosen.amount), key=f"budget_amount_{chosen.id}"
            )
            period = st.selectbox(
                "Period",
                PERIOD_CODES,
                index=PERIOD_CODES.index(chosen.period.value),
                format_func=str.title,
                key=f"budget_period_{chosen.id}",
            )
            if st.form_submit_button("Update budget"):
                apply(registry.update(chosen.id, chosen.category, amount, period), "Budget updated")

    for b in budgets:
        cols = st.columns([4, 1])
        cols[0].markdown(f"{b.category.display_name}: {money(b.amount)} / {b.period.value}")
        if cols[1].button("Delete", key=f"del-{b.id}"):
            apply(registry.delete(b.id), "Budget deleted")

elif menu == "🧾 Transactions":
    st.title("🧾 Transactions")
    # outside the form so the category list follows the chosen type
    type_ = st.radio("Type", TYPE_CODES, format_func=str.title, horizontal=True, key="tx_type")
    with st.form("tx_form"):
        category = st.selectbox("Category", category_codes(type_), format_func=category_label, key="tx_category")
        amount = st.number_input("Amount", min_value=0.0, step=1.0, key="tx_amount")
        description = st.text_input("Description", key="tx_description")
        on = st.date_input("Date", value=as_of, key="tx_date")
        if st.form_submit_button("Add transaction"):
            apply(ledger.add(amount, description, category, type_, on), "Transaction added")

    transactions = ledger.list_transactions()
    df = transactions_frame(transactions)
    if df.empty:
        st.info("No transactions to display.")
    else:
        st.dataframe(df.drop(columns=["id"]), width="stretch")
        st.download_button("⬇ Download CSV", df.to_csv(index=False), file_name="transactions.csv")

        st.subheader("Edit or delete")
        tx_by_id = {t.id: t for t in transactions}
        chosen = tx_by_id[
            st.selectbox(
                "Transaction",
                list(tx_by_id),
                format_func=lambda i: describe(tx_by_id[i]),
                key="edit_tx",
            )
        ]
        edit_type = st.radio(
            "Type",
            TYPE_CODES,
            index=TYPE_CODES.index(chosen.type.value),
            format_func=str.title,
            horizontal=True,
            key=f"edit_type_{chosen.id}",
        )
        with st.form("edit_tx_form"):
            codes = category_codes(edit_type)
            category = st.selectbox(
                "Category",
                codes,
                index=codes.index(chosen.category.value) if chosen.category.value in codes else 0,
                format_func=category_label,
                key=f"edit_category_{chosen.id}_{edit_type}",
            )
            amount = st.number_input(
                "Amount", min_value=0.0, step=1.0, value=float(chosen.amount), key=f"edit_amount_{chosen.id}"
            )
            description = st.text_input("Description", value=chosen.description, key=f"edit_description_{chosen.id}")
            on = st.date_input("Date", value=as_date(chosen.date), key=f"edit_date_{chosen.id}")
            save = st.form_submit_button("Save changes")
            remove = st.form_submit_button("Delete transaction")
        if save:
            apply(ledger.update(chosen.id, amount, description, category, edit_type, on), "Transaction updated")
        elif remove:
            apply(ledger.delete(chosen.id), "Transaction deleted")
