import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging
from datetime import date

import streamlit as st
import pandas as pd
import numpy as np
import plotly.express as px
import plotly.graph_objects as go

from core import config
from core.aggregation import compute_totals, group_expenses_by_category, group_transactions_by_month
from core.budgets import evaluate_budgets, select_alerts, alert_level, EXCEEDED
from core.catalog import EXPENSE_CATEGORIES, categories_for, category_name, lookup, UNKNOWN_COLOR
from core.domain import INCOME, EXPENSE
from core.events import event_bus, TRANSACTION_ADDED
from core.filters import by_type, by_category, by_date_range
from core.stats import compute_dashboard_stats, NO_CATEGORY
from core.storage import (
    KeyValueStore,
    load_transactions,
    save_transactions,
    load_budgets,
    save_budgets,
    load_theme,
)
from core.transforms import (
    load_seed,
    add_transaction,
    delete_transaction,
    set_budget,
    validate_transaction,
    income_transactions,
    expense_transactions,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

st.set_page_config(page_title="Finance Manager", layout="wide")

store = KeyValueStore(config.STORE_PATH)


def seed_data():
    try:
        return load_seed(config.SEED_PATH)
    except (OSError, ValueError, KeyError) as e:
        logger.warning("Seed data unavailable at %s: %s", config.SEED_PATH, e)
        return (), {}


def persist(key, save):
    try:
        save()
    except OSError as e:
        logger.error("Could not save %s: %s", key, e)
        st.error(f"Could not save {key}: {e}")


if "transactions" not in st.session_state:
    seed_trans, seed_budgets = seed_data()
    st.session_state.transactions = load_transactions(store, default=seed_trans)
    st.session_state.budgets = load_budgets(store, default=seed_budgets)
    st.session_state.theme = load_theme(store)
    st.session_state.developer = store.read(config.DEVELOPER_KEY, config.DEVELOPER_INFO)

template = "plotly_dark" if st.session_state.theme == "dark" else "plotly_white"
transactions = st.session_state.transactions
budgets = st.session_state.budgets
today = date.today()


def money(value):
    return f"{value:,.2f}"


def tx_to_df(tx_list):
    rows = [
        {
            "id": t.id,
            "date": pd.to_datetime(t.date),
            "type": t.type,
            "category": category_name(t.category_id),
            "amount": t.amount,
            "description": t.description,
            "tags": ", ".join(t.tags),
        }
        for t in tx_list
    ]
    return pd.DataFrame(rows, columns=["id", "date", "type", "category", "amount", "description", "tags"])


if not store.read(config.WELCOME_KEY, False):
    st.title("👛 Welcome to Finance Manager")
    st.write(
        "Record your income and expenses, follow category and monthly breakdowns, "
        "and set monthly budgets per category. Everything stays on this device."
    )
    if st.button("Get started"):
        persist("welcome flag", lambda: store.write(config.WELCOME_KEY, True))
        st.rerun()
    st.stop()

menu = st.sidebar.radio(
    "Menu",
    ["🏠 Dashboard", "➕ Add Transaction", "📑 Reports", "💰 Budgets", "⚙️ Settings"]
)

if menu == "🏠 Dashboard":
    st.title("🏠 Dashboard")

    totals = compute_totals(transactions)
    stats = compute_dashboard_stats(transactions, today)

    k1, k2, k3 = st.columns(3)
    with k1:
        st.metric("Income", money(totals.income))
    with k2:
        st.metric("Expenses", money(totals.expense))
    with k3:
        st.metric("Balance", money(totals.balance))

    s1, s2, s3, s4 = st.columns(4)
    with s1:
        st.metric("Transactions", stats.total_transactions)
        st.caption(
            f"{len(income_transactions(transactions))} income · "
            f"{len(expense_transactions(transactions))} expense"
        )
    with s2:
        largest = stats.largest_expense_category
        st.metric("Largest spending category", "—" if largest == NO_CATEGORY else largest)
    with s3:
        st.metric("Highest income", money(stats.highest_income_amount))
    with s4:
        st.metric("Savings rate this month", f"{stats.current_month_savings_percentage:.1f}%")

    alerts = select_alerts(evaluate_budgets(transactions, budgets, today), config.ALERT_THRESHOLD)
    for status in alerts:
        if alert_level(status, config.ALERT_THRESHOLD) == EXCEEDED:
            st.error(f"🔴 {status.name}: budget exceeded ({status.percentage:.0f}%)")
        else:
            st.warning(f"🟠 {status.name}: {status.percentage:.0f}% of the budget used")

    st.subheader("🧾 Recent Transactions")
    if transactions:
        df = tx_to_df(transactions[:20])
        disp = df.drop(columns=["id"]).assign(
            date=lambda x: x["date"].dt.strftime("%Y-%m-%d"),
            amount=lambda x: x["amount"].map(money),
        )
        st.dataframe(disp, use_container_width=True, hide_index=True)

        with st.expander("🗑 Delete a transaction"):
            labels = {
                f"{t.date.isoformat()} · {category_name(t.category_id)} · {money(t.amount)} · {t.description}": t.id
                for t in transactions
            }
            choice = st.selectbox("Transaction", list(labels.keys()))
            confirmed = st.checkbox("I understand this cannot be undone", key="confirm_delete")
            if st.button("Delete", disabled=not confirmed):
                st.session_state.transactions = delete_transaction(transactions, labels[choice])
                persist("transactions", lambda: save_transactions(store, st.session_state.transactions))
                logger.info("Deleted transaction %s", labels[choice])
                st.rerun()
    else:
        st.info("No transactions yet. Add one from the menu.")

elif menu == "➕ Add Transaction":
    st.title("➕ Add Transaction")

    t_type = st.radio("Type", [EXPENSE, INCOME], format_func=str.capitalize, horizontal=True)
    with st.form("input_form", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            t_date = st.date_input("Date", value=today)
            amount = st.number_input("Amount", min_value=0.0, step=10.0, format="%.2f")
        with col2:
            options = categories_for(t_type)
            category = st.selectbox("Category", options, format_func=lambda c: c.name)
            tags = st.text_input("Tags (comma separated)")
        description = st.text_input("Description (optional)")
        submitted = st.form_submit_button("Add Transaction")

    if submitted:
        result = validate_transaction({
            "type": t_type,
            "category_id": category.id if category else "",
            "amount": amount,
            "date": t_date,
            "description": description,
            "tags": [tag.strip() for tag in tags.split(",") if tag.strip()],
        })
        if result.is_right():
            new_tx = result.get_or_else(None)
            st.session_state.transactions = add_transaction(transactions, new_tx)
            persist("transactions", lambda: save_transactions(store, st.session_state.transactions))
            logger.info("Added %s transaction %s", new_tx.type, new_tx.id)

            handlers_results = event_bus.publish(TRANSACTION_ADDED, {
                "transaction": new_tx,
                "transactions": st.session_state.transactions,
                "budgets": budgets,
                "now": today,
                "threshold": config.ALERT_THRESHOLD,
            })
            alerts = [a for r in handlers_results for a in r.get("alerts", [])]

            st.success("✅ Transaction added!")
            for status in alerts:
                if status.exceeded:
                    st.error(f"🔴 {status.name}: budget exceeded by {money(-status.remaining)}")
                else:
                    st.warning(f"🟠 {status.name}: {status.percentage:.0f}% of the monthly budget used")
        else:
            st.error(f"❌ {result.get_error()['message']}")

elif menu == "📑 Reports":
    st.title("📑 Reports")

    if not transactions:
        st.info("No data to analyze")
    else:
        st.subheader("Expenses by category")
        breakdown = group_expenses_by_category(transactions)
        if breakdown:
            df_cat = pd.DataFrame([{"Category": b.name, "Amount": b.value, "color": b.color} for b in breakdown])
            df_cat = df_cat.sort_values("Amount", ascending=False)
            fig_cat = px.pie(
                df_cat,
                values="Amount",
                names="Category",
                color="Category",
                color_discrete_map=dict(zip(df_cat["Category"], df_cat["color"])),
                template=template,
            )
            st.plotly_chart(fig_cat, use_container_width=True)
            st.table(df_cat[["Category", "Amount"]].assign(Amount=lambda x: x["Amount"].map(money)))
        else:
            st.info("No expenses recorded")

        st.subheader("Monthly income and expenses")
        monthly = group_transactions_by_month(transactions)
        df_m = pd.DataFrame([{"month": m.month_key, "income": m.income, "expense": m.expense} for m in monthly])
        df_m["savings %"] = np.where(
            df_m["income"] > 0,
            (df_m["income"] - df_m["expense"]) / df_m["income"].where(df_m["income"] > 0, 1) * 100,
            0.0,
        )
        chrono = df_m.iloc[::-1]
        labels = pd.to_datetime(chrono["month"] + "-01").dt.strftime("%b %Y")
        fig_m = go.Figure()
        fig_m.add_trace(go.Bar(x=labels, y=chrono["income"], name="Income", marker_color="#10B981"))
        fig_m.add_trace(go.Bar(x=labels, y=chrono["expense"], name="Expense", marker_color="#EF4444"))
        fig_m.update_layout(barmode="group", template=template, margin=dict(t=30, b=10, l=10, r=10))
        st.plotly_chart(fig_m, use_container_width=True)
        st.dataframe(df_m.round(2), use_container_width=True, hide_index=True)

        st.subheader("🔎 Transactions")
        col1, col2, col3 = st.columns(3)
        with col1:
            dates = [t.date for t in transactions]
            date_range = st.date_input("Date Range", value=(min(dates), max(dates)), key="report_date_range")
        with col2:
            type_choice = st.selectbox("Type", ["all", INCOME, EXPENSE], format_func=str.capitalize)
        with col3:
            cat_choice = st.selectbox(
                "Category",
                [None] + list(categories_for(INCOME) + categories_for(EXPENSE)),
                format_func=lambda c: "All" if c is None else c.name,
            )

        filtered = transactions
        if len(date_range) == 2:
            filtered = tuple(filter(by_date_range(date_range[0], date_range[1]), filtered))
        if type_choice != "all":
            filtered = tuple(filter(by_type(type_choice), filtered))
        if cat_choice is not None:
            filtered = tuple(filter(by_category(cat_choice.id), filtered))

        if filtered:
            sub_totals = compute_totals(filtered)
            st.caption(
                f"{len(filtered)} transactions · income {money(sub_totals.income)} · "
                f"expenses {money(sub_totals.expense)} · balance {money(sub_totals.balance)}"
            )
            df_f = tx_to_df(filtered)
            st.dataframe(
                df_f.drop(columns=["id"]).assign(date=lambda x: x["date"].dt.strftime("%Y-%m-%d")),
                use_container_width=True,
                hide_index=True,
            )
            csv = df_f.to_csv(index=False)
            st.download_button("⬇ Download CSV", csv, file_name="transactions_filtered.csv", mime="text/csv")
        else:
            st.info("No transactions match the selected filters")

elif menu == "💰 Budgets":
    st.title("💰 Budgets")
    st.caption(f"Alerts start at {config.ALERT_THRESHOLD:.0f}% of a monthly limit.")

    with st.form("budget_form"):
        col1, col2 = st.columns(2)
        with col1:
            cat = st.selectbox("Category", EXPENSE_CATEGORIES, format_func=lambda c: c.name)
        with col2:
            limit = st.number_input("Monthly limit (0 removes the budget)", min_value=0.0, step=50.0)
        save = st.form_submit_button("Save budget")
    if save:
        st.session_state.budgets = set_budget(budgets, cat.id, limit)
        persist("budgets", lambda: save_budgets(store, st.session_state.budgets))
        st.rerun()

    statuses = evaluate_budgets(transactions, budgets, today)
    if statuses:
        for status in statuses:
            level = alert_level(status, config.ALERT_THRESHOLD)
            icon = {"exceeded": "🔴", "approaching": "🟠"}.get(level, "🟢")
            color = lookup(status.category_id).map(lambda c: c.color).get_or_else(UNKNOWN_COLOR)
            st.markdown(
                f"{icon} <span style='color:{color}'>**{status.name}**</span> — "
                f"{money(status.spent)} / {money(status.limit)} ({status.percentage:.0f}%), "
                f"remaining {money(status.remaining)}",
                unsafe_allow_html=True,
            )
            st.progress(min(100.0, status.percentage) / 100)
    else:
        st.info("No budgets defined")

elif menu == "⚙️ Settings":
    st.title("⚙️ Settings")

    theme = st.radio("Theme", config.THEMES, index=config.THEMES.index(st.session_state.theme), horizontal=True)
    if theme != st.session_state.theme:
        st.session_state.theme = theme
        persist("theme", lambda: store.write(config.THEME_KEY, theme))
        st.rerun()

    st.divider()
    st.subheader("Reset data")
    st.write("Replace all transactions and budgets with the sample data.")
    confirmed = st.checkbox("I understand this cannot be undone", key="confirm_reset")
    if st.button("Reset", disabled=not confirmed):
        seed_trans, seed_budgets = seed_data()
        st.session_state.transactions = seed_trans
        st.session_state.budgets = seed_budgets
        persist("transactions", lambda: save_transactions(store, seed_trans))
        persist("budgets", lambda: save_budgets(store, seed_budgets))
        logger.info("Reset data to %d seed transactions", len(seed_trans))
        st.success("Data has been reset.")

    st.divider()
    st.subheader("About")
    st.write("Finance Manager keeps your income, expenses and budgets on this device.")
    dev = st.session_state.developer
    st.caption(f"Developed by {dev.get('name', '')} · {dev.get('email', '')}")
