import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import date

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from catatuang.config import settings
from catatuang.domain import Direction, Granularity, SortOrder, TransactionKind
from catatuang.charts import breakdown_frame, buckets_frame
from catatuang.events import event_bus, register_default_handlers
from catatuang.filters import recent_transactions
from catatuang.formatting import format_currency, list_header, period_label, range_label
from catatuang.logging_setup import configure_logging
from catatuang.navigation import NavigationState
from catatuang.services import ReportService
from catatuang.storage import TransactionStore
from catatuang.summary import overall_balance

configure_logging()
register_default_handlers(event_bus)

st.set_page_config(page_title=settings.APP_NAME, layout="wide")

if "store" not in st.session_state:
    st.session_state.store = TransactionStore.from_settings()
if "report_nav" not in st.session_state:
    st.session_state.report_nav = NavigationState.for_reports()
if "list_nav" not in st.session_state:
    st.session_state.list_nav = NavigationState.for_transaction_list()

store: TransactionStore = st.session_state.store
transactions = store.list_transactions()
categories = store.list_categories()
category_names = {c.id: c.name for c in categories}
service = ReportService()

KIND_LABELS = {"Semua": None, "Pemasukan": TransactionKind.INCOME, "Pengeluaran": TransactionKind.EXPENSE}


def navigation_controls(nav: NavigationState, key: str, tabs: dict) -> None:
    labels = list(tabs)
    current = next(label for label, g in tabs.items() if g is nav.granularity)
    chosen = st.radio("Periode", labels, index=labels.index(current), horizontal=True, key=f"{key}_tab")
    if tabs[chosen] is not nav.granularity:
        nav.set_granularity(tabs[chosen])

    c1, c2, c3, c4 = st.columns([1, 1, 1, 4])
    if c1.button("◀", key=f"{key}_prev"):
        nav.navigate(Direction.PREVIOUS)
    if c2.button("Hari ini", key=f"{key}_today"):
        nav.reset_to_today()
    if c3.button("▶", key=f"{key}_next"):
        nav.navigate(Direction.NEXT)
    with c4:
        picked = st.date_input("Rentang khusus", value=(), key=f"{key}_custom")
        if isinstance(picked, tuple) and len(picked) == 2 and st.button("Terapkan", key=f"{key}_apply"):
            nav.apply_custom_range(picked[0], picked[1])


def transactions_table(rows) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Tanggal": t.date[:10],
                "Deskripsi": t.description,
                "Kategori": category_names.get(t.category_id, settings.FALLBACK_CATEGORY_NAME),
                "Jenis": "Pemasukan" if t.kind is TransactionKind.INCOME else "Pengeluaran",
                "Jumlah": format_currency(t.magnitude),
            }
            for t in rows
        ],
        columns=["Tanggal", "Deskripsi", "Kategori", "Jenis", "Jumlah"],
    )


menu = st.sidebar.radio("Menu", ["🏠 Beranda", "🧾 Transaksi", "📑 Laporan"])

if menu == "🏠 Beranda":
    balance = overall_balance(transactions)
    k1, k2, k3 = st.columns(3)
    k1.metric("Saldo", format_currency(balance["total"]))
    k2.metric("Pemasukan", format_currency(balance["income"]))
    k3.metric("Pengeluaran", format_currency(balance["expense"]))

    st.subheader("Transaksi terbaru")
    st.table(transactions_table(recent_transactions(transactions)))

    st.subheader("➕ Tambah transaksi")
    kind = KIND_LABELS[st.radio("Jenis", ["Pengeluaran", "Pemasukan"], horizontal=True, key="new_kind")]
    with st.form("input_form", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            amount = st.number_input("Jumlah", min_value=0.0, step=1000.0, format="%.0f")
            tx_date = st.date_input("Tanggal", value=date.today())
        with col2:
            options = store.list_categories(kind)
            category = st.selectbox("Kategori", options, format_func=lambda c: c.name)
            description = st.text_input("Deskripsi")
        if st.form_submit_button("Simpan"):
            try:
                store.add_transaction(kind, amount, category.id, tx_date, description)
            except ValueError as e:
                st.error(str(e))
            else:
                st.success("Transaksi tersimpan")
                st.rerun()

elif menu == "🧾 Transaksi":
    nav: NavigationState = st.session_state.list_nav
    st.title(list_header(nav))
    navigation_controls(
        nav,
        "list",
        {"Harian": Granularity.DAY, "Mingguan": Granularity.WEEK, "Bulanan": Granularity.MONTH, "Tahunan": Granularity.YEAR},
    )

    f1, f2, f3 = st.columns(3)
    kind = KIND_LABELS[f1.selectbox("Jenis", list(KIND_LABELS))]
    picked = f2.selectbox("Kategori", [None] + list(categories), format_func=lambda c: "Semua" if c is None else c.name)
    order = SortOrder.NEWEST if f3.radio("Urutan", ["Terbaru", "Terlama"], horizontal=True) == "Terbaru" else SortOrder.OLDEST

    view = service.list_view(nav, transactions, kind=kind, category_id=picked.id if picked else None, order=order)
    st.caption(f"{period_label(nav.granularity, nav.reference_date)} · {range_label(view['range'])}")

    frame = buckets_frame(view["buckets"])
    if not frame.empty:
        fig = go.Figure()
        fig.add_trace(go.Bar(x=frame["label"], y=frame["income"], name="Pemasukan", marker_color="#10B981"))
        fig.add_trace(go.Bar(x=frame["label"], y=frame["expense"], name="Pengeluaran", marker_color="#EF4444"))
        fig.update_layout(barmode="group", margin=dict(t=30, b=10, l=10, r=10))
        st.plotly_chart(fig, use_container_width=True)

    if view["transactions"]:
        st.table(transactions_table(view["transactions"]))
    else:
        st.info("Tidak ada transaksi pada periode ini")

elif menu == "📑 Laporan":
    nav = st.session_state.report_nav
    st.title("📑 Laporan Keuangan")
    navigation_controls(
        nav,
        "report",
        {"Hari ini": Granularity.DAY, "Minggu": Granularity.WEEK, "Bulan": Granularity.MONTH, "Tahun": Granularity.YEAR},
    )

    report = service.period_report(nav, transactions, categories)
    summary = report["summary"]
    st.caption(range_label(report["range"]))

    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Pemasukan", format_currency(summary.income), f"{summary.income_count} transaksi")
    m2.metric("Pengeluaran", format_currency(summary.expense), f"{summary.expense_count} transaksi")
    m3.metric("Saldo", format_currency(summary.balance))
    m4.metric("Total transaksi", summary.total_count)

    a1, a2 = st.columns(2)
    a1.metric("Rata-rata pemasukan", format_currency(summary.average_income))
    a2.metric("Rata-rata pengeluaran", format_currency(summary.average_expense))

    for title, key in (("Top pengeluaran", "top_expense"), ("Top pemasukan", "top_income")):
        st.subheader(title)
        frame = breakdown_frame(report[key])
        if frame.empty:
            st.info("Belum ada data")
            continue
        fig = px.pie(frame, values="amount", names="category", color="category",
                     color_discrete_map=dict(zip(frame["category"], frame["color"])))
        fig.update_layout(height=300)
        st.plotly_chart(fig, use_container_width=True)
        st.dataframe(frame[["category", "amount", "count", "percentage"]], use_container_width=True)
