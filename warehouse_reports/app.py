from datetime import date

import streamlit as st

from warehouse_reports.config import get_config
from warehouse_reports.data.models import REPORT_CATALOG
from warehouse_reports.reports.aggregator import category_values, records_to_frame, status_distribution
from warehouse_reports.reports.orchestrator import GenerationState, create_orchestrator

st.set_page_config(page_title="Warehouse reports", layout="wide")

config = get_config()

# -----------------------------------------------------------------------------
# One orchestrator per browser session (selection, in-flight flag, results)
# -----------------------------------------------------------------------------
if "orchestrator" not in st.session_state:
    st.session_state.orchestrator = create_orchestrator()
orch = st.session_state.orchestrator

ALL_CATEGORIES = "(All)"
RISK_COLORS = {"Low": "green", "Medium": "orange", "High": "red"}


# -----------------------------------------------------------------------------
# Report catalog
# -----------------------------------------------------------------------------
def render_dashboard() -> None:
    left, right = st.columns([4, 1])
    left.title("Report center")
    left.caption("Choose a report type to generate analytics and statistics.")
    right.button(f"Today: {date.today():%d.%m.%Y}", disabled=True)

    cols = st.columns(len(REPORT_CATALOG))
    for col, report in zip(cols, REPORT_CATALOG):
        with col.container(border=True):
            st.markdown(f"### {report.icon_name} {report.title}")
            st.caption(report.description)
            if st.button("Create report", key=f"select-{report.id.value}"):
                orch.select_report(report.id)
                st.rerun()


# -----------------------------------------------------------------------------
# Selected report
# -----------------------------------------------------------------------------
def render_settings() -> None:
    with st.container(border=True):
        st.subheader("Report settings")
        st.caption("Set the filters before generating the data.")
        c1, c2 = st.columns(2)
        warehouse = c1.selectbox("Warehouse", config.warehouses)
        category = c2.selectbox("Category", [ALL_CATEGORIES] + config.categories)
        st.info(f"Generation uses **{config.ai_model}** to look for anomalies and assess risk in the data.")

        if st.button("Generate report", type="primary", disabled=orch.is_generating):
            orch.set_filters(warehouse=warehouse, category=None if category == ALL_CATEGORIES else category)
            with st.spinner("Analyzing data..."):
                orch.generate()
            st.rerun()


def render_report() -> None:
    snapshot = orch.snapshot
    summary = snapshot.summary

    c1, c2, c3 = st.columns(3)
    c1.metric("Total items", f"{summary.total_items:,}")
    c2.metric("Total value", f"${summary.total_value:,.0f}")
    c3.metric("Need attention", f"{summary.critical_items_count:,}")
    st.caption(f"Generated at {snapshot.generated_at:%d.%m.%Y %H:%M:%S}")

    analysis = orch.analysis
    if analysis is not None:
        with st.container(border=True):
            color = RISK_COLORS.get(analysis.risk_assessment, "gray")
            st.markdown(f"#### :sparkles: AI analysis  :{color}-background[Risk: {analysis.risk_assessment}]")
            st.markdown("**Summary**")
            st.write(analysis.summary)
            st.markdown("**Recommendations**")
            st.markdown("\n".join(f"- {rec}" for rec in analysis.recommendations))

    items = snapshot.items
    left, right = st.columns(2)
    with left:
        st.markdown("### Status distribution")
        st.bar_chart(status_distribution(items), x="status", y="count")
    with right:
        st.markdown("### Value by category")
        st.bar_chart(category_values(items), x="category", y="value")

    st.markdown("### Details")
    table = records_to_frame(items)
    st.download_button(
        "Export CSV",
        data=table.to_csv(index=False).encode("utf-8"),
        file_name=f"{orch.report_type.value.lower()}_{snapshot.generated_at:%Y%m%d_%H%M%S}.csv",
        mime="text/csv",
    )
    st.dataframe(
        table[["name", "sku", "category", "quantity", "value", "status"]],
        use_container_width=True,
        hide_index=True,
    )


def render_report_view() -> None:
    report = orch.report_config
    back, title = st.columns([1, 11])
    if back.button(":arrow_left:", help="Back to reports"):
        orch.reset()
        st.rerun()
    title.header(f"{report.icon_name} {report.title}")

    if orch.state == GenerationState.FAILED:
        st.error(orch.error)
        render_settings()
    elif orch.state == GenerationState.READY:
        render_report()
    else:
        render_settings()


if orch.report_type is None:
    render_dashboard()
else:
    render_report_view()
