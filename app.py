"""Streamlit dashboard for maintenance work orders and inventory."""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import streamlit as st

from cmms_dashboard import compute_dashboard, prepare_work_order_dataframe
from cmms_dashboard.analytics import build_cost_chart, build_reliability_chart, prepare_parts_dataframe, stock_status
from cmms_dashboard.reporting import (
    build_dashboard_pdf,
    build_work_order_pdf,
    export_dashboard_excel,
    export_work_orders_excel,
    work_order_pdf_filename,
    work_orders_excel_filename,
)

st.set_page_config(page_title="Painel de Manutenção", layout="wide")
st.title("🛠️ Painel de Manutenção")

_ALERT_RENDERERS = {
    "warning": st.warning,
    "info": st.info,
    "success": st.success,
}


def _read_upload(uploaded) -> pd.DataFrame | None:
    if uploaded is None:
        return None
    suffix = Path(uploaded.name).suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(uploaded)
    if suffix == ".json":
        payload = json.loads(uploaded.getvalue())
        if isinstance(payload, dict):
            payload = payload.get("data", [])
        return pd.json_normalize(payload)
    return pd.read_excel(uploaded)


def _download_bytes(data: bytes, *, file_name: str, mime: str, label: str, key: str) -> None:
    st.download_button(
        label,
        data=data,
        file_name=file_name,
        mime=mime,
        use_container_width=True,
        key=key,
    )


def _render_alerts(alerts) -> None:
    st.subheader("Alertas")
    if not alerts:
        st.caption("Nenhum alerta no momento.")
        return
    for alert in alerts:
        _ALERT_RENDERERS.get(alert.type, st.info)(f"**{alert.title}**: {alert.description}")


def main() -> None:
    with st.sidebar:
        st.header("Snapshots")
        orders_upload = st.file_uploader("Ordens de serviço", type=["csv", "json", "xlsx"])
        parts_upload = st.file_uploader("Peças", type=["csv", "json", "xlsx"])
        equipment_upload = st.file_uploader("Equipamentos", type=["csv", "json", "xlsx"])

    work_orders = _read_upload(orders_upload)
    if work_orders is None:
        st.info("Envie o export de ordens de serviço para calcular os indicadores.")
        return
    parts = _read_upload(parts_upload)
    equipments = _read_upload(equipment_upload)

    # every rerun recomputes from the current uploads; nothing is cached between runs
    snapshot = compute_dashboard(work_orders, parts, equipments)
    summary = snapshot.summary

    cols = st.columns(5)
    cols[0].metric("Total de OS", summary.total_work_orders)
    cols[1].metric("Em andamento", summary.in_progress_count)
    cols[2].metric("Programadas", summary.scheduled_count)
    cols[3].metric("Finalizadas hoje", summary.completed_today)
    cols[4].metric("Disponibilidade", f"{summary.availability:.2f}%")

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(build_reliability_chart(snapshot.reliability), use_container_width=True)
    with col2:
        st.plotly_chart(build_cost_chart(snapshot.costs), use_container_width=True)

    _render_alerts(snapshot.alerts)

    st.subheader("Ordens recentes")
    st.dataframe(pd.DataFrame(snapshot.recent_work_orders), use_container_width=True, hide_index=True)

    if parts is not None and not parts.empty:
        st.subheader("Estoque")
        inventory = prepare_parts_dataframe(parts)
        inventory["Situação"] = [stock_status(row) for row in inventory.to_dict("records")]
        st.dataframe(inventory, use_container_width=True, hide_index=True)

    st.subheader("Downloads")
    _download_bytes(
        export_dashboard_excel(snapshot),
        file_name="indicadores_manutencao.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        label="📊 Indicadores (Excel)",
        key="download_kpi_excel",
    )
    try:
        kpi_pdf = build_dashboard_pdf(snapshot)
    except ImportError as exc:
        st.warning(str(exc))
    else:
        _download_bytes(
            kpi_pdf,
            file_name="indicadores_manutencao.pdf",
            mime="application/pdf",
            label="📄 Indicadores (PDF)",
            key="download_kpi_pdf",
        )

    _download_bytes(
        export_work_orders_excel(prepare_work_order_dataframe(work_orders).to_dict("records")),
        file_name=work_orders_excel_filename(),
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        label="📋 Ordens de serviço (Excel)",
        key="download_orders_excel",
    )

    prepared = prepare_work_order_dataframe(work_orders).dropna(subset=["code"])
    if not prepared.empty:
        records = prepared.to_dict("records")
        labels = [str(record["code"]) for record in records]
        position = st.selectbox("Ordem de serviço para imprimir", range(len(labels)), format_func=labels.__getitem__)
        try:
            order_pdf = build_work_order_pdf(records[position])
        except ImportError as exc:
            st.warning(str(exc))
        else:
            _download_bytes(
                order_pdf,
                file_name=work_order_pdf_filename(labels[position]),
                mime="application/pdf",
                label="🖨️ Baixar OS (PDF)",
                key="download_order_pdf",
            )


if __name__ == "__main__":
    main()
