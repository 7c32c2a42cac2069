"""Plotly charts for the reliability and cost series."""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
from plotly.subplots import make_subplots

_PRIMARY = "#2563eb"
_DANGER = "#dc2626"
_SUCCESS = "#059669"


def _empty_figure(message: str):
    fig = px.scatter()
    fig.add_annotation(text=message, showarrow=False)
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(height=320, margin=dict(l=10, r=10, t=40, b=10))
    return fig


def build_reliability_chart(series: pd.DataFrame):
    """MTBF bars on the left axis, MTTR line on the right axis."""
    if series.empty or {"month", "reliability_hours", "mean_repair_hours"} - set(series.columns):
        return _empty_figure("Sem dados de confiabilidade.")

    fig = make_subplots(specs=[[{"secondary_y": True}]])
    fig.add_trace(
        go.Bar(x=series["month"], y=series["reliability_hours"], name="MTBF (horas)", marker_color=_PRIMARY),
        secondary_y=False,
    )
    fig.add_trace(
        go.Scatter(
            x=series["month"],
            y=series["mean_repair_hours"],
            name="MTTR (horas)",
            mode="lines+markers",
            line=dict(color=_DANGER, width=2),
        ),
        secondary_y=True,
    )
    fig.update_layout(
        title="MTBF & MTTR",
        height=400,
        legend_title_text="",
        hovermode="x unified",
    )
    fig.update_yaxes(title_text="MTBF (horas)", secondary_y=False)
    fig.update_yaxes(title_text="MTTR (horas)", secondary_y=True)
    return fig


def build_cost_chart(series: pd.DataFrame):
    """Grouped bars comparing preventive and corrective spend per month."""
    if series.empty or {"month", "preventive_cost", "corrective_cost"} - set(series.columns):
        return _empty_figure("Sem dados de custos.")

    fig = px.bar(
        series.rename(columns={"preventive_cost": "Preventiva", "corrective_cost": "Corretiva"}),
        x="month",
        y=["Preventiva", "Corretiva"],
        barmode="group",
        labels={"month": "Mês", "value": "Custo (R$)", "variable": ""},
        title="Custos de Manutenção",
        color_discrete_map={"Preventiva": _SUCCESS, "Corretiva": _DANGER},
    )
    fig.update_layout(height=400)
    return fig
