from __future__ import annotations

import pandas as pd

from cmms_dashboard.analytics.kpis import build_cost_series, build_reliability_series
from cmms_dashboard.analytics.visuals import build_cost_chart, build_reliability_chart


def test_reliability_chart_has_bar_and_line():
    fig = build_reliability_chart(build_reliability_series([]))
    assert [trace.type for trace in fig.data] == ["bar", "scatter"]
    assert list(fig.data[0].x) == ["Jan", "Fev", "Mar", "Abr", "Mai", "Jun"]


def test_cost_chart_groups_two_series():
    fig = build_cost_chart(build_cost_series([]))
    assert len(fig.data) == 2
    assert fig.layout.barmode == "group"


def test_charts_fall_back_to_placeholder_on_empty_frames():
    fig = build_cost_chart(pd.DataFrame())
    assert fig.layout.annotations[0].text == "Sem dados de custos."
    fig = build_reliability_chart(pd.DataFrame())
    assert fig.layout.annotations[0].text == "Sem dados de confiabilidade."
