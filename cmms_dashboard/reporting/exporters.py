"""Export helpers: work-order PDF, work-order spreadsheet and the KPI report."""

from __future__ import annotations

import io
import logging
import math
from datetime import date
from html import escape
from pathlib import Path
from typing import Iterable, Mapping, Sequence

import pandas as pd

from ..analytics.dashboard import DashboardSnapshot
from ..analytics.summaries import summary_to_frame

try:  # Optional dependency for PDF output
    from reportlab.lib import colors
    from reportlab.lib.pagesizes import A4
    from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
    from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

    _REPORTLAB_AVAILABLE = True
except ImportError:  # pragma: no cover - optional dependency
    _REPORTLAB_AVAILABLE = False

logger = logging.getLogger(__name__)

STATUS_LABELS = {
    "programada": "Programada",
    "em_andamento": "Em Andamento",
    "finalizada": "Finalizada",
    "cancelada": "Cancelada",
}
_STATUS_COLORS = {
    "finalizada": "#27ae60",
    "em_andamento": "#2980b9",
    "cancelada": "#c0392b",
}

WORK_ORDER_SHEET = "Ordens de Serviço"
WORK_ORDER_SHEET_COLUMNS = [
    "Código",
    "Tipo",
    "Status",
    "Prioridade",
    "Equipamento",
    "Código Equipamento",
    "Data Programada",
    "Data Início",
    "Data Conclusão",
    "Máquina Parada",
    "Descrição",
    "Manutentores",
    "Peças Utilizadas",
]
_COLUMN_WIDTH = 20

_HEADER_BLUE = "#143c64"
_TABLE_HEAD = "#323232"
_ALT_ROW = "#f5f5f5"
_FOOTER_TEXT = "Sistema de Manutenção Industrial"


def status_label(status: object) -> str:
    return STATUS_LABELS.get(_text(status), _text(status))


def _present(value: object) -> bool:
    if value is None or value is pd.NA or value == "":
        return False
    return not (isinstance(value, float) and math.isnan(value))


def _text(value: object) -> str:
    return str(value) if _present(value) else ""


def _as_list(value: object) -> list:
    return list(value) if isinstance(value, (list, tuple)) else []


def _capitalize_first(text: object) -> str:
    if not isinstance(text, str) or not text:
        return ""
    return text[0].upper() + text[1:]


def _format_date(value: object, fallback: str = "") -> str:
    """``dd/mm/yyyy`` in the pt-BR convention; missing or unparseable values give ``fallback``."""
    if not _present(value):
        return fallback
    stamp = pd.to_datetime(value, errors="coerce", utc=True)
    if pd.isna(stamp):
        return fallback
    return stamp.strftime("%d/%m/%Y")


def _equipment_field(order: Mapping[str, object], field: str) -> str:
    nested = order.get("equipments")
    if isinstance(nested, Mapping) and nested.get(field):
        return str(nested[field])
    flat = order.get(f"equipment_{field}")
    return str(flat) if _present(flat) else "N/A"


def work_order_pdf_filename(code: object) -> str:
    return f"OS_{code}.pdf"


def work_orders_excel_filename(today: date | None = None) -> str:
    today = today or pd.Timestamp.now(tz="UTC").date()
    return f"ordens_servico_{today.isoformat()}.xlsx"


def build_work_order_pdf(
    work_order: Mapping[str, object],
    maintainers: Sequence[Mapping[str, object]] | None = None,
    parts: Sequence[Mapping[str, object]] | None = None,
) -> bytes:
    """
    Render a single work order as a printable A4 document.

    ``maintainers`` (``name``/``role``) and ``parts`` (``code``/``name``/``quantity_used``)
    default to the lists embedded in ``work_order`` when not given. Empty lists
    omit their section.
    """
    if not _REPORTLAB_AVAILABLE:  # pragma: no cover - optional dependency
        raise ImportError("ReportLab is required for PDF export. Install it via `pip install reportlab`.")

    maintainers = list(maintainers) if maintainers is not None else _as_list(work_order.get("maintainers"))
    parts = list(parts) if parts is not None else _as_list(work_order.get("parts"))
    status = work_order.get("status")

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=36,
        rightMargin=36,
        topMargin=36,
        bottomMargin=48,
        title=f"Ordem de Serviço {work_order.get('code', '')}",
    )
    styles = getSampleStyleSheet()
    banner_style = ParagraphStyle(
        "Banner",
        parent=styles["Title"],
        textColor=colors.white,
        fontName="Helvetica-Bold",
        fontSize=16,
        leading=20,
    )

    banner = Table([[Paragraph("Ordem de Serviço", banner_style)]], colWidths=[doc.width])
    banner.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, -1), colors.HexColor(_HEADER_BLUE)),
                ("TOPPADDING", (0, 0), (-1, -1), 6),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
            ]
        )
    )
    story = [banner, Spacer(1, 12)]

    details = _table(
        pd.DataFrame(
            [
                [
                    _text(work_order.get("code")),
                    _text(work_order.get("type")),
                    status_label(status),
                    _capitalize_first(work_order.get("priority")),
                    _equipment_field(work_order, "name"),
                ]
            ],
            columns=["Código", "Tipo", "Status", "Prioridade", "Equipamento"],
        ),
        width=doc.width,
    )
    status_color = _STATUS_COLORS.get(str(status))
    if status_color:
        details.setStyle(TableStyle([("TEXTCOLOR", (2, 1), (2, 1), colors.HexColor(status_color))]))
    story.extend([details, Spacer(1, 8)])

    dates = pd.DataFrame(
        [
            [
                _format_date(work_order.get("scheduled_date")),
                _format_date(work_order.get("started_at"), "Não iniciada"),
                _format_date(work_order.get("completed_at"), "Não concluída"),
                "Sim" if work_order.get("machine_down") else "Não",
            ]
        ],
        columns=["Data Programada", "Início", "Conclusão", "Máquina Parada"],
    )
    story.extend([_table(dates, width=doc.width), Spacer(1, 8)])

    description = work_order.get("description")
    if _present(description):
        box = Table(
            [[Paragraph(escape(str(description)), styles["BodyText"])]],
            colWidths=[doc.width],
            minRowHeights=[56],
        )
        box.setStyle(
            TableStyle(
                [
                    ("BOX", (0, 0), (-1, -1), 0.5, colors.black),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ]
            )
        )
        story.extend([Paragraph("Descrição:", styles["Heading4"]), box, Spacer(1, 8)])

    if maintainers:
        rows = [[str(m.get("name", "")), str(m.get("role") or "N/A")] for m in maintainers]
        story.extend([_table(pd.DataFrame(rows, columns=["Nome", "Função"]), width=doc.width), Spacer(1, 8)])

    if parts:
        rows = [[str(p.get("code", "")), str(p.get("name", "")), str(p.get("quantity_used", ""))] for p in parts]
        story.extend(
            [_table(pd.DataFrame(rows, columns=["Código", "Nome", "Quantidade"]), width=doc.width), Spacer(1, 8)]
        )

    signature = Table([["Assinatura do Responsável"]], colWidths=[doc.width * 0.6], hAlign="CENTER")
    signature.setStyle(
        TableStyle(
            [
                ("LINEABOVE", (0, 0), (-1, 0), 0.3, colors.HexColor("#787878")),
                ("ALIGN", (0, 0), (-1, -1), "CENTER"),
                ("TEXTCOLOR", (0, 0), (-1, -1), colors.HexColor("#505050")),
                ("FONTSIZE", (0, 0), (-1, -1), 10),
            ]
        )
    )
    story.extend([Spacer(1, 40), signature])

    doc.build(story, onFirstPage=_draw_footer, onLaterPages=_draw_footer)
    buffer.seek(0)
    logger.debug("Rendered %s", work_order_pdf_filename(work_order.get("code")))
    return buffer.getvalue()


def _draw_footer(canvas, doc) -> None:
    canvas.saveState()
    canvas.setFont("Helvetica", 8)
    canvas.setFillColor(colors.HexColor("#787878"))
    canvas.drawCentredString(doc.pagesize[0] / 2, 24, _FOOTER_TEXT)
    canvas.restoreState()


def build_work_orders_sheet(work_orders: Iterable[Mapping[str, object]]) -> pd.DataFrame:
    """Flatten work orders (with their maintainers and parts) into one row each."""
    rows = []
    for order in work_orders:
        maintainers = _as_list(order.get("maintainers"))
        parts = _as_list(order.get("parts"))
        rows.append(
            {
                "Código": order.get("code"),
                "Tipo": _capitalize_first(order.get("type")),
                "Status": status_label(order.get("status")),
                "Prioridade": _capitalize_first(order.get("priority")),
                "Equipamento": _equipment_field(order, "name"),
                "Código Equipamento": _equipment_field(order, "code"),
                "Data Programada": _format_date(order.get("scheduled_date")),
                "Data Início": _format_date(order.get("started_at"), "Não iniciada"),
                "Data Conclusão": _format_date(order.get("completed_at"), "Não concluída"),
                "Máquina Parada": "Sim" if order.get("machine_down") else "Não",
                "Descrição": order["description"] if _present(order.get("description")) else "N/A",
                "Manutentores": ", ".join(str(m.get("name")) for m in maintainers) or "N/A",
                "Peças Utilizadas": ", ".join(f"{p.get('name')} ({p.get('quantity_used')})" for p in parts) or "N/A",
            }
        )
    return pd.DataFrame(rows, columns=WORK_ORDER_SHEET_COLUMNS)


def export_work_orders_excel(
    work_orders: Iterable[Mapping[str, object]],
    *,
    path: str | Path | None = None,
) -> bytes | Path:
    """
    Build the flat work-order spreadsheet.

    If ``path`` is provided, the workbook is written to disk and the path is returned.
    Otherwise the bytes object is returned for download workflows.
    """
    sheet = build_work_orders_sheet(work_orders)
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="xlsxwriter") as writer:  # type: ignore[arg-type]
        sheet.to_excel(writer, sheet_name=WORK_ORDER_SHEET, index=False)
        writer.sheets[WORK_ORDER_SHEET].set_column(0, len(sheet.columns) - 1, _COLUMN_WIDTH)
    return _deliver(buffer, path)


def export_dashboard_excel(snapshot: DashboardSnapshot, *, path: str | Path | None = None) -> bytes | Path:
    """Workbook with the headline metrics, both monthly series and the alerts."""
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="xlsxwriter") as writer:  # type: ignore[arg-type]
        summary_to_frame(snapshot.summary).to_excel(writer, sheet_name="Resumo", index=False)
        _reliability_table(snapshot.reliability).to_excel(writer, sheet_name="Confiabilidade", index=False)
        _cost_table(snapshot.costs).to_excel(writer, sheet_name="Custos", index=False)

        alerts = _alerts_table(snapshot)
        if not alerts.empty:
            alerts.to_excel(writer, sheet_name="Alertas", index=False)

        if snapshot.recent_work_orders:
            pd.DataFrame(snapshot.recent_work_orders).to_excel(writer, sheet_name="OS Recentes", index=False)
    return _deliver(buffer, path)


def build_dashboard_pdf(snapshot: DashboardSnapshot) -> bytes:
    """Create a lightweight PDF report summarising the dashboard KPIs."""
    if not _REPORTLAB_AVAILABLE:  # pragma: no cover - optional dependency
        raise ImportError("ReportLab is required for PDF export. Install it via `pip install reportlab`.")

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=36,
        rightMargin=36,
        topMargin=42,
        bottomMargin=48,
    )
    styles = getSampleStyleSheet()
    story = [Paragraph("Indicadores de Manutenção", styles["Title"]), Spacer(1, 12)]

    story.extend(
        [
            Paragraph("Resumo", styles["Heading2"]),
            _table(summary_to_frame(snapshot.summary)),
            Spacer(1, 12),
            Paragraph("MTBF & MTTR", styles["Heading2"]),
            _table(_reliability_table(snapshot.reliability)),
            Spacer(1, 12),
            Paragraph("Custos de Manutenção", styles["Heading2"]),
            _table(_cost_table(snapshot.costs)),
            Spacer(1, 12),
        ]
    )

    alerts = _alerts_table(snapshot)
    if not alerts.empty:
        story.extend([Paragraph("Alertas", styles["Heading2"]), _table(alerts), Spacer(1, 12)])

    doc.build(story, onFirstPage=_draw_footer, onLaterPages=_draw_footer)
    buffer.seek(0)
    return buffer.getvalue()


def _reliability_table(series: pd.DataFrame) -> pd.DataFrame:
    return series.rename(
        columns={"month": "Mês", "reliability_hours": "MTBF (horas)", "mean_repair_hours": "MTTR (horas)"}
    )


def _cost_table(series: pd.DataFrame) -> pd.DataFrame:
    return series.rename(
        columns={"month": "Mês", "preventive_cost": "Preventiva (R$)", "corrective_cost": "Corretiva (R$)"}
    )


def _alerts_table(snapshot: DashboardSnapshot) -> pd.DataFrame:
    rows = [[alert.type, alert.title, alert.description] for alert in snapshot.alerts]
    return pd.DataFrame(rows, columns=["Tipo", "Título", "Descrição"])


def _deliver(buffer: io.BytesIO, path: str | Path | None) -> bytes | Path:
    buffer.seek(0)
    if path is None:
        return buffer.getvalue()

    target = Path(path)
    target.write_bytes(buffer.read())
    logger.info("Wrote %s", target)
    return target


def _table(df: pd.DataFrame, *, width: float | None = None) -> Table:
    values = [df.columns.tolist()] + df.astype(str).values.tolist()
    col_widths = [width / len(df.columns)] * len(df.columns) if width and len(df.columns) else None
    tbl = Table(values, colWidths=col_widths, hAlign="LEFT")
    tbl.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor(_TABLE_HEAD)),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 10),
                ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor(_ALT_ROW)]),
                ("ALIGN", (0, 0), (-1, -1), "LEFT"),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
                ("BOTTOMPADDING", (0, 0), (-1, 0), 6),
            ]
        )
    )
    return tbl
