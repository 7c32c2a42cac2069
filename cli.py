"""Command-line entrypoint for generating dashboard KPI outputs."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import pandas as pd

from cmms_dashboard import compute_dashboard, load_equipments, load_parts, load_work_orders
from cmms_dashboard.reporting import build_dashboard_pdf, export_dashboard_excel

logger = logging.getLogger("cmms_dashboard.cli")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute maintenance KPIs from exported table snapshots.")
    parser.add_argument(
        "--work-orders",
        type=Path,
        required=True,
        help="Path to the work_orders export (.csv, .json or .xlsx).",
    )
    parser.add_argument("--parts", type=Path, default=None, help="Path to the parts export.")
    parser.add_argument("--equipments", type=Path, default=None, help="Path to the equipments export.")
    parser.add_argument(
        "--now",
        type=str,
        default=None,
        help="Evaluation instant (ISO 8601). Defaults to the current UTC time.",
    )
    parser.add_argument(
        "--excel",
        type=Path,
        default=Path("indicadores_manutencao.xlsx"),
        help="Destination path for the Excel KPI workbook.",
    )
    parser.add_argument(
        "--pdf",
        type=Path,
        default=Path("indicadores_manutencao.pdf"),
        help="Destination path for the PDF KPI report.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    work_orders = load_work_orders(args.work_orders)
    parts = load_parts(args.parts) if args.parts else None
    equipments = load_equipments(args.equipments) if args.equipments else None
    now = pd.Timestamp(args.now) if args.now else None

    snapshot = compute_dashboard(work_orders, parts, equipments, now=now)

    export_dashboard_excel(snapshot, path=args.excel)

    try:
        pdf_bytes = build_dashboard_pdf(snapshot)
    except ImportError as exc:
        logger.warning("PDF export skipped: %s", exc)
    else:
        args.pdf.write_bytes(pdf_bytes)

    for alert in snapshot.alerts:
        print(f"[{alert.type.upper()}] {alert.title}: {alert.description}")

    print(f"KPIs generated:\n - Excel: {args.excel}\n - PDF: {args.pdf if args.pdf.exists() else 'skipped'}")


if __name__ == "__main__":
    main()
