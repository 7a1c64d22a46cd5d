"""End-to-end report: download, clean, summarize, fit and chart."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from . import config
from .aggregate import SummaryTable, aggregate_frame
from .charts import render_report_charts
from .ingest import run_download
from .regression import InsufficientDataError, RegressionResult, fit_summary_regression
from .transform import build_clean_dataset, load_clean_incidents

logger = logging.getLogger(__name__)


@dataclass
class ReportResult:
    summary: SummaryTable
    regression: RegressionResult
    chart_paths: Dict[str, Path] = field(default_factory=dict)


def run_report(
    *,
    raw_path: Path | str | None = None,
    clean_path: Path | str | None = None,
    chart_dir: Path | str | None = None,
    target: str = config.DEFAULT_TARGET_VALUE,
    download: bool = False,
    app_token: Optional[str] = None,
) -> ReportResult:
    if download:
        run_download(output_path=raw_path, app_token=app_token)

    cleaning = build_clean_dataset(raw_path, output_path=clean_path)
    if cleaning.records_output == 0:
        raise InsufficientDataError("No incidents available to build a report")
    incidents = load_clean_incidents(cleaning.output_path)

    table = aggregate_frame(incidents, target=target)
    logger.info("Summary table has %s categories covering %s incidents", len(table), table.total_records())

    try:
        result = fit_summary_regression(table)
    except InsufficientDataError:
        logger.error("Cannot fit regression on %s categories", len(table))
        raise

    logger.info(
        "Fitted matched ~ total: intercept=%.3f slope=%.4f r^2=%.3f p=%.3g",
        result.intercept,
        result.slope,
        result.r_squared,
        result.p_value,
    )
    chart_paths = render_report_charts(incidents, table, result, output_dir=chart_dir, target=target)
    return ReportResult(summary=table, regression=result, chart_paths=chart_paths)


__all__ = ["ReportResult", "run_report"]
