"""NYPD shooting incident report pipeline."""

from .aggregate import CategorySummary, IncidentRecord, SummaryTable, aggregate, aggregate_frame
from .cli import main as cli_main
from .ingest import DownloadStats, IncidentDownloader, run_download
from .regression import InsufficientDataError, RegressionResult, fit_summary_regression
from .report import ReportResult, run_report
from .transform import build_clean_dataset, clean_incidents

__all__ = [
    "cli_main",
    "CategorySummary",
    "IncidentRecord",
    "SummaryTable",
    "aggregate",
    "aggregate_frame",
    "IncidentDownloader",
    "DownloadStats",
    "run_download",
    "InsufficientDataError",
    "RegressionResult",
    "fit_summary_regression",
    "ReportResult",
    "run_report",
    "build_clean_dataset",
    "clean_incidents",
]
