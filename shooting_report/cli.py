"""Command line interface for the shooting incident report pipeline."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from . import config
from .aggregate import build_summary_table
from .charts import render_report_charts
from .ingest import run_download
from .regression import fit_summary_regression
from .report import run_report
from .transform import build_clean_dataset, load_clean_incidents

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="NYPD shooting incident report pipeline")
    parser.add_argument(
        "command",
        choices=["download", "clean", "summary", "regress", "charts", "report"],
        help="Pipeline stage to execute",
    )
    parser.add_argument("--raw", dest="raw_path", default=str(config.DEFAULT_RAW_CSV_PATH), help="Raw CSV path")
    parser.add_argument("--clean", dest="clean_path", default=str(config.DEFAULT_CLEAN_PATH), help="Cleaned parquet path")
    parser.add_argument("--output", dest="output_path", default=None, help="Output path for the summary table")
    parser.add_argument("--chart-dir", dest="chart_dir", default=str(config.DEFAULT_CHART_DIR), help="Directory for rendered charts")
    parser.add_argument("--target", dest="target", default=config.DEFAULT_TARGET_VALUE, help="Victim race counted as a match")
    parser.add_argument("--app-token", dest="app_token", default=None, help="NYC Open Data app token (optional)")
    parser.add_argument("--download", dest="download", action="store_true", help="Download the raw CSV before running the report")
    parser.add_argument("--verbose", dest="verbose", action="store_true", help="Enable verbose logging")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "download":
        run_download(output_path=args.raw_path, app_token=args.app_token)
        return 0

    if args.command == "clean":
        build_clean_dataset(args.raw_path, output_path=args.clean_path)
        return 0

    if args.command == "summary":
        build_summary_table(args.clean_path, output_path=args.output_path, target=args.target)
        return 0

    if args.command == "regress":
        table = build_summary_table(args.clean_path, output_path=args.output_path, target=args.target)
        result = fit_summary_regression(table)
        for key, value in result.as_dict().items():
            print(f"{key}: {value}")
        return 0

    if args.command == "charts":
        table = build_summary_table(args.clean_path, output_path=args.output_path, target=args.target)
        result = fit_summary_regression(table)
        render_report_charts(
            load_clean_incidents(args.clean_path),
            table,
            result,
            output_dir=args.chart_dir,
            target=args.target,
        )
        return 0

    if args.command == "report":
        report = run_report(
            raw_path=args.raw_path,
            clean_path=args.clean_path,
            chart_dir=args.chart_dir,
            target=args.target,
            download=args.download,
            app_token=args.app_token,
        )
        print(report.summary.to_frame().to_string(index=False))
        for name, path in report.chart_paths.items():
            logger.info("Chart %s: %s", name, path)
        return 0

    raise ValueError(f"Unsupported command: {args.command}")


if __name__ == "__main__":
    sys.exit(main())
