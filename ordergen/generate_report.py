# /// script
# requires-python = ">=3.11"
# dependencies = [
#     "numpy",
#     "polars",
#     "pyyaml",
#     "jsonschema",
# ]
# ///
"""Daily Order Report Generator.

Synthesizes a plausible day of individual orders that sum to a target
total, following the amount/frequency pattern of one or more templates.
Writes the orders as Parquet (default) or CSV and prints run metadata
as JSON to stdout.

Usage:
    uv run ordergen/generate_report.py --target AMOUNT --template-id ID [OPTIONS]

Examples:
    uv run ordergen/generate_report.py --target 1250 --template-id cafe-weekday
    uv run ordergen/generate_report.py --target 980.40 --template-id cafe-weekday \\
        --template-id cafe-saturday --payment mixed --seed 42 --format csv
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from datetime import datetime
from pathlib import Path

# Ensure project root is in sys.path for uv run script invocation
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import jsonschema  # noqa: E402
import numpy as np  # noqa: E402
import polars as pl  # noqa: E402

from ordergen.engine.errors import DistributionError  # noqa: E402
from ordergen.engine.progress import ProgressEvent  # noqa: E402
from ordergen.lib.config_loader import DEFAULT_CONFIG_PATH, load_settings  # noqa: E402
from ordergen.lib.logging_config import GenerationMetadata, setup_logging  # noqa: E402
from ordergen.lib.validators import validate_params  # noqa: E402
from ordergen.models.order import orders_to_dataframe  # noqa: E402
from ordergen.models.report import DailyReport  # noqa: E402
from ordergen.models.settings import AlgorithmSettings  # noqa: E402
from ordergen.services.generation_service import (  # noqa: E402
    GenerationParams,
    generate_daily_report,
)
from ordergen.store.report_store import ReportStore  # noqa: E402
from ordergen.store.template_store import TemplateStore  # noqa: E402

DEFAULT_OUTPUT_DIR = "data/orders"
DEFAULT_TEMPLATES_PATH = "data/templates/sample_templates.json"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments for report generation.

    Args:
        argv: Command-line arguments. Defaults to sys.argv[1:].

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Generate a synthetic daily order report.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  uv run ordergen/generate_report.py --target 1250 --template-id cafe-weekday\n"
            "  uv run ordergen/generate_report.py --target 980.40 --payment card --seed 42\n"
        ),
    )
    parser.add_argument(
        "--target",
        type=str,
        required=True,
        help="Total amount the generated orders must sum to",
    )
    parser.add_argument(
        "--date",
        type=str,
        default=None,
        help="Report date in YYYY-MM-DD format (default: today)",
    )
    parser.add_argument(
        "--payment",
        type=str,
        default="mixed",
        help="Payment policy: cash, card or mixed (default: mixed)",
    )
    parser.add_argument(
        "--template-id",
        dest="template_ids",
        action="append",
        default=[],
        help="Template to generate from; repeat to merge several templates",
    )
    parser.add_argument(
        "--templates",
        type=str,
        default=DEFAULT_TEMPLATES_PATH,
        help=f"Template catalog JSON file (default: {DEFAULT_TEMPLATES_PATH})",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help=f"Algorithm settings YAML file (default: {DEFAULT_CONFIG_PATH} if present)",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["parquet", "csv"],
        default="parquet",
        help="Output format: parquet or csv (default: parquet)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible generation (default: random)",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--save-report",
        type=str,
        default=None,
        help="Append the full report to this JSON file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log progress and debug details",
    )
    return parser.parse_args(argv)


def _resolve_settings(config: str | None) -> AlgorithmSettings:
    """Load settings from an explicit file, the default file, or defaults."""
    if config is not None:
        return load_settings(Path(config))
    if DEFAULT_CONFIG_PATH.exists():
        return load_settings(DEFAULT_CONFIG_PATH)
    return AlgorithmSettings()


def write_orders(report: DailyReport, fmt: str, output_dir: Path) -> Path:
    """Write a report's orders to file in the specified format.

    Args:
        report: Generated report.
        fmt: Output format ('parquet' or 'csv').
        output_dir: Directory to write the file.

    Returns:
        Path to the written file.
    """
    # Auto-create output directory if missing
    output_dir.mkdir(parents=True, exist_ok=True)

    timestamp_str = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = f"orders_{report.date}_{timestamp_str}.{fmt}"
    output_path = output_dir / filename

    df: pl.DataFrame = orders_to_dataframe(report.orders)
    if fmt == "parquet":
        df.write_parquet(output_path)
    else:
        df.write_csv(output_path)

    return output_path


def main(argv: list[str] | None = None) -> int:
    """Main entry point for report generation.

    Args:
        argv: Command-line arguments. Defaults to sys.argv[1:].

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    args = parse_args(argv)
    logger = setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    result = validate_params(
        report_date=args.date,
        target_amount=args.target,
        payment_policy=args.payment,
        template_ids=args.template_ids,
        output_format=args.format,
        seed=args.seed,
    )

    if isinstance(result, list):
        for error in result:
            logger.error("Validation error [%s]: %s", error.field, error.message)
        return 1

    params = result

    def log_progress(event: ProgressEvent) -> None:
        logger.debug("[%3d%%] %s", event.progress, event.message)

    start_time = time.monotonic()
    try:
        settings = _resolve_settings(args.config)
        template_store = TemplateStore(args.templates)
        report_store = ReportStore(args.save_report) if args.save_report else None
        report = generate_daily_report(
            GenerationParams(
                date=params.report_date.isoformat(),
                target_amount=params.target_amount,
                payment_policy=params.payment_policy,
                template_ids=params.template_ids,
            ),
            template_store,
            report_store,
            settings=settings,
            rng=np.random.default_rng(params.seed),
            observer=log_progress,
        )
        output_path = write_orders(report, params.format, Path(args.output_dir))
    except (jsonschema.ValidationError, json.JSONDecodeError) as exc:
        logger.error("Invalid template catalog %s: %s", args.templates, exc)
        return 1
    except (DistributionError, FileNotFoundError, ValueError) as exc:
        logger.error("Generation failed: %s", exc)
        return 1

    duration = time.monotonic() - start_time

    metadata = GenerationMetadata(
        report_id=report.id,
        report_date=report.date,
        target_amount=str(report.target_amount),
        total_amount=str(report.total_amount),
        orders_generated=len(report.orders),
        order_groups=len(report.order_groups),
        status=report.status.value,
        seed=params.seed,
        format=params.format,
        output_path=str(output_path),
        duration_seconds=round(duration, 2),
    )
    print(metadata.to_json())

    return 0


if __name__ == "__main__":
    sys.exit(main())
