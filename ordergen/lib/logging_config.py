"""Logging configuration for the order report generator."""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime

ROOT_LOGGER_NAME = "ordergen"


@dataclass
class GenerationMetadata:
    """Metadata about a generation run, printed as JSON to stdout by the CLI.

    Attributes:
        report_id: Identifier of the generated report.
        report_date: Day the orders belong to (YYYY-MM-DD).
        target_amount: Requested total.
        total_amount: Sum of the generated orders.
        orders_generated: Number of orders produced.
        order_groups: Number of distinct (amount, payment method) groups.
        status: Terminal state of the distribution run.
        seed: Random seed used for this run.
        format: Output file format (parquet or csv).
        output_path: Path to the written orders file.
        duration_seconds: Wall-clock time for generation in seconds.
    """

    report_id: str
    report_date: str
    target_amount: str
    total_amount: str
    orders_generated: int
    order_groups: int
    status: str
    seed: int
    format: str
    output_path: str
    duration_seconds: float
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    def to_json(self) -> str:
        """Serialize metadata to a JSON string."""
        return json.dumps(asdict(self), indent=2)


def setup_logging(*, level: int = logging.INFO) -> logging.Logger:
    """Configure and return the package logger.

    Sets up a stream handler writing to stderr so that stdout remains
    reserved for the JSON metadata output.

    Args:
        level: Logging level. Defaults to INFO.

    Returns:
        Configured ``ordergen`` logger.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger under the ``ordergen`` namespace.

    Args:
        name: The module name for the child logger.

    Returns:
        A child logger that inherits the package configuration.
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
