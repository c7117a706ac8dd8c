"""JSON-file-backed store for generated reports."""

from __future__ import annotations

import json
from pathlib import Path

from ordergen.lib.logging_config import get_logger
from ordergen.models.report import DailyReport

logger = get_logger("report_store")


class ReportStore:
    """Reports persisted as a JSON array in a single file.

    Attributes:
        path: Location of the reports JSON file.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def get_all(self) -> list[DailyReport]:
        """Read every stored report. A missing file holds no reports."""
        if not self.path.exists():
            return []
        with open(self.path) as f:
            data = json.load(f)
        return [DailyReport.from_dict(r) for r in data]

    def _write(self, reports: list[DailyReport]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps([r.to_dict() for r in reports], indent=2))

    def save(self, report: DailyReport) -> DailyReport:
        reports = self.get_all()
        reports.append(report)
        self._write(reports)
        logger.info("Saved report %s (%s) to %s", report.id, report.date, self.path)
        return report

    def delete(self, report_id: str) -> bool:
        reports = self.get_all()
        remaining = [r for r in reports if r.id != report_id]
        if len(remaining) == len(reports):
            return False
        self._write(remaining)
        return True
