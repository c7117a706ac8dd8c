"""Unit tests for report generation orchestration."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import numpy as np
import pytest

from ordergen.engine.errors import (
    InvalidDate,
    InvalidSettings,
    InvalidTarget,
    InvalidTemplate,
)
from ordergen.engine.progress import ProgressEvent
from ordergen.models.enums import PaymentPolicy
from ordergen.models.settings import AlgorithmSettings
from ordergen.services.generation_service import (
    GenerationParams,
    generate_daily_report,
    generate_multiple_daily_reports,
)
from ordergen.store.report_store import ReportStore
from ordergen.store.template_store import TemplateStore


def _params(**overrides: object) -> GenerationParams:
    values: dict = {
        "date": "2026-03-10",
        "target_amount": Decimal("123.45"),
        "payment_policy": PaymentPolicy.MIXED,
        "template_ids": ["weekday"],
    }
    values.update(overrides)
    return GenerationParams(**values)


class TestGenerateDailyReport:
    """Tests for the generate_daily_report function."""

    def test_report_totals(self, catalog_path: Path) -> None:
        report = generate_daily_report(
            _params(), TemplateStore(catalog_path), rng=np.random.default_rng(42),
        )
        assert report.total_amount == Decimal("123.45")
        assert report.cash_amount + report.card_amount == report.total_amount
        assert report.date == "2026-03-10"
        assert report.template_ids == ["weekday"]
        assert all(o.timestamp.date().isoformat() == "2026-03-10" for o in report.orders)

    def test_merged_templates(self, catalog_path: Path) -> None:
        report = generate_daily_report(
            _params(template_ids=["weekday", "weekend"]),
            TemplateStore(catalog_path),
            rng=np.random.default_rng(1),
        )
        assert report.total_amount == Decimal("123.45")

    def test_request_overrides_applied(self, catalog_path: Path) -> None:
        report = generate_daily_report(
            _params(target_amount=Decimal("12.50"), algorithm_settings={"variation_factor": 0}),
            TemplateStore(catalog_path),
            settings=AlgorithmSettings(variation_factor=0.9),
            rng=np.random.default_rng(1),
        )
        assert [(g.amount, g.count) for g in report.order_groups] == [(Decimal("12.50"), 1)]

    def test_unknown_template_raises(self, catalog_path: Path) -> None:
        with pytest.raises(InvalidTemplate):
            generate_daily_report(_params(template_ids=["nope"]), TemplateStore(catalog_path))

    def test_no_template_ids_raises(self, catalog_path: Path) -> None:
        with pytest.raises(InvalidTemplate):
            generate_daily_report(_params(template_ids=[]), TemplateStore(catalog_path))

    def test_malformed_date_raises(self, catalog_path: Path) -> None:
        with pytest.raises(InvalidDate):
            generate_daily_report(_params(date="bad-date"), TemplateStore(catalog_path))

    def test_unknown_override_raises(self, catalog_path: Path) -> None:
        with pytest.raises(InvalidSettings, match="bogus"):
            generate_daily_report(
                _params(algorithm_settings={"bogus": 1}), TemplateStore(catalog_path),
            )

    def test_non_numeric_target_raises(self, catalog_path: Path) -> None:
        with pytest.raises(InvalidTarget):
            generate_daily_report(_params(target_amount="abc"), TemplateStore(catalog_path))

    def test_saved_to_report_store(self, catalog_path: Path, tmp_path: Path) -> None:
        report_store = ReportStore(tmp_path / "reports.json")
        report = generate_daily_report(
            _params(), TemplateStore(catalog_path), report_store,
            rng=np.random.default_rng(3),
        )
        assert [r.id for r in report_store.get_all()] == [report.id]

    def test_progress_events(self, catalog_path: Path) -> None:
        events: list[ProgressEvent] = []
        generate_daily_report(
            _params(), TemplateStore(catalog_path),
            rng=np.random.default_rng(3), observer=events.append,
        )
        assert events[0].message.startswith("Initializing")
        assert events[-1] == ProgressEvent("Report successfully generated!", 100)


class TestGenerateMultipleDailyReports:
    """Tests for batch generation."""

    def test_failed_requests_skipped(self, catalog_path: Path) -> None:
        reports = generate_multiple_daily_reports(
            [
                _params(date="2026-03-10"),
                _params(date="2026-03-11", target_amount=Decimal(0)),
                _params(date="2026-03-12", template_ids=["missing"]),
                _params(date="2026-03-13"),
            ],
            TemplateStore(catalog_path),
            rng=np.random.default_rng(42),
        )
        assert [r.date for r in reports] == ["2026-03-10", "2026-03-13"]

    def test_malformed_requests_skipped(self, catalog_path: Path) -> None:
        reports = generate_multiple_daily_reports(
            [
                _params(date="2026-03-10"),
                _params(date="bad-date"),
                _params(date="2026-03-11", algorithm_settings={"bogus": 1}),
                _params(date="2026-03-12", payment_policy="cheque"),
                _params(date="2026-03-13"),
            ],
            TemplateStore(catalog_path),
            rng=np.random.default_rng(42),
        )
        assert [r.date for r in reports] == ["2026-03-10", "2026-03-13"]

    def test_progress_per_request(self, catalog_path: Path) -> None:
        events: list[ProgressEvent] = []
        generate_multiple_daily_reports(
            [_params(), _params()],
            TemplateStore(catalog_path),
            rng=np.random.default_rng(42),
            observer=events.append,
        )
        assert [e.progress for e in events] == [0, 50, 100, 100]
        assert events[-1].message == "Successfully generated 2 reports!"
