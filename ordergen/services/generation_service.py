"""Report generation orchestration.

Resolves templates, runs the distribution engine and assembles a
``DailyReport``. Progress messages are forwarded to an optional observer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any

import numpy as np
from numpy.random import Generator

from ordergen.engine.distribution import distribute_amount
from ordergen.engine.errors import DistributionError, InvalidDate, InvalidTemplate
from ordergen.engine.progress import ProgressObserver, notify
from ordergen.lib.logging_config import get_logger
from ordergen.lib.rounding import to_decimal
from ordergen.models.enums import PaymentPolicy
from ordergen.models.pattern import TemplatePattern
from ordergen.models.report import DailyReport, build_daily_report
from ordergen.models.settings import AlgorithmSettings
from ordergen.store.report_store import ReportStore
from ordergen.store.template_store import TemplateStore

logger = get_logger("generation_service")


@dataclass
class GenerationParams:
    """Parameters of one report generation request.

    Attributes:
        date: Report day (YYYY-MM-DD).
        target_amount: Total the orders must sum to.
        payment_policy: ``cash``, ``card`` or ``mixed``.
        template_ids: Templates to generate from; several are merged.
        algorithm_settings: Per-request overrides of the base settings.
    """

    date: str
    target_amount: Decimal
    payment_policy: PaymentPolicy
    template_ids: list[str] = field(default_factory=list)
    algorithm_settings: dict[str, Any] = field(default_factory=dict)


def generate_daily_report(
    params: GenerationParams,
    template_store: TemplateStore,
    report_store: ReportStore | None = None,
    *,
    settings: AlgorithmSettings | None = None,
    rng: Generator | None = None,
    observer: ProgressObserver | None = None,
) -> DailyReport:
    """Generate one daily report.

    Args:
        params: Generation request.
        template_store: Catalog the template ids are resolved against.
        report_store: When given, the report is saved there.
        settings: Base settings; request overrides are applied on top.
        rng: Random generator shared by every random decision.
        observer: Optional progress callback.

    Returns:
        The generated report.

    Raises:
        InvalidDate: If the report date is not YYYY-MM-DD.
        InvalidTemplate: If no template could be resolved.
        InvalidTarget: If the target amount is not positive.
        InvalidSettings: If the effective settings are out of range or an
            override names an unknown setting.
    """
    notify(observer, "Initializing generation process...", 0)

    try:
        report_date = date.fromisoformat(params.date)
    except (TypeError, ValueError) as exc:
        raise InvalidDate(f"Invalid report date {params.date!r}, expected YYYY-MM-DD") from exc

    effective = (settings or AlgorithmSettings()).with_overrides(**params.algorithm_settings)

    template = template_store.resolve(params.template_ids)
    if template is None:
        raise InvalidTemplate(
            f"No valid template found for ids {params.template_ids or '[]'}"
        )

    result = distribute_amount(
        params.target_amount,
        TemplatePattern.from_template(template),
        params.payment_policy,
        effective,
        report_date=report_date,
        rng=rng,
        observer=observer,
    )

    report = build_daily_report(
        report_date=params.date,
        target_amount=to_decimal(params.target_amount),
        result=result,
        template_ids=params.template_ids,
    )
    if result.is_exhausted:
        logger.warning(
            "Report %s total %s differs from target %s",
            params.date,
            report.total_amount,
            report.target_amount,
        )

    if report_store is not None:
        report_store.save(report)

    notify(observer, "Report successfully generated!", 100)
    return report


def generate_multiple_daily_reports(
    params_list: list[GenerationParams],
    template_store: TemplateStore,
    report_store: ReportStore | None = None,
    *,
    settings: AlgorithmSettings | None = None,
    rng: Generator | None = None,
    observer: ProgressObserver | None = None,
) -> list[DailyReport]:
    """Generate several reports, skipping requests that fail validation.

    A failed request (bad date, target, policy, template or settings) is
    logged and skipped; the remaining requests still run.

    Per-report progress is not forwarded; the observer receives one event
    per request instead.

    Returns:
        Reports for every request that succeeded, in request order.
    """
    rng = rng if rng is not None else np.random.default_rng()
    total = len(params_list)
    reports: list[DailyReport] = []

    notify(observer, f"Preparing to generate {total} reports...", 0)
    for index, params in enumerate(params_list, start=1):
        notify(
            observer,
            f"Generating report {index} of {total}...",
            round(index / total * 100),
        )
        try:
            reports.append(
                generate_daily_report(
                    params, template_store, report_store, settings=settings, rng=rng,
                )
            )
        except (DistributionError, ValueError) as exc:
            logger.error("Report generation failed for %s: %s", params.date, exc)

    notify(observer, f"Successfully generated {len(reports)} reports!", 100)
    return reports
