"""MetricsEngine — posture indicators derived from store state.

Nothing is cached: every call recomputes from the collections it is given.

- Security score: mean of healthy-resource %, completed-task % and
  acknowledged-alert %, rounded once
- Active threats: unacknowledged alerts
- Compliance: completed-task %
- Vulnerabilities: resources whose status is not healthy
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

import structlog

from src.core.config import PostureConfig, get_settings
from src.core.types import (
    Alert,
    ComplianceTask,
    EmptyRatioPolicy,
    PostureMetrics,
    Resource,
    ResourceStatus,
)
from src.posture.store import PostureStore

logger = structlog.stdlib.get_logger()

_HUNDRED = Decimal(100)


def percentage(part: int, total: int) -> Decimal | None:
    """Return ``part / total * 100``, or None when *total* is zero."""
    if total == 0:
        return None
    return Decimal(part) * _HUNDRED / Decimal(total)


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer with halves going up (62.5 -> 63)."""
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def security_score(
    components: Sequence[Decimal | None],
    policy: EmptyRatioPolicy = EmptyRatioPolicy.EXCLUDE,
) -> int:
    """Average percentage components, resolving empty ones by *policy*.

    With EXCLUDE, empty components are dropped; if none remain the score
    is 100. With NEUTRAL, empty components count as 100%.
    """
    if policy == EmptyRatioPolicy.NEUTRAL:
        values = [_HUNDRED if c is None else c for c in components]
    else:
        values = [c for c in components if c is not None]
    if not values:
        return 100
    return round_half_up(sum(values, Decimal(0)) / len(values))


def compute_metrics(
    alerts: Sequence[Alert],
    resources: Sequence[Resource],
    compliance_tasks: Sequence[ComplianceTask],
    policy: EmptyRatioPolicy = EmptyRatioPolicy.EXCLUDE,
) -> PostureMetrics:
    """Derive the four posture indicators from the given collections."""
    healthy = sum(1 for r in resources if r.status == ResourceStatus.HEALTHY)
    completed = sum(1 for t in compliance_tasks if t.completed)
    acknowledged = sum(1 for a in alerts if a.acknowledged)

    health_pct = percentage(healthy, len(resources))
    compliance_pct = percentage(completed, len(compliance_tasks))
    ack_pct = percentage(acknowledged, len(alerts))

    return PostureMetrics(
        security_score=security_score(
            [health_pct, compliance_pct, ack_pct], policy
        ),
        active_threats=len(alerts) - acknowledged,
        # No tasks means nothing is outstanding.
        compliance=100 if compliance_pct is None else round_half_up(compliance_pct),
        vulnerabilities=len(resources) - healthy,
    )


class MetricsEngine:
    """Reads a PostureStore and computes its indicators on demand.

    Usage::

        engine = MetricsEngine(settings.posture)
        metrics = engine.compute(store)
    """

    def __init__(self, config: PostureConfig | None = None) -> None:
        cfg = config or get_settings().posture
        self._policy = cfg.empty_ratio_policy

    @property
    def policy(self) -> EmptyRatioPolicy:
        return self._policy

    def compute(self, store: PostureStore) -> PostureMetrics:
        metrics = compute_metrics(
            store.alerts,
            store.resources,
            store.compliance_tasks,
            self._policy,
        )
        logger.debug("posture_metrics_computed", **metrics.model_dump())
        return metrics
