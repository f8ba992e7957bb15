#!/usr/bin/env python3
"""Apply operator actions to the posture store and print the indicators.

Usage::

    # Indicators for the seed state
    python scripts/posture_report.py

    # Acknowledge alert 1, flip task 2, mark resource 2 critical
    python scripts/posture_report.py --acknowledge 1 --toggle 2 --set-status 2 critical

    # Start empty, score empty collections as 100%
    python scripts/posture_report.py --no-seed --policy neutral
"""

from __future__ import annotations

import argparse
import json
import sys

import structlog

from src.core.config import load_settings
from src.core.logging import setup_logging
from src.core.types import EmptyRatioPolicy
from src.monitor.metrics import MetricsEngine
from src.posture.exceptions import PostureError
from src.posture.seed import create_seeded_store
from src.posture.store import PostureStore

logger = structlog.get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Security posture indicators")
    parser.add_argument("--config", default=None, help="Path to settings YAML")
    parser.add_argument("--log-level", default=None, help="Override log level")
    parser.add_argument(
        "--no-seed", action="store_true", help="Start from empty collections"
    )
    parser.add_argument(
        "--policy",
        choices=[p.value for p in EmptyRatioPolicy],
        default=None,
        help="Empty-collection policy for the security score",
    )
    parser.add_argument(
        "--acknowledge", type=int, action="append", default=[], metavar="ID",
        help="Acknowledge an alert (repeatable)",
    )
    parser.add_argument(
        "--toggle", type=int, action="append", default=[], metavar="ID",
        help="Toggle a compliance task (repeatable)",
    )
    parser.add_argument(
        "--set-status", nargs=2, action="append", default=[],
        metavar=("ID", "STATUS"),
        help="Set a resource status (repeatable)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = load_settings(args.config)
    setup_logging(level=args.log_level, config=settings.logging)

    posture_cfg = settings.posture
    if args.policy:
        posture_cfg = posture_cfg.model_copy(
            update={"empty_ratio_policy": EmptyRatioPolicy(args.policy)}
        )

    seeded = posture_cfg.load_seed and not args.no_seed
    store = create_seeded_store() if seeded else PostureStore()
    engine = MetricsEngine(posture_cfg)
    logger.info("posture_report_starting", seeded=seeded, policy=engine.policy)

    try:
        for alert_id in args.acknowledge:
            store.acknowledge_alert(alert_id)
        for task_id in args.toggle:
            store.toggle_compliance(task_id)
        for raw_id, status in args.set_status:
            store.update_resource_status(int(raw_id), status)
    except (PostureError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    metrics = engine.compute(store)
    print(json.dumps(metrics.model_dump(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
