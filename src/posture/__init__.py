"""Posture state — the store that owns alerts, resources and compliance tasks."""

from src.posture.exceptions import DomainValueError, MissingFieldError, PostureError
from src.posture.seed import (
    create_seeded_store,
    seed_alerts,
    seed_compliance_tasks,
    seed_resources,
)
from src.posture.store import PostureStore, StoreEventCallback

__all__ = [
    "DomainValueError",
    "MissingFieldError",
    "PostureError",
    "PostureStore",
    "StoreEventCallback",
    "create_seeded_store",
    "seed_alerts",
    "seed_compliance_tasks",
    "seed_resources",
]
