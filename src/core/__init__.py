"""Core module — config, types, logging."""

from src.core.config import Settings, get_settings, load_settings, reset_settings
from src.core.logging import setup_logging
from src.core.types import (
    Alert,
    ComplianceTask,
    EmptyRatioPolicy,
    PostureMetrics,
    Region,
    Resource,
    ResourceStatus,
    ResourceType,
    Severity,
    StoreEvent,
    StoreEventType,
)

__all__ = [
    "Alert",
    "ComplianceTask",
    "EmptyRatioPolicy",
    "PostureMetrics",
    "Region",
    "Resource",
    "ResourceStatus",
    "ResourceType",
    "Settings",
    "Severity",
    "StoreEvent",
    "StoreEventType",
    "get_settings",
    "load_settings",
    "reset_settings",
    "setup_logging",
]
