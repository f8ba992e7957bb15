"""Domain types for posture state — closed enumerations and immutable records."""

from __future__ import annotations

import time
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Severity(StrEnum):
    """Alert severity."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Provider service labels, as shown on the dashboard.
_SERVICE_LABELS: dict[str, str] = {
    "compute-instance": "EC2",
    "managed-database": "RDS",
    "object-storage": "S3",
    "virtual-network": "VPC",
    "serverless-function": "Lambda",
    "container-service": "ECS",
    "identity-and-access": "IAM",
}


class ResourceType(StrEnum):
    """Cloud service category a resource, alert or task belongs to.

    Provider labels (``"EC2"``, ``"s3"``, ...) resolve to their category.
    """

    COMPUTE_INSTANCE = "compute-instance"
    MANAGED_DATABASE = "managed-database"
    OBJECT_STORAGE = "object-storage"
    VIRTUAL_NETWORK = "virtual-network"
    SERVERLESS_FUNCTION = "serverless-function"
    CONTAINER_SERVICE = "container-service"
    IDENTITY_AND_ACCESS = "identity-and-access"

    @classmethod
    def _missing_(cls, value: object) -> ResourceType | None:
        if not isinstance(value, str):
            return None
        needle = value.strip().lower()
        for member in cls:
            if needle in (member.value, _SERVICE_LABELS[member.value].lower()):
                return member
        return None

    @property
    def service_label(self) -> str:
        return _SERVICE_LABELS[self.value]


class ResourceStatus(StrEnum):
    """Health status of a tracked resource."""

    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"


class Region(StrEnum):
    """Supported regions."""

    US_EAST_1 = "us-east-1"
    US_WEST_2 = "us-west-2"
    EU_WEST_1 = "eu-west-1"
    AP_SOUTHEAST_1 = "ap-southeast-1"


class EmptyRatioPolicy(StrEnum):
    """How a ratio over an empty collection enters the security score."""

    EXCLUDE = "exclude"  # Drop the component from the mean
    NEUTRAL = "neutral"  # Count the component as 100%


# ── Records ─────────────────────────────────────────────────────


class Alert(BaseModel):
    """A security alert raised against a service in a region."""

    model_config = ConfigDict(frozen=True)

    id: int
    severity: Severity
    message: str
    timestamp: float = Field(default_factory=time.time)
    acknowledged: bool = False
    service: ResourceType
    region: Region


class Resource(BaseModel):
    """A tracked cloud resource with a mutable health status."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    type: ResourceType
    status: ResourceStatus
    region: Region
    details: dict[str, str] = Field(default_factory=dict)


class ComplianceTask(BaseModel):
    """An action required by a compliance framework."""

    model_config = ConfigDict(frozen=True)

    id: int
    standard: str
    task: str
    completed: bool = False
    due_date: str = ""
    aws_service: ResourceType


class PostureMetrics(BaseModel):
    """The four posture indicators derived from current state."""

    model_config = ConfigDict(frozen=True)

    security_score: int
    active_threats: int
    compliance: int
    vulnerabilities: int


# ── Store events ────────────────────────────────────────────────


class StoreEventType(StrEnum):
    """Mutations applied by the posture store."""

    ALERT_ADDED = "ALERT_ADDED"
    ALERT_ACKNOWLEDGED = "ALERT_ACKNOWLEDGED"
    RESOURCE_ADDED = "RESOURCE_ADDED"
    RESOURCE_STATUS_UPDATED = "RESOURCE_STATUS_UPDATED"
    COMPLIANCE_TASK_ADDED = "COMPLIANCE_TASK_ADDED"
    COMPLIANCE_TOGGLED = "COMPLIANCE_TOGGLED"


class StoreEvent(BaseModel):
    """Emitted after a mutation has been applied to one collection."""

    event_type: StoreEventType
    collection: str
    record_id: int
    timestamp: float = Field(default_factory=time.time)
