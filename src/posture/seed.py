"""Seed state loaded at startup — three alerts, five resources, four tasks."""

from __future__ import annotations

import time

from src.core.types import (
    Alert,
    ComplianceTask,
    Region,
    Resource,
    ResourceStatus,
    ResourceType,
    Severity,
)
from src.posture.store import PostureStore


def seed_alerts(now: float | None = None) -> list[Alert]:
    ts = now if now is not None else time.time()
    return [
        Alert(
            id=1,
            severity=Severity.HIGH,
            message="Unauthorized IAM policy modification detected",
            timestamp=ts,
            service=ResourceType.IDENTITY_AND_ACCESS,
            region=Region.US_EAST_1,
        ),
        Alert(
            id=2,
            severity=Severity.MEDIUM,
            message="Unusual EC2 API calls from unrecognized IP",
            timestamp=ts,
            service=ResourceType.COMPUTE_INSTANCE,
            region=Region.US_WEST_2,
        ),
        Alert(
            id=3,
            severity=Severity.HIGH,
            message="S3 bucket public access detected",
            timestamp=ts,
            service=ResourceType.OBJECT_STORAGE,
            region=Region.US_EAST_1,
        ),
    ]


def seed_resources() -> list[Resource]:
    return [
        Resource(
            id=1,
            name="prod-web-server",
            type=ResourceType.COMPUTE_INSTANCE,
            status=ResourceStatus.HEALTHY,
            region=Region.US_EAST_1,
            details={"instance_type": "t3.large"},
        ),
        Resource(
            id=2,
            name="customer-data",
            type=ResourceType.OBJECT_STORAGE,
            status=ResourceStatus.WARNING,
            region=Region.US_EAST_1,
            details={"size": "2.3 TB", "last_accessed": "2024-03-20"},
        ),
        Resource(
            id=3,
            name="prod-vpc",
            type=ResourceType.VIRTUAL_NETWORK,
            status=ResourceStatus.HEALTHY,
            region=Region.US_EAST_1,
        ),
        Resource(
            id=4,
            name="prod-database",
            type=ResourceType.MANAGED_DATABASE,
            status=ResourceStatus.HEALTHY,
            region=Region.US_EAST_1,
            details={"instance_type": "db.r5.xlarge"},
        ),
        Resource(
            id=5,
            name="auth-service",
            type=ResourceType.SERVERLESS_FUNCTION,
            status=ResourceStatus.HEALTHY,
            region=Region.US_EAST_1,
        ),
    ]


def seed_compliance_tasks() -> list[ComplianceTask]:
    return [
        ComplianceTask(
            id=1,
            standard="AWS CIS",
            task="Enable MFA for all IAM users",
            completed=True,
            due_date="2024-03-30",
            aws_service=ResourceType.IDENTITY_AND_ACCESS,
        ),
        ComplianceTask(
            id=2,
            standard="HIPAA",
            task="Encrypt RDS instances",
            completed=False,
            due_date="2024-03-25",
            aws_service=ResourceType.MANAGED_DATABASE,
        ),
        ComplianceTask(
            id=3,
            standard="SOC 2",
            task="Enable CloudTrail in all regions",
            completed=True,
            due_date="2024-03-28",
            aws_service=ResourceType.COMPUTE_INSTANCE,
        ),
        ComplianceTask(
            id=4,
            standard="PCI DSS",
            task="Review S3 bucket policies",
            completed=False,
            due_date="2024-03-29",
            aws_service=ResourceType.OBJECT_STORAGE,
        ),
    ]


def create_seeded_store() -> PostureStore:
    """Return a fresh store populated with the startup seed data."""
    return PostureStore(
        alerts=seed_alerts(),
        resources=seed_resources(),
        compliance_tasks=seed_compliance_tasks(),
    )
