"""PostureStore — in-memory alerts, resources and compliance tasks.

The store is the only writer to its three collections. Each collection is an
ordered ``id -> record`` mapping; records are frozen, so every update swaps in
a new record under the same key and insertion order is kept.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Mapping
from enum import StrEnum
from typing import TypeVar

import structlog

from src.core.types import (
    Alert,
    ComplianceTask,
    Region,
    Resource,
    ResourceStatus,
    ResourceType,
    Severity,
    StoreEvent,
    StoreEventType,
)
from src.posture.exceptions import DomainValueError, MissingFieldError, PostureError

logger = structlog.stdlib.get_logger()

StoreEventCallback = Callable[[StoreEvent], None]

ALERTS = "alerts"
RESOURCES = "resources"
COMPLIANCE_TASKS = "compliance_tasks"

_E = TypeVar("_E", bound=StrEnum)
_R = TypeVar("_R", Alert, Resource, ComplianceTask)


def _coerce(enum_cls: type[_E], value: object, field: str) -> _E:
    """Resolve *value* to a member of *enum_cls* or raise DomainValueError."""
    try:
        return enum_cls(value)
    except ValueError:
        raise DomainValueError(field, value, [m.value for m in enum_cls]) from None


def _require_text(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise MissingFieldError(field)
    return value.strip()


def _index(records: Iterable[_R], kind: str) -> dict[int, _R]:
    indexed: dict[int, _R] = {}
    for record in records:
        if record.id in indexed:
            raise PostureError(f"duplicate {kind} id {record.id}")
        indexed[record.id] = record
    return indexed


class PostureStore:
    """Owns the alert, resource and compliance task collections.

    Usage::

        store = PostureStore()
        store.on_change(my_callback)

        alert = store.add_alert("Root login from new IP", severity="high")
        store.acknowledge_alert(alert.id)
    """

    def __init__(
        self,
        alerts: Iterable[Alert] = (),
        resources: Iterable[Resource] = (),
        compliance_tasks: Iterable[ComplianceTask] = (),
    ) -> None:
        self._alerts: dict[int, Alert] = _index(alerts, "alert")
        self._resources: dict[int, Resource] = _index(resources, "resource")
        self._tasks: dict[int, ComplianceTask] = _index(compliance_tasks, "compliance task")
        self._last_ids: dict[str, int] = {
            ALERTS: max(self._alerts, default=0),
            RESOURCES: max(self._resources, default=0),
            COMPLIANCE_TASKS: max(self._tasks, default=0),
        }
        self._callbacks: list[StoreEventCallback] = []

    # ── Read access ─────────────────────────────────────────────

    @property
    def alerts(self) -> list[Alert]:
        """All alerts in insertion order."""
        return list(self._alerts.values())

    @property
    def resources(self) -> list[Resource]:
        """All resources in insertion order."""
        return list(self._resources.values())

    @property
    def compliance_tasks(self) -> list[ComplianceTask]:
        """All compliance tasks in insertion order."""
        return list(self._tasks.values())

    def active_alerts(self) -> list[Alert]:
        """Alerts that have not been acknowledged yet."""
        return [a for a in self._alerts.values() if not a.acknowledged]

    def get_alert(self, alert_id: int) -> Alert | None:
        return self._alerts.get(alert_id)

    def get_resource(self, resource_id: int) -> Resource | None:
        return self._resources.get(resource_id)

    def get_compliance_task(self, task_id: int) -> ComplianceTask | None:
        return self._tasks.get(task_id)

    def counts(self) -> Mapping[str, int]:
        """Size of each collection."""
        return {
            ALERTS: len(self._alerts),
            RESOURCES: len(self._resources),
            COMPLIANCE_TASKS: len(self._tasks),
        }

    # ── Change notification ─────────────────────────────────────

    def on_change(self, callback: StoreEventCallback) -> None:
        """Register a callback invoked after every applied mutation."""
        self._callbacks.append(callback)

    def _emit(self, event_type: StoreEventType, collection: str, record_id: int) -> None:
        event = StoreEvent(
            event_type=event_type, collection=collection, record_id=record_id
        )
        for cb in self._callbacks:
            try:
                cb(event)
            except Exception:
                logger.exception(
                    "store_event_callback_error",
                    event_type=event.event_type,
                    record_id=record_id,
                )

    def _next_id(self, collection: str) -> int:
        self._last_ids[collection] += 1
        return self._last_ids[collection]

    # ── Alerts ──────────────────────────────────────────────────

    def add_alert(
        self,
        message: str,
        severity: Severity | str = Severity.MEDIUM,
        service: ResourceType | str = ResourceType.COMPUTE_INSTANCE,
        region: Region | str = Region.US_EAST_1,
    ) -> Alert:
        """Create an unacknowledged alert and append it.

        Raises:
            MissingFieldError: *message* is blank.
            DomainValueError: severity, service or region is not recognised.
        """
        text = _require_text(message, "message")
        sev = _coerce(Severity, severity, "severity")
        svc = _coerce(ResourceType, service, "service")
        reg = _coerce(Region, region, "region")

        alert = Alert(
            id=self._next_id(ALERTS),
            severity=sev,
            message=text,
            timestamp=time.time(),
            service=svc,
            region=reg,
        )
        self._alerts[alert.id] = alert
        logger.info(
            "alert_added",
            alert_id=alert.id,
            severity=alert.severity,
            service=alert.service,
            region=alert.region,
        )
        self._emit(StoreEventType.ALERT_ADDED, ALERTS, alert.id)
        return alert

    def acknowledge_alert(self, alert_id: int) -> Alert | None:
        """Mark an alert acknowledged. Unknown ids are ignored.

        Acknowledgement is one-way; repeating it changes nothing.
        """
        alert = self._alerts.get(alert_id)
        if alert is None:
            logger.debug("alert_not_found", alert_id=alert_id)
            return None
        if alert.acknowledged:
            return alert

        updated = alert.model_copy(update={"acknowledged": True})
        self._alerts[alert_id] = updated
        logger.info("alert_acknowledged", alert_id=alert_id)
        self._emit(StoreEventType.ALERT_ACKNOWLEDGED, ALERTS, alert_id)
        return updated

    # ── Resources ───────────────────────────────────────────────

    def add_resource(
        self,
        name: str,
        type: ResourceType | str = ResourceType.COMPUTE_INSTANCE,  # noqa: A002
        status: ResourceStatus | str = ResourceStatus.HEALTHY,
        region: Region | str = Region.US_EAST_1,
        details: Mapping[str, object] | None = None,
    ) -> Resource:
        """Create a resource and append it.

        Raises:
            MissingFieldError: *name* is blank.
            DomainValueError: type, status or region is not recognised.
        """
        label = _require_text(name, "name")
        rtype = _coerce(ResourceType, type, "type")
        rstatus = _coerce(ResourceStatus, status, "status")
        reg = _coerce(Region, region, "region")

        resource = Resource(
            id=self._next_id(RESOURCES),
            name=label,
            type=rtype,
            status=rstatus,
            region=reg,
            details={str(k): str(v) for k, v in (details or {}).items()},
        )
        self._resources[resource.id] = resource
        logger.info(
            "resource_added",
            resource_id=resource.id,
            type=resource.type,
            status=resource.status,
        )
        self._emit(StoreEventType.RESOURCE_ADDED, RESOURCES, resource.id)
        return resource

    def update_resource_status(
        self, resource_id: int, status: ResourceStatus | str
    ) -> Resource | None:
        """Overwrite a resource's status. Unknown ids are ignored.

        Raises:
            DomainValueError: *status* is not recognised (checked before lookup).
        """
        new_status = _coerce(ResourceStatus, status, "status")
        resource = self._resources.get(resource_id)
        if resource is None:
            logger.debug("resource_not_found", resource_id=resource_id)
            return None

        updated = resource.model_copy(update={"status": new_status})
        self._resources[resource_id] = updated
        logger.info(
            "resource_status_updated",
            resource_id=resource_id,
            old_status=resource.status,
            new_status=new_status,
        )
        self._emit(StoreEventType.RESOURCE_STATUS_UPDATED, RESOURCES, resource_id)
        return updated

    # ── Compliance tasks ────────────────────────────────────────

    def add_compliance_task(
        self,
        standard: str,
        task: str,
        due_date: str = "",
        aws_service: ResourceType | str = ResourceType.COMPUTE_INSTANCE,
    ) -> ComplianceTask:
        """Create a pending compliance task and append it.

        ``due_date`` is free text and is not validated.
        """
        svc = _coerce(ResourceType, aws_service, "aws_service")

        record = ComplianceTask(
            id=self._next_id(COMPLIANCE_TASKS),
            standard=standard,
            task=task,
            due_date=due_date,
            aws_service=svc,
        )
        self._tasks[record.id] = record
        logger.info(
            "compliance_task_added",
            task_id=record.id,
            standard=record.standard,
            aws_service=record.aws_service,
        )
        self._emit(StoreEventType.COMPLIANCE_TASK_ADDED, COMPLIANCE_TASKS, record.id)
        return record

    def toggle_compliance(self, task_id: int) -> ComplianceTask | None:
        """Flip a task's completed flag. Unknown ids are ignored."""
        record = self._tasks.get(task_id)
        if record is None:
            logger.debug("compliance_task_not_found", task_id=task_id)
            return None

        updated = record.model_copy(update={"completed": not record.completed})
        self._tasks[task_id] = updated
        logger.info("compliance_toggled", task_id=task_id, completed=updated.completed)
        self._emit(StoreEventType.COMPLIANCE_TOGGLED, COMPLIANCE_TASKS, task_id)
        return updated
