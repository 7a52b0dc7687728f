"""Department-scoped authorization policy.

These checks only decide whether the client offers an action; the backend
enforces the same rules independently and remains authoritative.
"""

from __future__ import annotations

from typing import Any, Mapping

from .exceptions import ActionDeniedError
from .models import Actor, Role

NOT_SIGNED_IN = "Not signed in"
NOT_IN_DEPARTMENT = "Product not in your department"
UNASSIGNED_RESOURCE = "Product has no department assignment"
NO_PERMISSION = "No edit permission"


def resource_department(resource: Any) -> Any:
    if resource is None:
        return None
    if isinstance(resource, Mapping):
        value = resource.get("department_id")
        if value is None:
            value = resource.get("departmentId")
        return value
    return getattr(resource, "department_id", None)


def _same_department(left: Any, right: Any) -> bool:
    if left in (None, "") or right in (None, ""):
        return False
    return str(left) == str(right)


def denial_reason(actor: Actor | None, resource: Any) -> str | None:
    """Return why ``actor`` may not edit ``resource``, or None when allowed."""
    if actor is None:
        return NOT_SIGNED_IN
    if actor.role == Role.MANAGER:
        return None
    if actor.role == Role.STAFF:
        department = resource_department(resource)
        if department in (None, ""):
            return UNASSIGNED_RESOURCE
        if _same_department(actor.department_id, department):
            return None
        return NOT_IN_DEPARTMENT
    return NO_PERMISSION


def can_edit(actor: Actor | None, resource: Any) -> bool:
    return denial_reason(actor, resource) is None


def can_adjust_stock(actor: Actor | None, resource: Any) -> bool:
    return can_edit(actor, resource)


def can_delete(actor: Actor | None) -> bool:
    return actor is not None and actor.role == Role.MANAGER


def require_edit(actor: Actor | None, resource: Any, action: str = "edit") -> None:
    reason = denial_reason(actor, resource)
    if reason is not None:
        raise ActionDeniedError(action, reason)


def require_delete(actor: Actor | None) -> None:
    if actor is None:
        raise ActionDeniedError("delete", NOT_SIGNED_IN)
    if not can_delete(actor):
        raise ActionDeniedError("delete", NO_PERMISSION)
