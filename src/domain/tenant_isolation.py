"""
Tenant isolation rule.

A request is allowed iff the caller has platform-wide scope, carries no
tenant identifier, or every tenant identifier equals the caller's binding.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

# Keys under which tenant identifiers may appear in path, query or body
TENANT_ID_KEYS = (
    "tenant_id",
    "college_id",
    "publisher_id",
    "tenantId",
    "collegeId",
    "publisherId",
)


@dataclass(frozen=True)
class TenantReference:
    source: str  # "path", "query", "body" or "entity"
    key: str
    value: str


@dataclass(frozen=True)
class TenantViolation:
    caller_tenant_id: Optional[str]
    reference: TenantReference


def _normalize(value) -> str:
    return str(value).strip().lower()


def find_violation(
    caller_tenant_id: Optional[str],
    has_platform_scope: bool,
    references: Iterable[TenantReference],
) -> Optional[TenantViolation]:
    """Return the first reference that breaks isolation, or None."""
    if has_platform_scope:
        return None

    bound = _normalize(caller_tenant_id) if caller_tenant_id else None
    for reference in references:
        if bound is None or _normalize(reference.value) != bound:
            return TenantViolation(caller_tenant_id=caller_tenant_id, reference=reference)
    return None


def extract_references(source: str, data) -> Tuple[TenantReference, ...]:
    """Collect tenant identifiers from a flat mapping (path/query params, JSON body)."""
    if not isinstance(data, dict):
        return ()
    found = []
    for key in TENANT_ID_KEYS:
        value = data.get(key)
        if value is None or value == "":
            continue
        if isinstance(value, (list, tuple)):
            found.extend(TenantReference(source, key, str(v)) for v in value if v)
        else:
            found.append(TenantReference(source, key, str(value)))
    return tuple(found)
