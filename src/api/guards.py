"""
Request guard chain: authenticate -> authorize role -> tenant isolation.

Installed as router-level dependencies so every route of a secured router is
covered without per-endpoint wiring.
"""

import json
from typing import Iterable, List, Optional

from fastapi import APIRouter, Depends, Request

from src.api.error import raise_for_error
from src.app.services.security_context import SecurityContext
from src.app.use_cases.access import AccessPolicyUseCase
from src.depends import get_security_context, get_unit_of_work
from src.domain.entities import PrincipalRole
from src.domain.tenant_isolation import TenantReference, extract_references

ALL_ROLES = tuple(PrincipalRole)


async def collect_tenant_references(request: Request) -> List[TenantReference]:
    """Tenant identifiers carried by path parameters, query string and JSON body."""
    references = list(extract_references("path", dict(request.path_params)))

    query = {key: request.query_params.getlist(key) for key in request.query_params.keys()}
    references.extend(extract_references("query", query))

    if request.method in ("POST", "PUT", "PATCH", "DELETE"):
        body = await request.body()
        if body:
            try:
                payload = json.loads(body)
            except ValueError:
                payload = None
            references.extend(extract_references("body", payload))

    return references


def guard(roles: Optional[Iterable[PrincipalRole]] = None):
    """Build the guard dependency for a role set (None allows every role)."""
    allowed = tuple(roles) if roles is not None else ALL_ROLES

    async def enforce(
        request: Request,
        context: SecurityContext = Depends(get_security_context),
        uow=Depends(get_unit_of_work),
    ) -> SecurityContext:
        policy = AccessPolicyUseCase(uow)

        result = await policy.authorize_role(context, allowed)
        if result.is_err():
            raise_for_error(result.error)

        references = await collect_tenant_references(request)
        result = await policy.enforce_tenant_isolation(context, references)
        if result.is_err():
            raise_for_error(result.error)

        return context

    return enforce


def secured_router(roles: Optional[Iterable[PrincipalRole]] = None, **kwargs) -> APIRouter:
    """APIRouter whose every route runs the full guard chain."""
    dependencies = list(kwargs.pop("dependencies", []))
    dependencies.append(Depends(guard(roles)))
    return APIRouter(dependencies=dependencies, **kwargs)
