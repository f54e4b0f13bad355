"""Request context and tenant scoping.

The tenant for the executing request is held in a ``ContextVar`` so that
concurrent requests for different tenants on the same event loop never see
each other's tenant id.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterator, Optional

from ..exceptions import TenantContextError
from ...utils.uuid import generate_uuid_v7


@dataclass(frozen=True)
class RequestContext:
    """Request-scoped identity information.

    Represents who is acting and on behalf of which tenant.
    """

    tenant_id: str
    user_id: Optional[str] = None
    request_id: str = field(default_factory=generate_uuid_v7)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


_current_context: ContextVar[Optional[RequestContext]] = ContextVar(
    "flock_request_context", default=None
)


def get_request_context() -> Optional[RequestContext]:
    """Get the request context bound to the current task, if any."""
    return _current_context.get()


def get_current_tenant_id() -> Optional[str]:
    """Get the tenant id bound to the current task, if any."""
    context = _current_context.get()
    return context.tenant_id if context else None


def get_current_user_id() -> Optional[str]:
    """Get the acting user id bound to the current task, if any."""
    context = _current_context.get()
    return context.user_id if context else None


def require_tenant_id() -> str:
    """Get the current tenant id or raise TenantContextError."""
    tenant_id = get_current_tenant_id()
    if not tenant_id:
        raise TenantContextError()
    return tenant_id


@contextmanager
def tenant_scope(tenant_id: str, user_id: Optional[str] = None) -> Iterator[RequestContext]:
    """Bind a tenant (and optionally an actor) for the duration of a block.

    Example:
        with tenant_scope("t1", user_id="u1"):
            await service.search_transactions(filters)
    """
    context = RequestContext(tenant_id=tenant_id, user_id=user_id)
    token = _current_context.set(context)
    try:
        yield context
    finally:
        _current_context.reset(token)
