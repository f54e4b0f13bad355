"""Shared request-scoped primitives."""

from .context import (
    RequestContext,
    get_request_context,
    get_current_tenant_id,
    get_current_user_id,
    require_tenant_id,
    tenant_scope,
)

__all__ = [
    "RequestContext",
    "get_request_context",
    "get_current_tenant_id",
    "get_current_user_id",
    "require_tenant_id",
    "tenant_scope",
]
