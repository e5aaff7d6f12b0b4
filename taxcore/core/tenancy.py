"""Request context resolution for the tax HTTP surface.

Tenant and user management live outside this service; the caller's tenant
arrives in the ``X-Tenant-Id`` header and falls back to the configured
default tenant when absent.
"""

from fastapi import HTTPException, Request

from taxcore.core.config import settings
from taxcore.services.tax_snapshot_service import TaxRequestContext


def get_current_tenant(request: Request) -> str:
    """Extract the tenant id from the ``X-Tenant-Id`` header."""
    tenant_header = request.headers.get("X-Tenant-Id")
    if tenant_header is None:
        return settings.DEFAULT_TENANT_ID

    tenant_id = tenant_header.strip()
    if not tenant_id:
        raise HTTPException(status_code=400, detail="Invalid X-Tenant-Id header")
    return tenant_id


def get_request_context(request: Request) -> TaxRequestContext:
    """Build the per-request context passed to the snapshot use case."""
    return TaxRequestContext(
        tenant_id=get_current_tenant(request),
        user_id=request.headers.get("X-User-Id"),
        correlation_id=request.headers.get("X-Correlation-Id"),
        idempotency_key=request.headers.get("Idempotency-Key"),
    )
