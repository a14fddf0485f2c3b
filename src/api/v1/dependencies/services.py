"""
Service dependencies for API endpoints.

Endpoints receive their collaborators through FastAPI's dependency injection
so tests can override them.
"""

from modules.analytics import AlertsDashboardService
from modules.compliance import ComplianceEngine, SchemaStore, get_default_engine


def get_schema_store() -> SchemaStore:
    """Schema store backed by settings.SCHEMA_STORE_PATH"""
    return SchemaStore()


def get_compliance_engine() -> ComplianceEngine:
    """Shared engine built from the default rules configuration"""
    return get_default_engine()


def get_dashboard_service() -> AlertsDashboardService:
    return AlertsDashboardService(engine=get_default_engine())
