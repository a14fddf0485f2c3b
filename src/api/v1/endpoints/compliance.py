"""
Compliance API endpoints.

Validates extracted product records and aggregates alerts across suppliers.
"""

from fastapi import APIRouter, Depends

from modules.analytics import AlertsDashboardService
from modules.compliance import (
    ComplianceEngine,
    SchemaStore,
    count_by_severity,
    get_overall_status,
)
from src.api.v1.dependencies.services import (
    get_compliance_engine,
    get_dashboard_service,
    get_schema_store,
)
from src.api.v1.models.requests import DashboardRequest, ValidateRecordRequest
from src.api.v1.models.responses import DashboardResponse, ValidationResponse
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter()


@router.post("/validate", response_model=ValidationResponse)
async def validate_record(
    request: ValidateRecordRequest,
    engine: ComplianceEngine = Depends(get_compliance_engine),
    store: SchemaStore = Depends(get_schema_store)
):
    """
    Validate one product record.

    Uses the schema from the request body, or the stored custom schema.
    """
    if request.schema_ is not None:
        schema = [section.model_dump() for section in request.schema_]
    else:
        schema = store.load()

    alerts = engine.validate(request.record, schema)
    logger.info(f"Validated record: {len(alerts)} alerts")

    return ValidationResponse(
        alerts=[alert.to_dict() for alert in alerts],
        compliance=get_overall_status(alerts).to_dict(),
        counts=count_by_severity(alerts),
    )


@router.post("/dashboard", response_model=DashboardResponse)
async def alerts_dashboard(
    request: DashboardRequest,
    service: AlertsDashboardService = Depends(get_dashboard_service),
    store: SchemaStore = Depends(get_schema_store)
):
    """
    Validate every product of every supplier and summarise the alerts.
    """
    if request.schema_ is not None:
        schema = [section.model_dump() for section in request.schema_]
    else:
        schema = store.load()

    alerts = await service.collect_alerts(
        request.suppliers,
        schema,
        customer_names=request.customer_names
    )
    dashboard = service.build_dashboard(alerts)

    return DashboardResponse(summary=dashboard['summary'], alerts=dashboard['alerts'])
