"""
API response models.

Pydantic models for API responses.
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import datetime, timezone
from enum import Enum


class ResponseStatus(str, Enum):
    """Response status values."""
    SUCCESS = "success"
    ERROR = "error"


class ErrorResponse(BaseModel):
    """
    Standard error response.
    """

    status: ResponseStatus = Field(default=ResponseStatus.ERROR)
    error: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    detail: Optional[str] = Field(default=None, description="Detailed error information")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "error",
                "error": "schema_store_error",
                "message": "The custom schema could not be saved",
                "detail": "Permission denied",
                "timestamp": "2026-01-20T10:30:00Z"
            }
        }
    }


class AlertModel(BaseModel):
    severity: str = Field(..., description="critical, warning or info")
    message: str
    field: str = Field(..., description="Dotted record path of the offending value")
    deadline: Optional[str] = Field(default=None, description="Date value that triggered the alert")


class StatusModel(BaseModel):
    severity: str = Field(..., description="critical, warning or ok")
    text: str


class ValidationResponse(BaseModel):
    """
    Record validation response.
    """

    status: ResponseStatus = Field(default=ResponseStatus.SUCCESS)
    alerts: List[AlertModel] = Field(default_factory=list, description="Alerts, critical first")
    compliance: StatusModel = Field(..., description="Synoptic compliance status")
    counts: Dict[str, int] = Field(default_factory=dict, description="Alert count per severity")


class DashboardSummary(BaseModel):
    critical: int
    warning: int
    products_with_alerts: int


class EnrichedAlertModel(AlertModel):
    product_id: str
    product_name: str
    supplier_name: str
    customer_name: str
    saved_at: str


class DashboardResponse(BaseModel):
    """
    Alerts dashboard response.
    """

    status: ResponseStatus = Field(default=ResponseStatus.SUCCESS)
    summary: DashboardSummary
    alerts: List[EnrichedAlertModel] = Field(default_factory=list, description="Most recently saved first")
