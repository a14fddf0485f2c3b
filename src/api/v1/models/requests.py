"""
API request models.

Pydantic models for validating incoming API requests.
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any


class SchemaFieldModel(BaseModel):
    """One field of a tenant schema."""

    name: str = Field(..., min_length=1, description="Display label")
    mandatory: bool = Field(default=False, description="Whether the field must be present")
    critical: bool = Field(default=False, description="Whether absence is critical rather than a warning")
    active: bool = Field(default=True, description="Whether the field is validated for this tenant")
    path: Optional[str] = Field(
        default=None,
        description="Dotted record path; resolved from the standard by label when omitted"
    )
    priority: Optional[str] = Field(default=None, description="Informational priority")


class SectionModel(BaseModel):
    """An ordered group of schema fields."""

    id: str = Field(..., min_length=1, description="Section id, the top-level record key")
    title: str = Field(..., description="Section display title")
    fields: List[SchemaFieldModel] = Field(default_factory=list)


class ValidateRecordRequest(BaseModel):
    """
    Record validation request.

    The record is accepted as-is: any JSON shape, including missing or extra
    fields, is valid input.
    """

    record: Optional[Dict[str, Any]] = Field(default=None, description="Extracted product record")
    schema_: Optional[List[SectionModel]] = Field(
        default=None,
        alias="schema",
        description="Schema to validate against; the stored custom schema when omitted"
    )

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "record": {
                    "identificazione": {"produttore": "Dolciaria S.r.l.", "dataRedazione": "2025-01-10"},
                    "conservazione": {"tmcScadenza": "2026-11-01"}
                }
            }
        }
    }


class DashboardRequest(BaseModel):
    """Cross-supplier dashboard request."""

    suppliers: Dict[str, Any] = Field(
        ...,
        description="Customer folders keyed by slug: {slug: {suppliers: {slug: {name, pdfs}}}}"
    )
    schema_: Optional[List[SectionModel]] = Field(default=None, alias="schema")
    customer_names: Optional[Dict[str, str]] = Field(
        default=None,
        description="Customer display names by slug"
    )

    model_config = {"populate_by_name": True}
