"""
Schema API endpoints.

Exposes the standard schema and the tenant's editable custom schema.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from typing import Any, Dict, List

from modules.compliance import SchemaStore, get_default_schema, parse_schema
from modules.compliance.exceptions import SchemaStoreError
from modules.compliance.schema import schema_to_dict, flattened_headers
from src.api.v1.dependencies.services import get_schema_store
from src.api.v1.models.requests import SectionModel
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter()


@router.get("/standard", response_model=List[SectionModel])
async def get_standard_schema():
    """
    Get the standard schema with every field active.
    """
    return schema_to_dict(get_default_schema())


@router.get("/headers", response_model=List[Dict[str, str]])
async def get_flattened_headers():
    """
    Get one row per standard field (section title, field label, dotted key).
    """
    return flattened_headers()


@router.get("", response_model=List[SectionModel])
async def get_custom_schema(store: SchemaStore = Depends(get_schema_store)):
    """
    Get the tenant's custom schema, or the standard if none is stored.
    """
    return schema_to_dict(store.load())


@router.put("", response_model=List[SectionModel])
async def save_custom_schema(
    sections: List[SectionModel],
    store: SchemaStore = Depends(get_schema_store)
):
    """
    Replace the tenant's custom schema.

    Fields sent without a path are resolved against the standard by label.
    """
    schema = parse_schema([section.model_dump() for section in sections])

    try:
        store.save(schema)
    except SchemaStoreError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    logger.info(f"Custom schema saved with {len(schema)} sections")
    return schema_to_dict(schema)


@router.delete("", response_model=Dict[str, Any])
async def reset_custom_schema(store: SchemaStore = Depends(get_schema_store)):
    """
    Drop the custom schema so the standard applies again.
    """
    try:
        store.reset()
    except SchemaStoreError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    return {"message": "Custom schema reset to standard"}
