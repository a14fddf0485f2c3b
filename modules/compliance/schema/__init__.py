"""
Schema module.

Standard definition, tenant schema model and custom schema persistence.
"""

from modules.compliance.schema.models import SchemaField, Section, parse_schema, schema_to_dict, active_paths
from modules.compliance.schema.standard import (
    FieldPriority,
    FieldDefinition,
    SectionDefinition,
    STANDARD_SECTIONS,
    STANDARD_LABEL_PATHS,
    get_default_schema,
    flattened_headers,
)
from modules.compliance.schema.store import SchemaStore

__all__ = [
    'SchemaField',
    'Section',
    'parse_schema',
    'schema_to_dict',
    'active_paths',
    'FieldPriority',
    'FieldDefinition',
    'SectionDefinition',
    'STANDARD_SECTIONS',
    'STANDARD_LABEL_PATHS',
    'get_default_schema',
    'flattened_headers',
    'SchemaStore',
]
