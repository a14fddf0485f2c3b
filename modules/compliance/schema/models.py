"""
Schema data model.

A schema is an ordered list of sections, each an ordered list of fields.
Every field carries the dotted storage path (``<sectionId>.<fieldId>``) of
its value inside a product record, so validation never needs a lookup table.
"""

from dataclasses import dataclass, field as dataclass_field, asdict
from typing import Any, Dict, Iterable, List, Optional, Set

from shared.utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass
class SchemaField:
    """One data point of a schema as seen by a tenant."""
    name: str  # display label
    mandatory: bool
    critical: bool = False
    active: bool = True
    path: Optional[str] = None
    priority: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Section:
    id: str
    title: str
    fields: List[SchemaField] = dataclass_field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'fields': [f.to_dict() for f in self.fields],
        }


def _as_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ('true', '1', 'yes')
    return bool(value)


def _parse_field(data: Dict[str, Any], label_paths: Dict[str, str]) -> Optional[SchemaField]:
    name = data.get('name')
    if not isinstance(name, str) or not name:
        return None

    path = data.get('path')
    if not isinstance(path, str) or not path:
        # Stored schemas from before per-field paths only carry the label
        path = label_paths.get(name)

    return SchemaField(
        name=name,
        mandatory=_as_bool(data.get('mandatory')),
        critical=_as_bool(data.get('critical')),
        active=_as_bool(data.get('active'), default=True),
        path=path,
        priority=data.get('priority'),
    )


def parse_schema(payload: Any) -> List[Section]:
    """
    Build a schema from plain data.

    Accepts a list of ``Section`` objects (returned as-is) or of dicts shaped
    like ``{"id", "title", "fields": [{"name", "mandatory", "critical",
    "active", "path"?}]}``. Malformed sections and fields are skipped.

    Args:
        payload: Schema as decoded from JSON/YAML or built in code

    Returns:
        List of sections
    """
    from modules.compliance.schema.standard import STANDARD_LABEL_PATHS

    if not isinstance(payload, (list, tuple)):
        logger.debug(f"Schema payload is not a list: {type(payload).__name__}")
        return []

    sections: List[Section] = []
    for raw_section in payload:
        if isinstance(raw_section, Section):
            sections.append(raw_section)
            continue

        if not isinstance(raw_section, dict):
            logger.debug(f"Skipping malformed section: {raw_section!r}")
            continue

        section_id = raw_section.get('id')
        if not isinstance(section_id, str) or not section_id:
            logger.debug(f"Skipping section without id: {raw_section!r}")
            continue

        fields: List[SchemaField] = []
        raw_fields = raw_section.get('fields') or []
        for raw_field in raw_fields if isinstance(raw_fields, list) else []:
            if isinstance(raw_field, SchemaField):
                fields.append(raw_field)
                continue
            parsed = _parse_field(raw_field, STANDARD_LABEL_PATHS) if isinstance(raw_field, dict) else None
            if parsed is None:
                logger.debug(f"Skipping malformed field in section '{section_id}': {raw_field!r}")
                continue
            fields.append(parsed)

        sections.append(Section(
            id=section_id,
            title=str(raw_section.get('title') or section_id),
            fields=fields,
        ))

    return sections


def schema_to_dict(schema: Iterable[Section]) -> List[Dict[str, Any]]:
    """Convert a schema to its JSON-serialisable form."""
    return [section.to_dict() for section in schema]


def active_paths(schema: Iterable[Section]) -> Set[str]:
    """
    Collect the storage paths of every active field.

    Fields without a resolvable path are never active for validation.
    """
    return {
        schema_field.path
        for section in schema
        for schema_field in section.fields
        if schema_field.active and schema_field.path
    }
