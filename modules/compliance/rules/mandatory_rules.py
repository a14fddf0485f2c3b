"""
Mandatory field rules.

Flags every active, mandatory field whose value is absent from the record.
"""

from typing import Any, Dict, List

from modules.compliance.core.base import (
    Alert,
    BaseRule,
    RuleContext,
    Severity,
    get_field_value,
    is_missing,
)
from modules.compliance.core.registry import register_rule


@register_rule("mandatory_fields")
class MandatoryFieldsRule(BaseRule):
    """
    Check presence of every active mandatory field.

    Severity is ``critical`` for fields flagged critical, ``warning``
    otherwise. Fields without a storage path are ignored.

    Configuration:
        - rule: mandatory_fields
          messages:
            missing: "Campo obbligatorio mancante: {label}"
    """

    default_messages = {
        'missing': "Campo obbligatorio mancante: {label}",
    }

    def evaluate(self, record: Dict[str, Any], context: RuleContext) -> List[Alert]:
        alerts: List[Alert] = []

        for section in context.schema:
            for schema_field in section.fields:
                if not (schema_field.active and schema_field.mandatory and schema_field.path):
                    continue

                value = get_field_value(record, schema_field.path)
                if not is_missing(value):
                    continue

                alerts.append(Alert(
                    severity=Severity.CRITICAL if schema_field.critical else Severity.WARNING,
                    message=self._message('missing', label=schema_field.name),
                    field=schema_field.path,
                ))

        return alerts
