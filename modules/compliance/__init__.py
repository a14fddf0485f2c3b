"""
Compliance module.

Validates extracted product records against a configurable field schema and
emits severity-classified compliance alerts.

Main components:
- ComplianceEngine: Main orchestrator for validation
- BaseRule: Base class for all rules
- Built-in rules: mandatory fields, document staleness, shelf-life and
  certification expiry

Usage:
    from modules.compliance import validate, get_default_schema

    alerts = validate(record, get_default_schema())
    status = get_overall_status(alerts)
"""

from modules.compliance.engine import ComplianceEngine, validate, get_default_engine, sort_alerts
from modules.compliance.core.base import Alert, BaseRule, RuleContext, Severity
from modules.compliance.core.registry import register_rule, RULE_REGISTRY
from modules.compliance.schema import SchemaField, Section, SchemaStore, get_default_schema, parse_schema
from modules.compliance.status import ComplianceStatus, OverallStatus, get_overall_status, count_by_severity

__all__ = [
    'ComplianceEngine',
    'validate',
    'get_default_engine',
    'sort_alerts',
    'Alert',
    'BaseRule',
    'RuleContext',
    'Severity',
    'register_rule',
    'RULE_REGISTRY',
    'SchemaField',
    'Section',
    'SchemaStore',
    'get_default_schema',
    'parse_schema',
    'ComplianceStatus',
    'OverallStatus',
    'get_overall_status',
    'count_by_severity',
]
