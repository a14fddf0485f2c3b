"""
Compliance core module.

Contains base classes, the rule registry and configuration loading.
"""

from modules.compliance.core.base import BaseRule, Alert, Severity, RuleContext
from modules.compliance.core.registry import RULE_REGISTRY, register_rule, get_rule

__all__ = [
    'BaseRule',
    'Alert',
    'Severity',
    'RuleContext',
    'RULE_REGISTRY',
    'register_rule',
    'get_rule',
]
