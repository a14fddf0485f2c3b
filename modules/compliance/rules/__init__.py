"""
Rules module.

Contains all built-in compliance rules:
- mandatory_rules: presence of mandatory fields
- freshness_rules: drafting date, shelf-life and certification expiry

All rules are automatically registered via decorators.
"""

# Import all rules to trigger registration
from modules.compliance.rules import mandatory_rules
from modules.compliance.rules import freshness_rules

__all__ = ['mandatory_rules', 'freshness_rules']
