"""
Rule registry system.

Provides decorator-based registration for compliance rules so the rules YAML
can refer to them by name.
"""

from typing import Dict, Type, Optional
from modules.compliance.core.base import BaseRule
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)

# Global registry of all rules
RULE_REGISTRY: Dict[str, Type[BaseRule]] = {}


def register_rule(name: str):
    """
    Decorator to register a rule in the global registry.

    Usage:
        @register_rule("mandatory_fields")
        class MandatoryFieldsRule(BaseRule):
            def evaluate(self, record, context):
                ...

    Args:
        name: Unique name for the rule (used in configuration)
    """
    def decorator(cls: Type[BaseRule]):
        if name in RULE_REGISTRY:
            logger.warning(
                f"Rule '{name}' is already registered. "
                f"Overwriting with {cls.__name__}"
            )

        RULE_REGISTRY[name] = cls
        logger.debug(f"Registered rule: {name} -> {cls.__name__}")
        return cls

    return decorator


def get_rule(name: str) -> Optional[Type[BaseRule]]:
    """Get rule class by name from registry, or None if not found"""
    return RULE_REGISTRY.get(name)


def list_rules() -> Dict[str, str]:
    """
    List all registered rules.

    Returns:
        Dictionary mapping rule names to class names
    """
    return {
        name: cls.__name__
        for name, cls in RULE_REGISTRY.items()
    }
