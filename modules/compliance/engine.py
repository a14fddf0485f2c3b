"""
ComplianceEngine - Main orchestrator for product record validation.

This is the primary entry point for turning an extracted product record and
a tenant schema into a severity-ordered list of alerts.
"""

from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Optional

from modules.compliance.core.base import Alert, BaseRule, RuleContext, SEVERITY_RANK
from modules.compliance.core.registry import RULE_REGISTRY, get_rule
from modules.compliance.core.config_loader import RulesConfigLoader
from modules.compliance.schema.models import Section, parse_schema, active_paths
from shared.utils.logger import setup_logger

# Import rules to trigger registration
from modules.compliance import rules  # noqa: F401

logger = setup_logger(__name__)


def sort_alerts(alerts: Iterable[Alert]) -> List[Alert]:
    """Order alerts critical first; alerts of equal severity keep their order"""
    return sorted(alerts, key=lambda alert: SEVERITY_RANK[alert.severity])


class ComplianceEngine:
    """
    Schema-driven compliance validator.

    Orchestrates validation by:
    1. Loading the ordered rule list from configuration
    2. Instantiating the registered rules
    3. Running every rule against the record
    4. Sorting the combined alerts by severity

    Validation is total: any record, including None or a corrupt structure,
    yields a (possibly empty) alert list and never raises.

    Usage:
        engine = ComplianceEngine()
        alerts = engine.validate(record, schema)

        for alert in alerts:
            print(f"[{alert.severity.value}] {alert.field}: {alert.message}")
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize compliance engine.

        Args:
            config_path: Path to rules YAML file
                        If None, uses default location
        """
        self.config_loader = RulesConfigLoader(config_path)
        self.config_loader.load()
        self.rules = self._build_rules(self.config_loader.get_rules())

        logger.info(
            f"ComplianceEngine initialized with {len(self.rules)} rules "
            f"({len(RULE_REGISTRY)} registered)"
        )

    def _build_rules(self, rule_configs: List[Dict[str, Any]]) -> List[BaseRule]:
        built: List[BaseRule] = []

        for rule_config in rule_configs:
            if not isinstance(rule_config, dict):
                logger.warning(f"Ignoring malformed rule entry: {rule_config!r}")
                continue

            rule_name = rule_config.get('rule')
            if not rule_name:
                logger.warning(f"Rule entry missing 'rule' field: {rule_config}")
                continue

            rule_class = get_rule(rule_name)
            if not rule_class:
                logger.warning(f"Rule '{rule_name}' not found in registry")
                continue

            built.append(rule_class(rule_config))

        return built

    def validate(
        self,
        record: Any,
        schema: Any,
        now: Optional[datetime] = None
    ) -> List[Alert]:
        """
        Validate a product record against a schema.

        Args:
            record: Product record shaped like the schema sections
                    Format: {"identificazione": {"produttore": "..."}, ...}
            schema: List of Section objects or their dict form
            now: Reference time for the freshness rules (defaults to UTC now)

        Returns:
            Alerts sorted critical, warning, info; ties in emission order
        """
        if record is None:
            return []

        sections: List[Section] = parse_schema(schema)
        if now is None:
            now = datetime.now(timezone.utc)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        context = RuleContext(schema=sections, active_paths=active_paths(sections), now=now)

        alerts: List[Alert] = []
        for rule in self.rules:
            try:
                alerts.extend(rule.evaluate(record, context))
            except Exception as e:
                logger.error(f"Rule '{rule.name}' failed: {e}", exc_info=True)

        logger.debug(f"Validation produced {len(alerts)} alerts")
        return sort_alerts(alerts)

    def reload_config(self) -> None:
        """Reload rules configuration from file"""
        logger.info("Reloading rules configuration")
        self.config_loader.reload()
        self.rules = self._build_rules(self.config_loader.get_rules())

    def get_available_rules(self) -> List[str]:
        """
        Get list of all registered rules.

        Returns:
            List of rule names
        """
        return list(RULE_REGISTRY.keys())


@lru_cache()
def get_default_engine() -> ComplianceEngine:
    """Get cached engine built from the default rules configuration"""
    return ComplianceEngine()


def validate(record: Any, schema: Any, now: Optional[datetime] = None) -> List[Alert]:
    """
    Validate a product record with the default engine.

    Example:
        alerts = validate(record, get_default_schema())
    """
    return get_default_engine().validate(record, schema, now=now)
