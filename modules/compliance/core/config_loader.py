"""
Rules configuration loader.

Loads rule ordering, thresholds and message templates from YAML.
"""

import copy
import yaml
from typing import Dict, Any, List, Optional
from pathlib import Path

from modules.compliance.exceptions import RulesConfigurationError
from shared.utils.config import settings
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)


DEFAULT_RULES_CONFIG: Dict[str, Any] = {
    'rules': [
        {
            'rule': 'mandatory_fields',
        },
        {
            'rule': 'document_staleness',
            'field': 'identificazione.dataRedazione',
            'params': {'max_age_months': 12},
        },
        {
            'rule': 'shelf_life_expiry',
            'field': 'conservazione.tmcScadenza',
            'params': {'warning_days': 30},
        },
        {
            'rule': 'certification_expiry',
            'field': 'conformita.certificazioni',
            'params': {'warning_days': 60, 'type_key': 'tipo', 'expiry_key': 'scadenza'},
        },
    ],
}


class RulesConfigLoader:
    """
    Loads compliance rules configuration from a YAML file.

    File layout:
        rules:
          - rule: mandatory_fields
          - rule: shelf_life_expiry
            field: conservazione.tmcScadenza
            params:
              warning_days: 30
            messages:
              expired: "Prodotto scaduto"
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            config_path: Path to rules YAML file
                        If None, uses settings.COMPLIANCE_RULES_PATH or
                        config/compliance/rules.yaml
        """
        if config_path is None:
            config_path = settings.COMPLIANCE_RULES_PATH
        if config_path is None:
            base_dir = Path(__file__).parent.parent.parent.parent
            config_path = base_dir / "config" / "compliance" / "rules.yaml"

        self.config_path = Path(config_path)
        self._config: Optional[Dict[str, Any]] = None

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Returns:
            Configuration dictionary

        Raises:
            RulesConfigurationError: If the file cannot be read or parsed
        """
        if not self.config_path.exists():
            logger.warning(
                f"Rules config file not found: {self.config_path}. "
                "Using built-in rules."
            )
            self._config = copy.deepcopy(DEFAULT_RULES_CONFIG)
            return self._config

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load rules config: {e}")
            raise RulesConfigurationError(f"Invalid rules config {self.config_path}: {e}") from e

        if not isinstance(loaded, dict) or not isinstance(loaded.get('rules', []), list):
            raise RulesConfigurationError(
                f"Rules config {self.config_path} must be a mapping with a 'rules' list"
            )

        self._config = loaded
        logger.info(f"Loaded rules config from: {self.config_path}")
        return self._config

    def get_rules(self) -> List[Dict[str, Any]]:
        """
        Get the ordered rule configurations.

        Returns:
            List of rule configuration dicts
        """
        if self._config is None:
            self.load()

        return self._config.get('rules', [])

    def reload(self) -> Dict[str, Any]:
        """Reload configuration from file"""
        self._config = None
        return self.load()
