"""
Custom schema persistence.

Keeps the tenant's edited schema in a JSON file. A missing or corrupt file is
never fatal: the standard schema is served instead.
"""

import json
from pathlib import Path
from typing import List, Optional

from modules.compliance.exceptions import SchemaStoreError
from modules.compliance.schema.models import Section, parse_schema, schema_to_dict
from modules.compliance.schema.standard import get_default_schema
from shared.utils.config import settings
from shared.utils.logger import setup_logger, log_error

logger = setup_logger(__name__)


class SchemaStore:
    """
    JSON-file store for the custom schema.

    Usage:
        store = SchemaStore()
        schema = store.load()
        schema[0].fields[1].active = False
        store.save(schema)
    """

    def __init__(self, path: Optional[str] = None):
        """
        Initialize schema store.

        Args:
            path: JSON file location. If None, uses settings.SCHEMA_STORE_PATH
        """
        self.path = Path(path or settings.SCHEMA_STORE_PATH)

    def load(self) -> List[Section]:
        """
        Load the custom schema.

        Returns:
            Stored schema, or the default schema when nothing usable is stored
        """
        if not self.path.exists():
            logger.debug(f"No custom schema at {self.path}, using standard schema")
            return get_default_schema()

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            log_error(logger, e, f"Failed to parse custom schema from {self.path}")
            return get_default_schema()

        schema = parse_schema(payload)
        if not schema:
            logger.warning(f"Custom schema at {self.path} is empty or malformed, using standard schema")
            return get_default_schema()

        logger.info(f"Loaded custom schema from: {self.path}")
        return schema

    def save(self, schema: List[Section]) -> None:
        """
        Persist the custom schema.

        Raises:
            SchemaStoreError: If the file cannot be written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(schema_to_dict(schema), f, ensure_ascii=False, indent=2)
        except OSError as e:
            log_error(logger, e, f"Failed to save custom schema to {self.path}")
            raise SchemaStoreError(f"Cannot save custom schema: {e}") from e

        logger.info(f"Saved custom schema to: {self.path}")

    def reset(self) -> None:
        """Remove the stored schema so the standard applies again."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise SchemaStoreError(f"Cannot reset custom schema: {e}") from e

        logger.info(f"Reset custom schema at: {self.path}")
