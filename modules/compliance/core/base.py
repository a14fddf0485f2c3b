"""
Base classes and data models for the compliance rules.

This module provides the foundation for all rules:
- Severity: Alert severity levels and their ordering
- Alert: Standard output unit of a rule
- RuleContext: Per-run inputs shared by every rule
- BaseRule: Abstract base class for all rules
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field as dataclass_field
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Set

from dateutil import parser as date_parser

from modules.compliance.schema.models import Section


class Severity(str, Enum):
    """Severity levels for alerts"""
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        return SEVERITY_RANK[self]


SEVERITY_RANK: Dict[Severity, int] = {
    Severity.CRITICAL: 0,
    Severity.WARNING: 1,
    Severity.INFO: 2,
}


@dataclass(frozen=True)
class Alert:
    """
    One compliance finding.

    ``field`` is the dotted storage path of the offending value and
    ``deadline`` the raw date value that triggered a time-based alert.
    """
    severity: Severity
    message: str
    field: str
    deadline: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        data = {
            'severity': self.severity.value,
            'message': self.message,
            'field': self.field,
        }
        if self.deadline is not None:
            data['deadline'] = self.deadline
        return data


@dataclass
class RuleContext:
    """Inputs shared by every rule during one validation pass"""
    schema: List[Section]
    active_paths: Set[str]
    now: datetime

    def is_active(self, path: Optional[str]) -> bool:
        return bool(path) and path in self.active_paths


class BaseRule(ABC):
    """
    Abstract base class for all compliance rules.

    Rules are pure: they read the record and the context and return alerts.
    Malformed values must be treated as missing or unparseable, never raised.

    Example:
        @register_rule("my_rule")
        class MyRule(BaseRule):
            def evaluate(self, record, context):
                return []
    """

    default_messages: Dict[str, str] = {}

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize rule with configuration.

        Args:
            config: Rule entry from the rules YAML
                    (rule, field, params, severity, messages)
        """
        self.config = config
        self.field = config.get('field')
        self.params: Dict[str, Any] = config.get('params') or {}
        self.messages: Dict[str, str] = {**self.default_messages, **(config.get('messages') or {})}

    @property
    def name(self) -> str:
        return self.config.get('rule') or self.__class__.__name__

    @abstractmethod
    def evaluate(self, record: Dict[str, Any], context: RuleContext) -> List[Alert]:
        """
        Execute rule logic.

        Args:
            record: Product record (any JSON-shaped mapping)
            context: Schema, active paths and reference time

        Returns:
            Alerts raised by this rule, in emission order
        """
        pass

    def _message(self, key: str, **values: Any) -> str:
        return self.messages[key].format(**values)


def get_field_value(data: Any, field_path: str) -> Any:
    """
    Get field value from data using dot notation.

    Any missing or non-traversable intermediate yields None.

    Example:
        get_field_value({"a": {"b": 1}}, "a.b")  # Returns 1
        get_field_value({"a": "text"}, "a.b")    # Returns None
    """
    value = data
    for key in field_path.split('.'):
        if isinstance(value, dict):
            value = value.get(key)
        elif isinstance(value, list) and key.isdigit() and int(key) < len(value):
            value = value[int(key)]
        else:
            return None

        if value is None:
            return None

    return value


def is_missing(value: Any) -> bool:
    """A mandatory value is missing when None, an empty string or an empty list"""
    if value is None or value == "":
        return True
    return isinstance(value, list) and len(value) == 0


def is_present(value: Any) -> bool:
    """Truthiness used by the freshness rules before attempting a date parse"""
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


_LENIENT_DEFAULTS = (datetime(1970, 1, 1), datetime(1971, 2, 2))


def _parse_lenient(text: str) -> Optional[datetime]:
    """Free-form parse that rejects strings without an explicit year and month"""
    first, second = (date_parser.parse(text, default=default) for default in _LENIENT_DEFAULTS)
    if (first.year, first.month) != (second.year, second.month):
        return None
    return first


def parse_date_value(value: Any) -> Optional[datetime]:
    """
    Parse a record value into an aware UTC datetime.

    Accepts datetime/date objects, epoch milliseconds, ISO-8601 strings and
    other common date strings. Naive values are taken as UTC.

    Returns:
        Parsed datetime, or None when the value is not a usable date
    """
    try:
        if isinstance(value, bool):
            return None

        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            parsed = datetime(value.year, value.month, value.day)
        elif isinstance(value, (int, float)):
            if isinstance(value, float) and not math.isfinite(value):
                return None
            return datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(milliseconds=value)
        elif isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            try:
                parsed = date_parser.isoparse(text)
            except (ValueError, OverflowError):
                parsed = _parse_lenient(text)
                if parsed is None:
                    return None
        else:
            return None

        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def days_until(target: datetime, now: datetime) -> int:
    """Whole days from now to target, partial days rounded up"""
    return math.ceil((target - now).total_seconds() / 86400)


def months_between(then: datetime, now: datetime) -> int:
    """Calendar months from then to now, ignoring the day of month"""
    return (now.year - then.year) * 12 + (now.month - then.month)


def deadline_text(value: Any) -> str:
    """Render the raw date value carried by an alert deadline"""
    if isinstance(value, str):
        return value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)
