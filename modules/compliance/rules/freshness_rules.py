"""
Freshness rules.

Time-based checks on dated fields:
- DocumentStalenessRule: spec sheet not revised for too long
- ShelfLifeExpiryRule: product best-before/expiry reached or near
- CertificationExpiryRule: supplier certifications expired or near expiry

Each rule only runs when its field is active in the schema. Values that do
not parse as dates are ignored here; presence is the mandatory rule's job.
"""

from typing import Any, Dict, List

from modules.compliance.core.base import (
    Alert,
    BaseRule,
    RuleContext,
    Severity,
    days_until,
    deadline_text,
    get_field_value,
    is_present,
    months_between,
    parse_date_value,
)
from modules.compliance.core.registry import register_rule

_UNKNOWN_CERTIFICATION = "n.d."


@register_rule("document_staleness")
class DocumentStalenessRule(BaseRule):
    """
    Warn when the drafting date is at least ``max_age_months`` calendar
    months old. Months are counted on year and month only, so the day of
    month never matters.

    Configuration:
        - rule: document_staleness
          field: identificazione.dataRedazione
          params:
            max_age_months: 12
    """

    default_messages = {
        'stale': "Scheda non revisionata da {months} mesi",
    }

    def evaluate(self, record: Dict[str, Any], context: RuleContext) -> List[Alert]:
        if not context.is_active(self.field):
            return []

        value = get_field_value(record, self.field)
        if not is_present(value):
            return []

        drafted = parse_date_value(value)
        if drafted is None:
            return []

        months = months_between(drafted, context.now)
        if months < int(self.params.get('max_age_months', 12)):
            return []

        return [Alert(
            severity=Severity.WARNING,
            message=self._message('stale', months=months),
            field=self.field,
        )]


@register_rule("shelf_life_expiry")
class ShelfLifeExpiryRule(BaseRule):
    """
    Flag an expired product as critical and one expiring within
    ``warning_days`` as a warning.

    Configuration:
        - rule: shelf_life_expiry
          field: conservazione.tmcScadenza
          params:
            warning_days: 30
    """

    default_messages = {
        'expired': "Prodotto scaduto",
        'expiring': "Prodotto in scadenza tra {days} giorni",
    }

    def evaluate(self, record: Dict[str, Any], context: RuleContext) -> List[Alert]:
        if not context.is_active(self.field):
            return []

        value = get_field_value(record, self.field)
        if not is_present(value):
            return []

        expiry = parse_date_value(value)
        if expiry is None:
            return []

        days = days_until(expiry, context.now)
        if days <= 0:
            return [Alert(
                severity=Severity.CRITICAL,
                message=self._message('expired', days=days),
                field=self.field,
                deadline=deadline_text(value),
            )]
        if days <= int(self.params.get('warning_days', 30)):
            return [Alert(
                severity=Severity.WARNING,
                message=self._message('expiring', days=days),
                field=self.field,
                deadline=deadline_text(value),
            )]
        return []


@register_rule("certification_expiry")
class CertificationExpiryRule(BaseRule):
    """
    Check each certification entry ``{type_key, expiry_key}`` independently.
    Entries that are not objects or lack a parseable expiry are skipped.

    Configuration:
        - rule: certification_expiry
          field: conformita.certificazioni
          params:
            warning_days: 60
            type_key: tipo
            expiry_key: scadenza
    """

    default_messages = {
        'expired': 'Certificazione "{type}" scaduta',
        'expiring': 'Certificazione "{type}" in scadenza tra {days} giorni',
    }

    def evaluate(self, record: Dict[str, Any], context: RuleContext) -> List[Alert]:
        if not context.is_active(self.field):
            return []

        certifications = get_field_value(record, self.field)
        if not isinstance(certifications, list):
            return []

        type_key = self.params.get('type_key', 'tipo')
        expiry_key = self.params.get('expiry_key', 'scadenza')
        warning_days = int(self.params.get('warning_days', 60))

        alerts: List[Alert] = []
        for certification in certifications:
            if not isinstance(certification, dict):
                continue

            raw_expiry = certification.get(expiry_key)
            if not is_present(raw_expiry):
                continue

            expiry = parse_date_value(raw_expiry)
            if expiry is None:
                continue

            cert_type = certification.get(type_key) or _UNKNOWN_CERTIFICATION
            days = days_until(expiry, context.now)
            if days <= 0:
                severity, key = Severity.CRITICAL, 'expired'
            elif days <= warning_days:
                severity, key = Severity.WARNING, 'expiring'
            else:
                continue

            alerts.append(Alert(
                severity=severity,
                message=self._message(key, type=cert_type, days=days),
                field=self.field,
                deadline=deadline_text(raw_expiry),
            ))

        return alerts
