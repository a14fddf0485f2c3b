"""
Alerts dashboard service.

Validates every stored product spec sheet of every supplier, tags each alert
with the product, supplier and customer it belongs to, and summarises the
result for cross-supplier reporting.
"""

import asyncio
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from modules.compliance.core.base import Alert, Severity, get_field_value, parse_date_value
from modules.compliance.engine import ComplianceEngine, get_default_engine
from modules.compliance.schema.models import Section, parse_schema
from shared.utils.config import settings
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class EnrichedAlert:
    """An alert denormalised with its product, supplier and customer"""
    severity: Severity
    message: str
    field: str
    product_id: str
    product_name: str
    supplier_name: str
    customer_name: str
    saved_at: str
    deadline: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['severity'] = self.severity.value
        return data


def product_display_name(product: Dict[str, Any], product_id: str) -> str:
    """Sheet name, else legal name, else the product id"""
    for path in ('identificazione.denominazioneScheda', 'descrizione.denominazioneLegale'):
        value = get_field_value(product, path)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return product_id


def enrich_alerts(
    alerts: List[Alert],
    product: Dict[str, Any],
    supplier_name: str,
    customer_name: str,
    saved_at: Optional[str] = None,
    product_id: Optional[str] = None,
) -> List[EnrichedAlert]:
    """
    Attach product, supplier and customer identifiers to alerts.

    Args:
        alerts: Alerts of one product
        product: The validated product record
        supplier_name: Supplier display name
        customer_name: Customer display name
        saved_at: ISO timestamp the product was saved at
        product_id: Overrides the record's own ``id``

    Returns:
        Enriched alerts in the same order
    """
    pid = str(product_id or product.get('id') or '')
    name = product_display_name(product, pid)
    saved = saved_at or str(product.get('savedAt') or '')

    return [
        EnrichedAlert(
            severity=alert.severity,
            message=alert.message,
            field=alert.field,
            deadline=alert.deadline,
            product_id=pid,
            product_name=name,
            supplier_name=supplier_name,
            customer_name=customer_name,
            saved_at=saved,
        )
        for alert in alerts
    ]


class AlertsDashboardService:
    """
    Builds the cross-supplier alerts dashboard.

    Input data layout (one entry per customer folder):
        {
            "<customerSlug>": {
                "suppliers": {
                    "<supplierSlug>": {
                        "name": "Supplier S.p.A.",
                        "pdfs": {"<productId>": {...product, "savedAt": "..."}}
                    }
                }
            }
        }

    Example:
        >>> service = AlertsDashboardService()
        >>> alerts = await service.collect_alerts(data, schema)
        >>> service.build_dashboard(alerts)["summary"]["critical"]
        3
    """

    def __init__(
        self,
        engine: Optional[ComplianceEngine] = None,
        max_concurrency: Optional[int] = None
    ):
        self.engine = engine or get_default_engine()
        self.max_concurrency = max(1, max_concurrency or settings.DASHBOARD_MAX_CONCURRENCY)

    async def collect_alerts(
        self,
        suppliers_data: Dict[str, Any],
        schema: Any,
        customer_names: Optional[Dict[str, str]] = None,
        now: Optional[datetime] = None
    ) -> List[EnrichedAlert]:
        """
        Validate every product and return the enriched alerts.

        Args:
            suppliers_data: Customer folders with their suppliers and products
            schema: Schema applied to every product
            customer_names: Display names by customer slug (defaults to the slug)
            now: Reference time for the freshness rules

        Returns:
            Enriched alerts grouped by product in input order
        """
        sections: List[Section] = parse_schema(schema)
        customer_names = customer_names or {}
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def validate_product(product: Dict[str, Any], product_id: str,
                                   supplier_name: str, customer_name: str) -> List[EnrichedAlert]:
            async with semaphore:
                alerts = await asyncio.to_thread(self.engine.validate, product, sections, now)
            return enrich_alerts(alerts, product, supplier_name, customer_name, product_id=product_id)

        tasks = []
        labels = []
        if not isinstance(suppliers_data, dict):
            logger.warning("Skipping malformed suppliers data")
            suppliers_data = {}

        for customer_slug, customer_data in suppliers_data.items():
            if not isinstance(customer_data, dict):
                logger.warning(f"Skipping malformed customer folder: {customer_slug}")
                continue

            customer_name = customer_names.get(customer_slug, customer_slug)
            suppliers = customer_data.get('suppliers') or {}
            if not isinstance(suppliers, dict):
                logger.warning(f"Skipping malformed supplier list: {customer_slug}")
                continue

            for supplier_slug, supplier in suppliers.items():
                if not isinstance(supplier, dict):
                    logger.warning(f"Skipping malformed supplier: {customer_slug}/{supplier_slug}")
                    continue

                supplier_name = supplier.get('name') or supplier_slug
                products = supplier.get('pdfs') or {}
                if not isinstance(products, dict):
                    logger.warning(f"Skipping malformed product list: {customer_slug}/{supplier_slug}")
                    continue

                for product_id, product in products.items():
                    if not isinstance(product, dict):
                        continue
                    tasks.append(validate_product(product, str(product_id), supplier_name, customer_name))
                    labels.append(f"{customer_slug}/{supplier_slug}/{product_id}")

        logger.info(f"Validating {len(tasks)} products for alerts dashboard")
        results = await asyncio.gather(*tasks, return_exceptions=True)

        collected: List[EnrichedAlert] = []
        for label, result in zip(labels, results):
            if isinstance(result, Exception):
                logger.error(f"Failed to validate product {label}: {result}")
                continue
            collected.extend(result)

        return collected

    def build_dashboard(self, alerts: List[EnrichedAlert]) -> Dict[str, Any]:
        """
        Summarise enriched alerts.

        Returns:
            {"summary": {...}, "alerts": [...most recently saved first]}
        """
        def saved_key(alert: EnrichedAlert) -> datetime:
            return parse_date_value(alert.saved_at) or _EPOCH

        ordered = sorted(alerts, key=saved_key, reverse=True)

        summary = {
            'critical': sum(1 for a in alerts if a.severity == Severity.CRITICAL),
            'warning': sum(1 for a in alerts if a.severity == Severity.WARNING),
            'products_with_alerts': len({a.product_id for a in alerts}),
        }

        return {
            'summary': summary,
            'alerts': [a.to_dict() for a in ordered],
            'metadata': {
                'generated_at': datetime.now(timezone.utc).isoformat(),
                'total_alerts': len(alerts),
            }
        }
