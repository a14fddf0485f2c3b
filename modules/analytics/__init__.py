"""
Alerts Analytics Module.

Cross-supplier aggregation of compliance alerts.

Quick Start:
    >>> from modules.analytics import AlertsDashboardService
    >>> service = AlertsDashboardService()
    >>> alerts = await service.collect_alerts(suppliers_data, schema)
    >>> service.build_dashboard(alerts)["summary"]
    {'critical': 2, 'warning': 5, 'products_with_alerts': 3}
"""

from modules.analytics.alerts_dashboard import (
    AlertsDashboardService,
    EnrichedAlert,
    enrich_alerts,
    product_display_name,
)

__all__ = [
    "AlertsDashboardService",
    "EnrichedAlert",
    "enrich_alerts",
    "product_display_name",
]

__version__ = "1.0.0"
