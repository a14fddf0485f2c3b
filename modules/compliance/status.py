"""
Synoptic compliance status derived from a list of alerts.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable

from modules.compliance.core.base import Alert, Severity


class ComplianceStatus(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    OK = "ok"


STATUS_TEXT: Dict[ComplianceStatus, str] = {
    ComplianceStatus.CRITICAL: "Critico",
    ComplianceStatus.WARNING: "Attenzione",
    ComplianceStatus.OK: "Conforme",
}


@dataclass(frozen=True)
class OverallStatus:
    severity: ComplianceStatus
    text: str

    def to_dict(self) -> Dict[str, str]:
        return {'severity': self.severity.value, 'text': self.text}


def get_overall_status(alerts: Iterable[Alert]) -> OverallStatus:
    """Critical if any critical alert exists, else warning if any warning, else ok"""
    severities = {alert.severity for alert in alerts}

    if Severity.CRITICAL in severities:
        status = ComplianceStatus.CRITICAL
    elif Severity.WARNING in severities:
        status = ComplianceStatus.WARNING
    else:
        status = ComplianceStatus.OK

    return OverallStatus(severity=status, text=STATUS_TEXT[status])


def count_by_severity(alerts: Iterable[Alert]) -> Dict[str, int]:
    """Count alerts per severity, including severities with no alerts"""
    counts = {severity.value: 0 for severity in Severity}
    for alert in alerts:
        counts[alert.severity.value] += 1
    return counts
