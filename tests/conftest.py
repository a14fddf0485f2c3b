"""
Shared fixtures for the compliance test suite.
"""

import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Console logging only while testing
os.environ.setdefault("DEBUG", "true")

from modules.compliance import ComplianceEngine  # noqa: E402
from modules.compliance.schema import STANDARD_SECTIONS  # noqa: E402


NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


def build_complete_record() -> dict:
    """A record with every standard field filled and nothing close to expiry"""
    record: dict = {"id": "CEL-0001"}
    for section_id, section in STANDARD_SECTIONS.items():
        record[section_id] = {field_id: f"{definition.label} value" for field_id, definition in section.fields.items()}

    record["identificazione"]["denominazioneScheda"] = "Frollini al burro"
    record["identificazione"]["dataRedazione"] = "2026-06-01"
    record["identificazione"]["numeroRevisione"] = 3
    record["conservazione"]["tmcScadenza"] = "2027-12-31"
    record["conformita"]["certificazioni"] = [{"tipo": "IFS", "scadenza": "2028-01-31"}]
    return record


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def engine() -> ComplianceEngine:
    return ComplianceEngine()


@pytest.fixture
def complete_record() -> dict:
    return build_complete_record()


@pytest.fixture
def single_field_schema():
    """Factory for a one-section, one-field schema in its stored dict form"""
    def _build(mandatory=True, critical=False, active=True):
        return [{
            "id": "sectionA",
            "title": "Section A",
            "fields": [{
                "name": "Field X",
                "mandatory": mandatory,
                "critical": critical,
                "active": active,
                "path": "sectionA.fieldX",
            }],
        }]
    return _build
