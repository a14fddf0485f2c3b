"""
Tests for the date-driven rules: document staleness, shelf-life expiry and
certification expiry.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from modules.compliance import Severity, get_default_schema
from modules.compliance.core.base import days_until, months_between, parse_date_value

from conftest import NOW


def _iso(moment: datetime) -> str:
    return moment.isoformat()


def _without(schema, path):
    for section in schema:
        for schema_field in section.fields:
            if schema_field.path == path:
                schema_field.active = False
    return schema


def _freshness_alerts(alerts):
    dated = {"identificazione.dataRedazione", "conservazione.tmcScadenza", "conformita.certificazioni"}
    return [a for a in alerts if a.field in dated and not a.message.startswith("Campo obbligatorio")]


class TestDateHelpers:

    @pytest.mark.parametrize("value", [
        "not-a-date", "", "   ", "2024-02-30", "24", "March", "Monday", "10:30", None, True, float("nan"), float("inf"), {"d": 1}, ["2024-01-01"],
    ])
    def test_unparseable_values(self, value):
        assert parse_date_value(value) is None

    def test_date_only_string_is_utc_midnight(self):
        assert parse_date_value("2024-01-15") == datetime(2024, 1, 15, tzinfo=timezone.utc)

    def test_offset_is_converted_to_utc(self):
        assert parse_date_value("2025-03-15T10:00:00+02:00") == datetime(2025, 3, 15, 8, tzinfo=timezone.utc)

    def test_free_form_string(self):
        assert parse_date_value("15 March 2025") == datetime(2025, 3, 15, tzinfo=timezone.utc)
        assert parse_date_value("March 2025") == datetime(2025, 3, 1, tzinfo=timezone.utc)

    def test_date_and_datetime_objects(self):
        assert parse_date_value(date(2025, 1, 2)) == datetime(2025, 1, 2, tzinfo=timezone.utc)
        assert parse_date_value(datetime(2025, 1, 2, 5)) == datetime(2025, 1, 2, 5, tzinfo=timezone.utc)

    def test_numbers_are_epoch_milliseconds(self):
        assert parse_date_value(86_400_000) == datetime(1970, 1, 2, tzinfo=timezone.utc)

    def test_days_until_rounds_partial_days_up(self):
        assert days_until(NOW + timedelta(hours=1), NOW) == 1
        assert days_until(NOW - timedelta(hours=1), NOW) == 0
        assert days_until(NOW - timedelta(days=1, hours=12), NOW) == -1

    def test_months_between_ignores_day_of_month(self):
        then = datetime(2025, 10, 31, tzinfo=timezone.utc)

        assert months_between(then, datetime(2026, 10, 1, tzinfo=timezone.utc)) == 12
        assert months_between(then, datetime(2026, 9, 30, tzinfo=timezone.utc)) == 11


class TestDocumentStaleness:

    def test_exactly_twelve_months_is_stale(self, engine, complete_record):
        now = datetime(2026, 10, 31, 12, tzinfo=timezone.utc)
        complete_record["identificazione"]["dataRedazione"] = "2025-10-31"

        alerts = engine.validate(complete_record, get_default_schema(), now=now)

        assert len(alerts) == 1
        assert alerts[0].severity == Severity.WARNING
        assert alerts[0].field == "identificazione.dataRedazione"
        assert "12" in alerts[0].message
        assert alerts[0].deadline is None

    def test_eleven_months_twenty_nine_days_is_not_stale(self, engine, complete_record):
        now = datetime(2026, 10, 31, 12, tzinfo=timezone.utc)
        complete_record["identificazione"]["dataRedazione"] = "2025-11-02"

        assert engine.validate(complete_record, get_default_schema(), now=now) == []

    def test_counts_calendar_months_not_days(self, engine, complete_record, now):
        # 351 days ago, but twelve calendar months apart
        complete_record["identificazione"]["dataRedazione"] = "2025-10-31"

        alerts = engine.validate(complete_record, get_default_schema(), now=now)

        assert [a.message for a in alerts] == ["Scheda non revisionata da 12 mesi"]

    def test_message_carries_month_count(self, engine, complete_record, now):
        complete_record["identificazione"]["dataRedazione"] = "2025-09-17"

        alerts = engine.validate(complete_record, get_default_schema(), now=now)

        assert alerts[0].message == "Scheda non revisionata da 13 mesi"

    def test_inactive_field_skips_staleness(self, engine, complete_record, now):
        complete_record["identificazione"]["dataRedazione"] = "2020-01-01"
        schema = _without(get_default_schema(), "identificazione.dataRedazione")

        assert engine.validate(complete_record, schema, now=now) == []


class TestShelfLifeExpiry:

    def test_yesterday_is_expired(self, engine, complete_record, now):
        yesterday = (now - timedelta(days=1)).date().isoformat()
        complete_record["conservazione"]["tmcScadenza"] = yesterday

        alerts = engine.validate(complete_record, get_default_schema(), now=now)

        assert len(alerts) == 1
        assert alerts[0].severity == Severity.CRITICAL
        assert alerts[0].message == "Prodotto scaduto"
        assert alerts[0].field == "conservazione.tmcScadenza"
        assert alerts[0].deadline == yesterday

    def test_earlier_today_is_expired(self, engine, complete_record, now):
        complete_record["conservazione"]["tmcScadenza"] = now.date().isoformat()

        alerts = engine.validate(complete_record, get_default_schema(), now=now)

        assert [a.severity for a in alerts] == [Severity.CRITICAL]

    def test_thirty_days_ahead_warns(self, engine, complete_record, now):
        expiry = _iso(now + timedelta(days=30))
        complete_record["conservazione"]["tmcScadenza"] = expiry

        alerts = engine.validate(complete_record, get_default_schema(), now=now)

        assert len(alerts) == 1
        assert alerts[0].severity == Severity.WARNING
        assert "30" in alerts[0].message
        assert alerts[0].deadline == expiry

    def test_thirty_one_days_ahead_is_fine(self, engine, complete_record, now):
        complete_record["conservazione"]["tmcScadenza"] = _iso(now + timedelta(days=31))

        assert engine.validate(complete_record, get_default_schema(), now=now) == []

    def test_partial_day_rounds_up(self, engine, complete_record, now):
        # 29.5 days away
        complete_record["conservazione"]["tmcScadenza"] = "2026-11-16"

        alerts = engine.validate(complete_record, get_default_schema(), now=now)

        assert alerts[0].message == "Prodotto in scadenza tra 30 giorni"

    def test_unparseable_date_is_ignored(self, engine, complete_record, now):
        complete_record["conservazione"]["tmcScadenza"] = "not-a-date"

        assert engine.validate(complete_record, get_default_schema(), now=now) == []

    @pytest.mark.parametrize("value", ["24", "March", "Monday"])
    def test_date_without_year_is_ignored(self, engine, complete_record, now, value):
        complete_record["conservazione"]["tmcScadenza"] = value

        assert engine.validate(complete_record, get_default_schema(), now=now) == []

    def test_epoch_milliseconds(self, engine, complete_record, now):
        expiry = int((now + timedelta(days=10)).timestamp() * 1000)
        complete_record["conservazione"]["tmcScadenza"] = expiry

        alerts = engine.validate(complete_record, get_default_schema(), now=now)

        assert alerts[0].message == "Prodotto in scadenza tra 10 giorni"
        assert alerts[0].deadline == str(expiry)

    def test_inactive_field_skips_expiry(self, engine, complete_record, now):
        complete_record["conservazione"]["tmcScadenza"] = "2020-01-01"
        schema = _without(get_default_schema(), "conservazione.tmcScadenza")

        assert engine.validate(complete_record, schema, now=now) == []

    def test_field_absent_from_schema_skips_expiry(self, engine, now):
        schema = [{
            "id": "conservazione",
            "title": "Conservazione",
            "fields": [{"name": "Condizioni stoccaggio", "mandatory": False, "active": True}],
        }]
        record = {"conservazione": {"tmcScadenza": "2020-01-01"}}

        assert engine.validate(record, schema, now=now) == []

    def test_missing_expiry_only_raises_mandatory_alert(self, engine, complete_record, now):
        complete_record["conservazione"]["tmcScadenza"] = ""

        alerts = engine.validate(complete_record, get_default_schema(), now=now)

        assert [(a.severity, a.field) for a in alerts] == [(Severity.WARNING, "conservazione.tmcScadenza")]
        assert _freshness_alerts(alerts) == []


class TestCertificationExpiry:

    def test_only_expired_certification_alerts(self, engine, complete_record, now):
        expired = (now - timedelta(days=10)).date().isoformat()
        complete_record["conformita"]["certificazioni"] = [
            {"tipo": "BRC", "scadenza": expired},
            {"tipo": "IFS", "scadenza": _iso(now + timedelta(days=400))},
        ]

        alerts = engine.validate(complete_record, get_default_schema(), now=now)

        assert len(alerts) == 1
        assert alerts[0].severity == Severity.CRITICAL
        assert alerts[0].message == 'Certificazione "BRC" scaduta'
        assert alerts[0].field == "conformita.certificazioni"
        assert alerts[0].deadline == expired

    def test_sixty_day_window(self, engine, complete_record, now):
        complete_record["conformita"]["certificazioni"] = [
            {"tipo": "ISO 22000", "scadenza": _iso(now + timedelta(days=45))},
            {"tipo": "BIO", "scadenza": _iso(now + timedelta(days=60))},
            {"tipo": "IFS", "scadenza": _iso(now + timedelta(days=61))},
        ]

        alerts = engine.validate(complete_record, get_default_schema(), now=now)

        assert [a.message for a in alerts] == [
            'Certificazione "ISO 22000" in scadenza tra 45 giorni',
            'Certificazione "BIO" in scadenza tra 60 giorni',
        ]
        assert all(a.severity == Severity.WARNING for a in alerts)

    def test_malformed_entries_are_skipped(self, engine, complete_record, now):
        complete_record["conformita"]["certificazioni"] = [
            "BRC until 2020",
            None,
            {"tipo": "IFS"},
            {"tipo": "BIO", "scadenza": ""},
            {"tipo": "HACCP", "scadenza": "garbage"},
        ]

        assert engine.validate(complete_record, get_default_schema(), now=now) == []

    def test_certification_without_type(self, engine, complete_record, now):
        complete_record["conformita"]["certificazioni"] = [{"scadenza": "2026-10-01"}, {"tipo": None, "scadenza": "2026-10-01"}]

        alerts = engine.validate(complete_record, get_default_schema(), now=now)

        assert [a.message for a in alerts] == ['Certificazione "n.d." scaduta'] * 2

    def test_non_list_certifications(self, engine, complete_record, now):
        complete_record["conformita"]["certificazioni"] = "BRC, IFS"

        assert engine.validate(complete_record, get_default_schema(), now=now) == []

    def test_same_path_alerts_are_not_deduplicated(self, engine, complete_record, now):
        complete_record["conformita"]["certificazioni"] = [
            {"tipo": "BRC", "scadenza": "2026-01-01"},
            {"tipo": "IFS", "scadenza": "2026-02-01"},
        ]

        alerts = engine.validate(complete_record, get_default_schema(), now=now)

        assert [a.message for a in alerts] == [
            'Certificazione "BRC" scaduta',
            'Certificazione "IFS" scaduta',
        ]


def test_end_to_end_scenario(engine, complete_record, now):
    complete_record["identificazione"]["dataRedazione"] = "2025-09-17"
    complete_record["conservazione"]["tmcScadenza"] = _iso(now + timedelta(days=5))
    complete_record["conformita"]["certificazioni"] = [{"tipo": "BRC", "scadenza": "2026-10-07"}]

    alerts = engine.validate(complete_record, get_default_schema(), now=now)

    assert [(a.severity, a.message) for a in alerts] == [
        (Severity.CRITICAL, 'Certificazione "BRC" scaduta'),
        (Severity.WARNING, "Scheda non revisionata da 13 mesi"),
        (Severity.WARNING, "Prodotto in scadenza tra 5 giorni"),
    ]
