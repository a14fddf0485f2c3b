"""
Tests for the standard schema, schema parsing and the custom schema store.
"""

import json

import pytest

from modules.compliance.exceptions import SchemaStoreError
from modules.compliance.schema import (
    STANDARD_LABEL_PATHS,
    STANDARD_SECTIONS,
    SchemaField,
    SchemaStore,
    Section,
    active_paths,
    flattened_headers,
    get_default_schema,
    parse_schema,
    schema_to_dict,
)


class TestStandardSchema:

    def test_default_schema_mirrors_standard(self):
        schema = get_default_schema()

        assert [s.id for s in schema] == list(STANDARD_SECTIONS)
        assert all(f.active for s in schema for f in s.fields)
        assert schema[0].fields[0] == SchemaField(
            name="Produttore",
            mandatory=True,
            critical=False,
            active=True,
            path="identificazione.produttore",
            priority="Obbligatoria",
        )

    def test_default_schema_is_a_fresh_copy(self):
        first = get_default_schema()
        first[0].fields[0].active = False

        assert get_default_schema()[0].fields[0].active is True

    def test_label_paths(self):
        assert STANDARD_LABEL_PATHS["Allergeni"] == "descrizione.allergeni"
        assert STANDARD_LABEL_PATHS["TMC/Scadenza"] == "conservazione.tmcScadenza"
        assert len(STANDARD_LABEL_PATHS) == 39

    def test_standard_is_read_only(self):
        with pytest.raises(TypeError):
            STANDARD_SECTIONS["extra"] = None

    def test_flattened_headers(self):
        headers = flattened_headers()

        assert len(headers) == 39
        assert headers[0] == {"section": "Identificazione", "field": "Produttore", "key": "identificazione.produttore"}
        assert headers[-1]["key"] == "conformita.origineIngredienti"


class TestParseSchema:

    def test_round_trip(self):
        schema = get_default_schema()
        schema[1].fields[2].active = False

        assert parse_schema(schema_to_dict(schema)) == schema

    def test_sections_pass_through(self):
        schema = get_default_schema()

        assert parse_schema(schema) == schema

    def test_not_a_list(self):
        assert parse_schema({"id": "x"}) == []
        assert parse_schema(None) == []

    def test_defaults_and_coercion(self):
        schema = parse_schema([{
            "id": "descrizione",
            "fields": [{"name": "Ingredienti", "mandatory": "true"}],
        }])

        assert schema == [Section(
            id="descrizione",
            title="descrizione",
            fields=[SchemaField(
                name="Ingredienti",
                mandatory=True,
                critical=False,
                active=True,
                path="descrizione.ingredienti",
            )],
        )]

    def test_malformed_fields_are_skipped(self):
        schema = parse_schema([{
            "id": "sectionA",
            "title": "A",
            "fields": [None, "x", {"mandatory": True}, {"name": ""}, {"name": "Ok", "path": "sectionA.ok"}],
        }])

        assert [f.name for f in schema[0].fields] == ["Ok"]

    def test_active_paths(self):
        schema = parse_schema([{
            "id": "sectionA",
            "title": "A",
            "fields": [
                {"name": "On", "path": "sectionA.on"},
                {"name": "Off", "path": "sectionA.off", "active": False},
                {"name": "No path"},
            ],
        }])

        assert active_paths(schema) == {"sectionA.on"}


class TestSchemaStore:

    def test_missing_file_serves_standard(self, tmp_path):
        store = SchemaStore(str(tmp_path / "schema.json"))

        assert store.load() == get_default_schema()

    def test_save_and_load(self, tmp_path):
        store = SchemaStore(str(tmp_path / "nested" / "schema.json"))
        schema = get_default_schema()
        schema[3].fields[0].active = False

        store.save(schema)

        assert store.load() == schema

    def test_corrupt_file_serves_standard(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text("{not json")

        assert SchemaStore(str(path)).load() == get_default_schema()

    def test_empty_schema_serves_standard(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text("[]")

        assert SchemaStore(str(path)).load() == get_default_schema()

    def test_legacy_payload_without_paths(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps([{
            "id": "sicurezza",
            "title": "Sicurezza & Microbiologia",
            "fields": [{"name": "Listeria", "mandatory": True, "critical": True, "active": False}],
        }]))

        schema = SchemaStore(str(path)).load()

        assert schema[0].fields[0].path == "sicurezza.listeria"
        assert schema[0].fields[0].active is False

    def test_reset(self, tmp_path):
        store = SchemaStore(str(tmp_path / "schema.json"))
        schema = get_default_schema()
        schema[0].fields[0].active = False
        store.save(schema)

        store.reset()

        assert store.load() == get_default_schema()
        store.reset()

    def test_save_failure_raises(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        store = SchemaStore(str(blocker / "schema.json"))

        with pytest.raises(SchemaStoreError):
            store.save(get_default_schema())
