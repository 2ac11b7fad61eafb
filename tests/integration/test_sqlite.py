"""Integration tests for Record against a real SQLite in-memory database.

Covers: create/find round trip, update, remove, filtered and raw reads,
NULL decoding and failure reporting end-to-end.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import pytest

from row_mapper.core.provider import ConnectionProvider
from row_mapper.core.sanitizer import SQLSanitizer
from row_mapper.mapping.model import ModelMapper
from row_mapper.record.base import Record

COLUMNS = ["NOMBRE", "EDAD", "GENERO"]


@dataclass
class Persona:
    id: int
    NOMBRE: str
    EDAD: int | None
    GENERO: str


def persona(provider: ConnectionProvider) -> Record:
    return Record(provider, "personas", COLUMNS)


def add(provider: ConnectionProvider, nombre: str, edad: str, genero: str) -> str:
    record = persona(provider)
    record.set("NOMBRE", nombre)
    record.set("EDAD", edad)
    record.set("GENERO", genero)
    assert record.save() is True
    return record.get("id")


class TestCrud:
    def test_create_then_find_round_trip(self, provider: ConnectionProvider) -> None:
        record = persona(provider)
        record.set("NOMBRE", "Ana")
        record.set("EDAD", "30")
        assert record.create() is True
        assert record.get("id") == "1"

        loaded = persona(provider)
        assert loaded.find(int(record.get("id"))) is True
        assert loaded.get("NOMBRE") == "Ana"
        assert loaded.get("EDAD") == "30"
        assert loaded.get("GENERO") == ""
        assert loaded.get("id") == "1"

    def test_find_missing(self, provider: ConnectionProvider) -> None:
        assert persona(provider).find(42) is False

    def test_save_after_find_updates(self, provider: ConnectionProvider) -> None:
        record_id = add(provider, "Ana", "30", "F")

        record = persona(provider)
        record.find(int(record_id))
        record.set("EDAD", "31")
        assert record.save() is True

        reloaded = persona(provider)
        reloaded.find(int(record_id))
        assert reloaded.get("EDAD") == "31"
        assert len(persona(provider).get_all()) == 1

    def test_remove(self, provider: ConnectionProvider) -> None:
        record_id = add(provider, "Ana", "30", "F")
        record = persona(provider)
        record.find(int(record_id))
        assert record.remove() is True
        assert record.is_bound is False
        assert persona(provider).find(int(record_id)) is False

    def test_update_unbound_record(self, provider: ConnectionProvider) -> None:
        assert persona(provider).update() is False
        assert persona(provider).remove() is False

    def test_quotes_in_values_are_stored_verbatim(self, provider: ConnectionProvider) -> None:
        record_id = add(provider, "O'Brien", "40", "M")
        record = persona(provider)
        record.find(int(record_id))
        assert record.get("NOMBRE") == "O'Brien"


class TestQueries:
    @pytest.fixture(autouse=True)
    def _seed(self, provider: ConnectionProvider) -> None:
        add(provider, "Ana", "30", "F")
        add(provider, "Mariana", "25", "F")
        add(provider, "Juan", "41", "M")

    def test_get_all(self, provider: ConnectionProvider) -> None:
        rows = persona(provider).get_all()
        assert [row["NOMBRE"] for row in rows] == ["Ana", "Mariana", "Juan"]
        assert rows[0] == {"id": "1", "NOMBRE": "Ana", "EDAD": "30", "GENERO": "F"}

    def test_where_substring(self, provider: ConnectionProvider) -> None:
        rows = persona(provider).where("NOMBRE", "ana").get_all()
        assert [row["NOMBRE"] for row in rows] == ["Ana", "Mariana"]

    def test_where_chained(self, provider: ConnectionProvider) -> None:
        rows = persona(provider).where("NOMBRE", "an").where("EDAD", "2").get_all()
        assert [row["NOMBRE"] for row in rows] == ["Mariana"]

    def test_where_no_match(self, provider: ConnectionProvider) -> None:
        assert persona(provider).where("NOMBRE", "zzz").get_all() == []
        assert persona(provider).where("NOMBRE", "zzz").first() == {}

    def test_first(self, provider: ConnectionProvider) -> None:
        assert persona(provider).where("GENERO", "M").first()["NOMBRE"] == "Juan"

    def test_raw_get_all(self, provider: ConnectionProvider) -> None:
        base = persona(provider).where("GENERO", "M")
        rows = base.raw("SELECT NOMBRE FROM personas ORDER BY NOMBRE DESC").get_all()
        assert rows == [{"NOMBRE": "Mariana"}, {"NOMBRE": "Juan"}, {"NOMBRE": "Ana"}]

    def test_raw_first(self, provider: ConnectionProvider) -> None:
        row = persona(provider).raw("SELECT NOMBRE FROM personas ORDER BY EDAD").first()
        assert row == {"NOMBRE": "Mariana"}

    def test_raw_with_sanitizer(self, provider: ConnectionProvider) -> None:
        record = Record(
            provider,
            "personas",
            COLUMNS,
            sanitizer=SQLSanitizer(allowed_verbs=frozenset({"SELECT"})),
        )
        assert record.raw("DELETE FROM personas").get_all() == []
        assert len(persona(provider).get_all()) == 3

    def test_null_decodes_to_empty(self, provider: ConnectionProvider) -> None:
        provider.execute_mutation("INSERT INTO personas (NOMBRE) VALUES ('Luis')")
        row = persona(provider).where("NOMBRE", "Luis").first()
        assert row == {"id": "4", "NOMBRE": "Luis", "EDAD": "", "GENERO": ""}

    def test_get_all_with_mapper(self, provider: ConnectionProvider) -> None:
        people = persona(provider).where("GENERO", "F").get_all(mapper=ModelMapper(Persona))
        assert people == [Persona(1, "Ana", 30, "F"), Persona(2, "Mariana", 25, "F")]


class TestFailures:
    def test_missing_table(
        self, provider: ConnectionProvider, caplog: pytest.LogCaptureFixture
    ) -> None:
        record = Record(provider, "nope", COLUMNS)
        record.set("NOMBRE", "Ana")
        with caplog.at_level(logging.ERROR, logger="row_mapper.record.base"):
            assert record.get_all() == []
            assert record.first() == {}
            assert record.find(1) is False
            assert record.create() is False
        assert "no such table" in caplog.text

    def test_unknown_column(self, provider: ConnectionProvider) -> None:
        record = persona(provider)
        record.set("APELLIDO", "Ruiz")
        assert record.create() is False
        assert persona(provider).get_all() == []

    def test_bad_raw_query(self, provider: ConnectionProvider) -> None:
        assert persona(provider).raw("SELEC nonsense").get_all() == []
