"""Unit tests for statement builders."""

from __future__ import annotations

from row_mapper.record import statement as stmt
from row_mapper.record.statement import Filter, Statement, coerce_key, render_condition

COLUMNS = ["NOMBRE", "EDAD", "GENERO"]


class TestStatement:
    def test_render_without_params_is_sql(self) -> None:
        assert Statement("SELECT * FROM personas").render() == "SELECT * FROM personas"

    def test_str_renders(self) -> None:
        query = Statement("DELETE FROM personas WHERE id = :id", {"id": 4})
        assert str(query) == "DELETE FROM personas WHERE id = 4"


class TestCoerceKey:
    def test_integer_text(self) -> None:
        assert coerce_key("12") == 12

    def test_int_passthrough(self) -> None:
        assert coerce_key(12) == 12

    def test_non_numeric_kept_as_text(self) -> None:
        assert coerce_key("abc-1") == "abc-1"


class TestSelect:
    def test_select_by_id(self) -> None:
        query = stmt.select_by_id("personas", 5)
        assert query.sql == "SELECT * FROM personas WHERE id = :id LIMIT 1"
        assert query.params == {"id": 5}
        assert query.render() == "SELECT * FROM personas WHERE id = 5 LIMIT 1"

    def test_select_all(self) -> None:
        query = stmt.select("personas")
        assert query.sql == "SELECT * FROM personas"
        assert query.params == {}

    def test_select_with_filters(self) -> None:
        query = stmt.select("personas", [Filter("NOMBRE", "An"), Filter("GENERO", "F")])
        assert query.sql == "SELECT * FROM personas WHERE NOMBRE LIKE :w0 AND GENERO LIKE :w1"
        assert query.params == {"w0": "%An%", "w1": "%F%"}
        assert query.render() == (
            "SELECT * FROM personas WHERE NOMBRE LIKE '%An%' AND GENERO LIKE '%F%'"
        )

    def test_select_with_limit(self) -> None:
        query = stmt.select("personas", [Filter("NOMBRE", "An")], limit=1)
        assert query.render() == "SELECT * FROM personas WHERE NOMBRE LIKE '%An%' LIMIT 1"

    def test_raw_with_limit(self) -> None:
        query = stmt.raw("SELECT NOMBRE FROM personas", limit=1)
        assert query.sql == "SELECT NOMBRE FROM personas LIMIT 1"
        assert query.params == {}


class TestRenderCondition:
    def test_empty(self) -> None:
        assert render_condition(()) == ""

    def test_conjunction(self) -> None:
        filters = [Filter("f1", "v1"), Filter("f2", "v2")]
        assert render_condition(filters) == "f1 LIKE '%v1%' AND f2 LIKE '%v2%'"


class TestInsert:
    def test_personas_insert(self) -> None:
        query = stmt.insert("personas", COLUMNS, {"NOMBRE": "Ana", "EDAD": "30", "GENERO": ""})
        assert query.sql == "INSERT INTO personas (NOMBRE, EDAD, GENERO) VALUES (:v0, :v1, :v2)"
        assert query.params == {"v0": "Ana", "v1": "30", "v2": ""}
        assert query.render() == (
            "INSERT INTO personas (NOMBRE, EDAD, GENERO) VALUES ('Ana', '30', '')"
        )

    def test_missing_attribute_inserted_as_empty(self) -> None:
        query = stmt.insert("personas", ["NOMBRE"], {})
        assert query.params == {"v0": ""}


class TestUpdate:
    def test_id_excluded_from_set(self) -> None:
        attributes = {"id": "7", "NOMBRE": "Ana", "EDAD": "31", "GENERO": "F"}
        query = stmt.update("personas", ["id", *COLUMNS], attributes)
        assert query.sql == (
            "UPDATE personas SET NOMBRE = :v0, EDAD = :v1, GENERO = :v2 WHERE id = :id"
        )
        assert query.params == {"v0": "Ana", "v1": "31", "v2": "F", "id": 7}
        assert query.render() == (
            "UPDATE personas SET NOMBRE = 'Ana', EDAD = '31', GENERO = 'F' WHERE id = 7"
        )


class TestDelete:
    def test_delete(self) -> None:
        query = stmt.delete("personas", "7")
        assert query.sql == "DELETE FROM personas WHERE id = :id"
        assert query.render() == "DELETE FROM personas WHERE id = 7"
