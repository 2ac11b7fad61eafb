"""
Example 02: Filtered and Raw Queries

This example demonstrates chaining where() filters, overriding the SELECT
with raw(), and projecting rows onto a dataclass with ModelMapper.
"""

from row_mapper import ConnectionConfig, ConnectionProvider, ModelMapper, Record, SQLSanitizer
from dataclasses import dataclass
from typing import Optional


@dataclass
class Persona:
    """Persona entity"""
    id: int
    NOMBRE: str
    EDAD: Optional[int]
    GENERO: str


def main():
    config = ConnectionConfig(driver="sqlite", database=":memory:")
    with ConnectionProvider.from_config(config) as provider:
        provider.execute_mutation(
            "CREATE TABLE personas (id INTEGER PRIMARY KEY, NOMBRE TEXT, EDAD INTEGER, GENERO TEXT)"
        )
        personas = Record(
            provider,
            "personas",
            ["NOMBRE", "EDAD", "GENERO"],
            sanitizer=SQLSanitizer(allowed_verbs=frozenset({"SELECT"})),
        )
        for nombre, edad, genero in [("Ana", "30", "F"), ("Mariana", "25", "F"), ("Juan", "41", "M")]:
            row = Record(provider, "personas", ["NOMBRE", "EDAD", "GENERO"])
            row.set("NOMBRE", nombre)
            row.set("EDAD", edad)
            row.set("GENERO", genero)
            row.save()

        print("=== get_all() ===\n")
        for reg in personas.get_all():
            print(f"ID: {reg['id']}, Nombre: {reg['NOMBRE']}")
        print()

        print("=== where() chaining ===\n")
        mujeres = personas.where("GENERO", "F")
        print(f"condition: {mujeres.condition}")
        print(f"rows: {mujeres.get_all()}")
        ana = mujeres.where("NOMBRE", "Ana")
        print(f"condition: {ana.condition}")
        print(f"first(): {ana.first()}")
        print(f"base record untouched: {personas.condition!r}\n")

        print("=== raw() ===\n")
        oldest = personas.raw("SELECT NOMBRE, EDAD FROM personas ORDER BY EDAD DESC")
        print(f"first(): {oldest.first()}")
        print(f"rejected by sanitizer: {personas.raw('DELETE FROM personas').get_all()}\n")

        print("=== ModelMapper ===\n")
        for persona in mujeres.get_all(mapper=ModelMapper(Persona)):
            print(f"  - {persona}")


if __name__ == "__main__":
    main()
