"""
Example 01: Record CRUD

This example demonstrates creating, finding, updating and removing a row
with Record over a temporary SQLite database.
"""

from row_mapper import ConnectionConfig, ConnectionProvider, Record
import logging
import tempfile
from pathlib import Path


def main():
    # Failed statements are reported on the row_mapper loggers
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    config = ConnectionConfig(driver="sqlite", database=db_path)
    with ConnectionProvider.from_config(config) as provider:
        provider.execute_mutation("""
            CREATE TABLE personas (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                NOMBRE TEXT,
                EDAD INTEGER,
                GENERO TEXT
            )
        """)

        print("=== Create ===\n")
        ana = Record(provider, "personas", ["NOMBRE", "EDAD", "GENERO"])
        ana.set("NOMBRE", "Ana")
        ana.set("EDAD", "30")
        print(f"create(): {ana.create()}  -> id {ana.get('id')}\n")

        print("=== Find ===\n")
        loaded = Record(provider, "personas", ["NOMBRE", "EDAD", "GENERO"])
        if loaded.find(int(ana.get("id"))):
            print(f"Found: {loaded.attributes}\n")

        print("=== Update via save() ===\n")
        loaded.set("EDAD", "31")
        print(f"save(): {loaded.save()}")
        print(f"Now: {loaded.attributes}\n")

        print("=== Remove ===\n")
        print(f"remove(): {loaded.remove()}")
        print(f"remove() again (no id): {loaded.remove()}\n")

    Path(db_path).unlink()


if __name__ == "__main__":
    main()
