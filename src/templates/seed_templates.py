from __future__ import annotations

import argparse

from src.accounts.directory import TEMPLATES_COLLECTION
from src.storage.sqlite_record_store import SQLiteRecordStore
from src.templates.fixtures.templates import DEFAULT_TEMPLATES


def main(argv=None):
    parser = argparse.ArgumentParser(description="Write the default template catalog into the record store")
    parser.add_argument("--db", required=True, help="Path to sqlite db file, e.g. data/prompt_designer.db")
    args = parser.parse_args(argv)

    store = SQLiteRecordStore(args.db)
    store.write_all(TEMPLATES_COLLECTION, DEFAULT_TEMPLATES)

    print(f"Seeded {len(DEFAULT_TEMPLATES)} templates into {args.db}")


if __name__ == "__main__":
    main()
