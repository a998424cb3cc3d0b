#!/usr/bin/env python3
"""
Quick Start - Store, read and update nested values.

Usage:
    python examples/quick_start.py [path/to/db.bdb]
"""

import sys

from bindb import Store, StoreConfig
from bindb.logging_utils import setup_logging


def main():
    setup_logging()
    path = sys.argv[1] if len(sys.argv) > 1 else "quick_start.bdb"

    with Store(StoreConfig(file_path=path)) as db:
        db.set("user.profile", {"name": "Ada", "role": "admin"})
        db.set("user.settings.theme", "dark")
        print(f"Profile: {db.get('user.profile')}")
        print(f"Theme: {db.get('user.settings.theme')}")

        # Counters start from zero
        db.add("user.visits", 1)
        print(f"Visits: {db.add('user.visits', 1)}")

        # Lists
        db.push("user.tags", "python")
        db.push("user.tags", "rust")
        db.push("user.tags", "go")
        print(f"Tags: {db.pull('user.tags', lambda tag: tag == 'rust')}")
        print(f"First tag: {db.get('user.tags[0]')}")

        # Missing paths fall back to the default
        print(f"Language: {db.get('user.settings.language', 'en')}")

        print()
        print("All entries:")
        for entry in db.all():
            print(f"  {entry['ID']}: {entry['data']}")

        db.delete("user.settings")
        print(f"Has settings: {db.has('user.settings')}")


if __name__ == "__main__":
    main()
