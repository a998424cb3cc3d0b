#!/usr/bin/env python3
"""
Massive Data - Time bulk inserts and path lookups.

Inserts many keys with auto_save off, saves once, then times nested and
indexed reads. With --uncached every operation re-reads the file, so
auto_save stays on; otherwise the inserts would never reach the file.

Usage:
    python examples/massive_data.py [--items 10000] [--path massive-data.bdb]
"""

import argparse
import os
import time

from bindb import Store, StoreConfig
from bindb.logging_utils import setup_logging


def timed(name, operation):
    start = time.perf_counter()
    result = operation()
    elapsed = (time.perf_counter() - start) * 1000
    print(f"{name} took {elapsed:.3f} ms")
    return result


def populate(db, item_count):
    for i in range(item_count):
        db.set(f"key{i}", f"value{i}")
        if i % 1000 == 0 and i > 0:
            print(f"Inserted {i} items...")

    for i in range(100):
        db.set(
            f"nested.data{i}",
            {
                "id": i,
                "name": f"Item {i}",
                "tags": [f"tag{j}" for j in range(20)],
                "metadata": {
                    "created": time.time(),
                    "status": "active" if i % 2 == 0 else "inactive",
                },
            },
        )

    db.set(
        "massive-array",
        [
            {"index": i, "value": f"array-item-{i}", "nested": {"data": f"nested-{i}"}}
            for i in range(1000)
        ],
    )
    db.set(
        "users",
        [
            {"id": 1, "name": "User 1", "profile": {"age": 25, "role": "admin"}},
            {"id": 2, "name": "User 2", "profile": {"age": 30, "role": "user"}},
            {"id": 3, "name": "User 3", "profile": {"age": 35, "role": "moderator"}},
        ],
    )


def open_store(path, uncached=False, backend=None):
    """Open the timing store; uncached mode must auto-save to keep writes."""
    config = StoreConfig(file_path=path, auto_save=uncached, cache_data=not uncached)
    return Store(config, backend=backend)


def main():
    parser = argparse.ArgumentParser(description="bindb bulk timing")
    parser.add_argument("--items", type=int, default=10000, help="Number of keys")
    parser.add_argument("--path", default="massive-data.bdb", help="Database file")
    parser.add_argument(
        "--uncached",
        action="store_true",
        help="Re-read the file on every operation (writes are saved immediately)",
    )
    args = parser.parse_args()

    setup_logging()

    db = open_store(args.path, uncached=args.uncached)

    print(f"Writing {args.items} items to database...")
    timed("Insertion", lambda: populate(db, args.items))
    timed("Database save", db.save)

    print("\nTesting data retrieval:")
    timed("Get key100", lambda: db.get("key100"))
    timed("Get nested.data50", lambda: db.get("nested.data50"))
    timed("Get massive-array[500]", lambda: db.get("massive-array[500]"))
    timed("Get users[1].profile.role", lambda: db.get("users[1].profile.role"))

    print("\nTesting non-existent paths:")
    timed("Get missing path", lambda: db.get("this.path.does.not.exist"))
    timed("Get missing index", lambda: db.get("users[10].name"))

    print("\nDatabase statistics:")
    print(f"Total keys at root level: {len(db)}")
    print(f"File size: {os.path.getsize(args.path) / 1024:.1f} KiB")


if __name__ == "__main__":
    main()
