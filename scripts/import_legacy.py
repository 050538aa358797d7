#!/usr/bin/env python3
"""
Script to import an animal export from the previous herd application.

The export is a JSON array of animal records (camelCase keys, as the old
client stored them). Every record is upserted by id for the given owner in
one batch.

Usage:
  python scripts/import_legacy.py --owner-id farm-01 --file animals.json [--strict]
"""

import asyncio
import json
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.application.errors import AppError
from src.application.herd_store import HerdStore
from src.application.use_cases.animals import import_animals
from src.config.settings import get_settings
from src.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)


async def import_file(owner_id: str, path: Path, strict: bool) -> int:
    records = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(records, list):
        print("❌ Error: the export must be a JSON array of animal records")
        return 1

    settings = get_settings()
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)

    try:
        store = HerdStore(lambda: SQLAlchemyUnitOfWork(session_factory), owner_id)
        await store.load()
        print(f"ℹ️  Owner {owner_id} currently has {len(store.snapshot)} animal(s)")

        result = await import_animals.execute(store, records, strict=strict)

        print(f"\n✅ Imported {len(result.imported)} record(s)")
        for skipped in result.skipped:
            print(f"   ⚠️  Skipped record {skipped['index']}: {skipped['reason']}")
    except AppError as exc:
        print(f"\n❌ Import failed: {exc.message}")
        return 1
    finally:
        await engine.dispose()
    return 0


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Import a legacy animal export")
    parser.add_argument("--owner-id", required=True, help="Owner the records belong to")
    parser.add_argument("--file", required=True, type=Path, help="Path to the JSON export")
    parser.add_argument(
        "--strict", action="store_true", help="Abort on the first record that does not parse"
    )

    args = parser.parse_args()
    if not args.file.exists():
        print(f"❌ Error: '{args.file}' does not exist")
        sys.exit(1)

    print("=" * 60)
    print("🚀 Legacy Import - Herd Records")
    print("=" * 60)

    sys.exit(asyncio.run(import_file(args.owner_id, args.file, args.strict)))
