#!/usr/bin/env python3
"""
Script to load a flock from a CSV file.

Expected columns: tag, sex, name, birth_date (YYYY-MM-DD), group_id.
Only tag and sex are required. Rows whose tag already exists are skipped.

Usage:
  python scripts/import_flock.py --csv rebanho.csv [--local-store data/rebanho.json]
"""

import asyncio
import csv
import sys
from pathlib import Path
from uuid import UUID

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.application.errors import AppError, ConflictError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.sheep import create_sheep
from src.config.settings import get_settings
from src.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)
from src.infrastructure.local_store.document_store import LocalDocumentStore
from src.infrastructure.local_store.unit_of_work import LocalUnitOfWork
from src.utils.local_dates import parse_local_date


def row_to_input(row: dict[str, str]) -> create_sheep.CreateSheepInput:
    group = (row.get("group_id") or "").strip()
    return create_sheep.CreateSheepInput(
        tag=(row.get("tag") or "").strip(),
        sex=(row.get("sex") or "").strip().upper(),
        name=(row.get("name") or "").strip() or None,
        birth_date=parse_local_date((row.get("birth_date") or "").strip() or None),
        group_id=UUID(group) if group else None,
    )


async def import_rows(uow: UnitOfWork, rows: list[dict[str, str]]) -> tuple[int, int, list[str]]:
    """Create each row's sheep; returns (created, skipped, errors)."""
    created = skipped = 0
    errors: list[str] = []
    for line, row in enumerate(rows, start=2):
        try:
            await create_sheep.execute(uow, row_to_input(row))
            created += 1
        except ConflictError:
            skipped += 1
        except (AppError, ValueError) as exc:
            errors.append(f"line {line}: {exc}")
    return created, skipped, errors


async def run(csv_path: Path, local_store: str | None) -> int:
    with csv_path.open(encoding="utf-8", newline="") as fh:
        rows = list(csv.DictReader(fh))

    if local_store:
        uow = LocalUnitOfWork(LocalDocumentStore(local_store))
        async with uow:
            created, skipped, errors = await import_rows(uow, rows)
    else:
        engine = create_engine(get_settings().database_url)
        session_factory = create_session_factory(engine)
        try:
            created, skipped, errors = 0, 0, []
            # One session per row so a duplicate tag does not poison the rest
            for row in rows:
                uow = SQLAlchemyUnitOfWork(session_factory)
                async with uow:
                    c, s, e = await import_rows(uow, [row])
                created, skipped, errors = created + c, skipped + s, errors + e
        finally:
            await engine.dispose()

    print(f"\n✅ Created: {created}")
    print(f"ℹ️  Skipped (tag exists): {skipped}")
    for message in errors:
        print(f"❌ {message}")
    return 1 if errors else 0


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Import sheep from a CSV file")
    parser.add_argument("--csv", required=True, help="Path to the CSV file")
    parser.add_argument("--local-store", help="Write to this JSON store instead of the database")

    args = parser.parse_args()

    print("=" * 60)
    print("🐑 Flock importer")
    print("=" * 60)

    sys.exit(asyncio.run(run(Path(args.csv), args.local_store)))
