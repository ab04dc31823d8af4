import asyncio
import sys
from pathlib import Path

"""
Seed the two sample cocktails into an empty store.

This script can be run from either:
- backend/: `python scripts/seed_cocktails.py`
- repo root: `python backend/scripts/seed_cocktails.py`
"""

# Allow running from repo root by ensuring `backend/` is on sys.path
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from db.database import async_session_maker, create_db_and_tables
from db.seed import seed_initial_cocktails
import db.cocktail  # noqa: F401  registers the table


async def main() -> None:
    await create_db_and_tables()
    async with async_session_maker() as session:
        added = await seed_initial_cocktails(session)
    if added:
        print(f"Seeded {added} cocktails.")
    else:
        print("Store already has cocktails, nothing seeded.")


if __name__ == "__main__":
    asyncio.run(main())
