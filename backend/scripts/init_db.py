"""
Initialize the database: create all tables and load reference data.
Run with: python -m scripts.init_db
Run with: python -m scripts.init_db --no-seed  (tables only)
"""

import argparse
import asyncio
from impacts.database import engine, async_session, Base
from impacts.seed import seed_reference_data
import impacts.models  # noqa: F401


async def init(seed: bool = True):
    print("Creating database tables...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("All tables created successfully.")
    if seed:
        async with async_session() as session:
            await seed_reference_data(session)
        print("Reference data loaded.")
    await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create IMPACTS tables and seed reference data")
    parser.add_argument("--no-seed", action="store_true", help="Only create tables")
    args = parser.parse_args()

    asyncio.run(init(seed=not args.no_seed))
