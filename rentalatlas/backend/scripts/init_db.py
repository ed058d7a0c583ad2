# scripts/init_db.py
import argparse
import asyncio

from app.db import engine
from app.models import Base


async def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--drop", action="store_true", help="Drop all tables first (destroys data)")
    args = parser.parse_args()

    async with engine.begin() as conn:
        if args.drop:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    print(f"OK: tables ready (drop={args.drop}): {', '.join(sorted(Base.metadata.tables))}")


if __name__ == "__main__":
    asyncio.run(main())
