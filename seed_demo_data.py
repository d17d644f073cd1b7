"""
Load the demo users, offerings and applications into the configured store.
Run from the project root: python seed_demo_data.py
"""
import asyncio

from dotenv import load_dotenv

load_dotenv()

from app.dependencies import get_db  # noqa: E402
from app.seed import seed_demo_data  # noqa: E402


async def main():
    db = get_db()
    print(f"Seeding {type(db).__name__}...")
    await seed_demo_data(db)
    offerings = await db.list_offerings()
    print(f"Done! Total offerings: {len(offerings)}")


if __name__ == "__main__":
    asyncio.run(main())
