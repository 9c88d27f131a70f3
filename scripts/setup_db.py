"""
Database setup script - creates tables and seeds the default categories
"""
import asyncio
from sqlalchemy import select

from asset_manager.database import engine, Base, AsyncSessionLocal
from asset_manager.models.category import Category

DEFAULT_CATEGORIES = [
    ("Laptops", "Portable computers issued to staff"),
    ("Monitors", "Displays and screens"),
    ("Furniture", "Desks, chairs and storage"),
    ("Networking", "Routers, switches and access points"),
    ("Software", "Licenses and SaaS subscriptions"),
]


async def setup_database():
    """Create tables and seed initial data"""
    print("Creating database tables...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("Tables created")

    async with AsyncSessionLocal() as session:
        result = await session.execute(select(Category.name))
        existing = set(result.scalars().all())

        added = 0
        for name, description in DEFAULT_CATEGORIES:
            if name not in existing:
                session.add(Category(name=name, description=description))
                added += 1

        await session.commit()
        print(f"Seeded {added} categories")

    await engine.dispose()
    print("\nDatabase setup complete!")


if __name__ == "__main__":
    asyncio.run(setup_database())
