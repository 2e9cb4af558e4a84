#!/usr/bin/env python3
"""Initialize the inventory MongoDB database.

Creates the ingredients, menu_items and orders collections with schema
validation and indexes.

Usage:
    python scripts/init_inventory_db.py

Environment:
    MONGODB_URI: MongoDB connection string (required, replica set)
    MONGODB_DATABASE: Database name (default: inventory)
"""

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from infrastructure.config import get_mongodb_database, get_mongodb_uri  # noqa: E402
from infrastructure.persistence.mongodb import create_mongo_client  # noqa: E402
from infrastructure.persistence.mongodb.setup import ensure_inventory_schema  # noqa: E402


async def init_inventory_db() -> None:
    mongodb_uri = get_mongodb_uri()
    if not mongodb_uri:
        print("❌ Error: MONGODB_URI environment variable not set")
        print("   Set it in .env or export it:")
        print('   export MONGODB_URI="mongodb+srv://..."')
        sys.exit(1)

    print("🔗 Connecting to MongoDB...")
    print(f"   URI: {mongodb_uri.split('@')[1] if '@' in mongodb_uri else 'localhost'}")

    client = create_mongo_client()
    try:
        await client.admin.command("ping")
        print("✅ Connected successfully!")
    except Exception as e:
        print(f"❌ Connection failed: {e}")
        sys.exit(1)

    db = client[get_mongodb_database()]
    created = await ensure_inventory_schema(db)
    for name in created:
        print(f"   ✅ Collection '{name}' created with schema validation")

    print("\n📋 Database summary:")
    for coll_name in await db.list_collection_names():
        count = await db[coll_name].count_documents({})
        print(f"   - {coll_name}: {count} documents")

    client.close()
    print("\n✅ Connection closed.")


if __name__ == "__main__":
    load_dotenv()

    print("=" * 50)
    print("Inventory Database Initialization Script")
    print("=" * 50)
    asyncio.run(init_inventory_db())
