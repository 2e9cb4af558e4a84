"""Collection setup for the inventory database.

Creates collections with schema validation and indexes. Existing
collections are left untouched, so running it twice is harmless.
"""

from typing import Any, Dict, List
import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

logger = logging.getLogger(__name__)

NUMBER = {"bsonType": ["double", "int", "long", "decimal"]}

COLLECTION_VALIDATORS: Dict[str, Dict[str, Any]] = {
    "ingredients": {
        "$jsonSchema": {
            "bsonType": "object",
            "required": [
                "name",
                "current_stock",
                "unit",
                "min_stock",
                "reorder_point",
                "cost_per_unit",
                "version",
            ],
            "properties": {
                "name": {"bsonType": "string"},
                "current_stock": {**NUMBER, "minimum": 0},
                "unit": {"bsonType": "string"},
                "min_stock": {**NUMBER, "minimum": 0},
                "reorder_point": {**NUMBER, "minimum": 0},
                "cost_per_unit": NUMBER,
                "version": {"bsonType": ["int", "long"], "minimum": 0},
            },
        }
    },
    "menu_items": {
        "$jsonSchema": {
            "bsonType": "object",
            "required": ["name", "ingredients"],
            "properties": {
                "name": {"bsonType": "string"},
                "ingredients": {
                    "bsonType": "array",
                    "items": {
                        "bsonType": "object",
                        "required": ["ingredient_id", "quantity", "unit"],
                    },
                },
            },
        }
    },
    "orders": {
        "$jsonSchema": {
            "bsonType": "object",
            "required": ["items", "status", "created_at"],
            "properties": {
                "status": {"bsonType": "string"},
                "items": {"bsonType": "array"},
            },
        }
    },
}


async def ensure_inventory_schema(db: AsyncIOMotorDatabase) -> List[str]:
    """
    Create missing collections and their indexes.

    Args:
        db: Target database

    Returns:
        Names of the collections created by this call
    """
    existing = set(await db.list_collection_names())
    created: List[str] = []

    for name, validator in COLLECTION_VALIDATORS.items():
        if name in existing:
            logger.info("Collection already exists", extra={"collection": name})
            continue
        await db.create_collection(name, validator=validator)
        created.append(name)
        logger.info("Collection created", extra={"collection": name})

    await db["orders"].create_index([("created_at", -1)])
    await db["orders"].create_index("status")

    return created
