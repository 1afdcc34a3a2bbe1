"""
Portfolio API Backend: Settings Store Service
=============================================

What:  Flat key-value store backed by the `settings` collection.
How:   One document per key; writes are upserts on the unique `key` index,
       reads flatten every document into a single {key: value} mapping.
Who:   Called by the /api/settings route handlers.

    settings collection                       GET /api/settings
    {"key": "siteTitle", "value": "Shannah"}   →  {"siteTitle": "Shannah",
    {"key": "theme", "value": "dark"}               "theme": "dark"}
"""

import logging
from typing import Dict, Optional

from fastapi import Depends

from portfolio_api.database import SETTINGS_COLLECTION, Database, get_database
from portfolio_api.exceptions import DatabaseError, ValidationError
from portfolio_api.models.setting import SettingEntry

logger = logging.getLogger(__name__)


class SettingsService:
    """Upsert-only settings store. Keys are never deleted."""

    def __init__(self, db: Database):
        self.db = db

    @property
    def collection(self):
        return self.db.collection(SETTINGS_COLLECTION)

    async def read_all(self) -> Dict[str, Optional[str]]:
        """Every stored key mapped to its value."""
        try:
            documents = await self.collection.find({}, {"_id": 0, "key": 1, "value": 1}).to_list()
        except Exception as e:
            logger.error("Error reading settings: %s", str(e))
            raise DatabaseError(message=str(e), context={"collection": SETTINGS_COLLECTION})
        return {doc["key"]: doc.get("value") for doc in documents if "key" in doc}

    async def write(self, entry: SettingEntry) -> None:
        """
        Insert the key, or overwrite its value if it already exists.

        Writing the same {key, value} twice leaves exactly one document.
        """
        try:
            await self.collection.update_one(
                {"key": entry.key},
                {"$set": {"value": entry.value}},
                upsert=True,
            )
        except Exception as e:
            logger.error("Error writing setting %s: %s", entry.key, str(e))
            raise ValidationError(
                message=str(e),
                field="key",
                context={"collection": SETTINGS_COLLECTION, "key": entry.key},
            )
        logger.info("Setting '%s' updated", entry.key)


def get_settings_service(db: Database = Depends(get_database)) -> SettingsService:
    return SettingsService(db)
