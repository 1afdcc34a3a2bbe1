"""
Portfolio API Backend: Collection CRUD Service
==============================================

What:  Shared list/get/create/update/delete operations over one collection.
How:   Each concrete service names its collection and response model; this
       base class turns driver results into response models and driver
       failures into application exceptions.
Who:   Subclassed by PortfolioService, BlogService and ContactService.

Error Mapping:
    list / get                 → DatabaseError   (500)
    create / update / delete   → ValidationError (400)

    A missing id is not an error: get and update return None, delete is a
    no-op reported as success.
"""

import logging
from typing import Any, Dict, List, Optional, Type

from bson import ObjectId
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from pymongo import DESCENDING, ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection

from portfolio_api.database import Database
from portfolio_api.exceptions import (
    DatabaseError,
    PortfolioError,
    ValidationError,
    validation_error_from,
)
from portfolio_api.models.document import StoredDocument

logger = logging.getLogger(__name__)


class DocumentService:
    """
    CRUD over a single MongoDB collection.

    Subclasses set:
        collection_name: Name of the backing collection
        response_model:  Pydantic model (with `_id`) returned to routes
        resource:        Human-readable name used in logs
    """

    collection_name: str = ""
    response_model: Type[BaseModel] = BaseModel
    resource: str = "document"

    def __init__(self, db: Database):
        self.db = db

    @property
    def collection(self) -> AsyncCollection:
        return self.db.collection(self.collection_name)

    def to_response(self, document: Optional[Dict[str, Any]]) -> Optional[BaseModel]:
        if document is None:
            return None
        return self.response_model.model_validate(document)

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_documents(self, query: Optional[Dict[str, Any]] = None) -> List[BaseModel]:
        """
        Every document matching `query`, newest first.

        No pagination: the full result set is returned.
        """
        try:
            cursor = self.collection.find(query or {}).sort("createdAt", DESCENDING)
            documents = await cursor.to_list()
            return [self.to_response(doc) for doc in documents]
        except PortfolioError:
            raise
        except Exception as e:
            logger.error("Error listing %s: %s", self.resource, str(e))
            raise DatabaseError(message=str(e), context={"collection": self.collection_name})

    async def get(self, document_id: str) -> Optional[BaseModel]:
        """Single document by id, or None when it does not exist."""
        try:
            document = await self.collection.find_one({"_id": ObjectId(document_id)})
            return self.to_response(document)
        except PortfolioError:
            raise
        except Exception as e:
            logger.error("Error fetching %s %s: %s", self.resource, document_id, str(e))
            raise DatabaseError(
                message=str(e),
                context={"collection": self.collection_name, "id": document_id},
            )

    # ── Writes ────────────────────────────────────────────────────────────

    async def insert(self, item: StoredDocument) -> BaseModel:
        """Insert a validated document and return it with its new `_id`."""
        document = item.to_document()
        try:
            result = await self.collection.insert_one(document)
            document["_id"] = result.inserted_id
            logger.info("Created %s %s", self.resource, result.inserted_id)
            return self.to_response(document)
        except PortfolioError:
            raise
        except PydanticValidationError as e:
            raise validation_error_from(e)
        except Exception as e:
            logger.error("Error creating %s: %s", self.resource, str(e))
            raise ValidationError(message=str(e), context={"collection": self.collection_name})

    async def update_fields(self, document_id: str, fields: Dict[str, Any]) -> Optional[BaseModel]:
        """
        Overwrite the given fields and return the post-update document.

        Returns None when no document has this id. An empty `fields` dict
        returns the current document unchanged.
        """
        try:
            object_id = ObjectId(document_id)
            if fields:
                document = await self.collection.find_one_and_update(
                    {"_id": object_id},
                    {"$set": fields},
                    return_document=ReturnDocument.AFTER,
                )
            else:
                document = await self.collection.find_one({"_id": object_id})
            if document is not None:
                logger.info("Updated %s %s (%s)", self.resource, document_id, ", ".join(fields) or "no fields")
            return self.to_response(document)
        except PortfolioError:
            raise
        except PydanticValidationError as e:
            raise validation_error_from(e)
        except Exception as e:
            logger.error("Error updating %s %s: %s", self.resource, document_id, str(e))
            raise ValidationError(
                message=str(e),
                context={"collection": self.collection_name, "id": document_id},
            )

    async def delete(self, document_id: str) -> None:
        """Remove the document if present. Deleting a missing id succeeds."""
        try:
            result = await self.collection.delete_one({"_id": ObjectId(document_id)})
        except Exception as e:
            logger.error("Error deleting %s %s: %s", self.resource, document_id, str(e))
            raise ValidationError(
                message=str(e),
                context={"collection": self.collection_name, "id": document_id},
            )
        logger.info("Deleted %s %s (removed=%s)", self.resource, document_id, result.deleted_count)
