import logging
import re
from typing import List, Optional

from pymongo.errors import PyMongoError

from standup.constants.messages import RepositoryErrors
from standup_project.db.config import DatabaseManager

logger = logging.getLogger(__name__)


class DocumentRepository:
    """
    Key/value access to JSON documents. Each document is stored whole under its
    key; there are no partial updates and no multi-key transactions.
    """

    collection_name = "documents"

    @classmethod
    def _get_collection(cls):
        return DatabaseManager().get_collection(cls.collection_name)

    @classmethod
    def get(cls, key: str) -> Optional[dict]:
        doc = cls._get_collection().find_one({"_id": key})
        return doc["data"] if doc else None

    @classmethod
    def put(cls, key: str, document: dict) -> None:
        try:
            cls._get_collection().replace_one({"_id": key}, {"_id": key, "data": document}, upsert=True)
        except PyMongoError as e:
            logger.error(RepositoryErrors.DOCUMENT_WRITE_FAILED.format(key, e))
            raise

    @classmethod
    def replace_if_version(cls, key: str, document: dict, expected_version: int) -> bool:
        """
        Replaces the document only while its stored `version` still equals
        `expected_version`. Returns False when another write got there first.
        """
        try:
            result = cls._get_collection().replace_one(
                {"_id": key, "data.version": expected_version}, {"_id": key, "data": document}
            )
        except PyMongoError as e:
            logger.error(RepositoryErrors.DOCUMENT_WRITE_FAILED.format(key, e))
            raise
        return result.matched_count == 1

    @classmethod
    def list_keys_by_prefix(cls, prefix: str, limit: Optional[int] = None) -> List[str]:
        cursor = cls._get_collection().find({"_id": {"$regex": f"^{re.escape(prefix)}"}}, projection={"_id": 1})
        if limit:
            cursor = cursor.limit(limit)
        return [doc["_id"] for doc in cursor]
