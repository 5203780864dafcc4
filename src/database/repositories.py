"""Document repositories for profiles, sessions, saved reports and violations.

Repositories translate between the Pydantic document models and Motor
collections. Driver errors are not caught here; they reach the API error
handlers and are reported as a generic database failure.
"""

from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING, DESCENDING

from src.database.mongodb import MongoDB
from src.models.base import BaseDocument
from src.models.profile import Profile
from src.models.psychometric import (
    ProctoringViolation,
    PsychometricSession,
    SavedPsychometricReport,
)
from src.utils.exceptions import DataSaveError
from src.utils.logger import get_database_logger

logger = get_database_logger()

DocumentT = TypeVar("DocumentT", bound=BaseDocument)

SortSpec = List[Tuple[str, int]]


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Convert a document id to ObjectId, or None when it cannot be one."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


class BaseRepository(Generic[DocumentT]):
    """CRUD operations over a single collection."""

    model: Type[DocumentT]

    def __init__(self, collection: Optional[AsyncIOMotorCollection] = None):
        """Initialize repository.

        Args:
            collection: Collection to use, defaults to the model's collection
                on the shared MongoDB connection
        """
        self._collection = collection

    @property
    def collection(self) -> AsyncIOMotorCollection:
        """Backing Motor collection."""
        if self._collection is None:
            self._collection = MongoDB.get_collection(self.model.collection_name)
        return self._collection

    async def _find_many(
        self,
        filter_dict: Dict[str, Any],
        sort: Optional[SortSpec] = None,
        limit: int = 0,
    ) -> List[DocumentT]:
        cursor = self.collection.find(filter_dict)
        if sort:
            cursor = cursor.sort(sort)
        if limit > 0:
            cursor = cursor.limit(limit)
        documents = await cursor.to_list(length=None)
        return [self.model.from_mongo(doc) for doc in documents]

    async def find_by_id(self, document_id: Any) -> Optional[DocumentT]:
        """Find a document by its id.

        Args:
            document_id: ObjectId or its string form

        Returns:
            The document, or None if missing or the id is malformed
        """
        object_id = to_object_id(document_id)
        if object_id is None:
            return None

        document = await self.collection.find_one({"_id": object_id})
        return self.model.from_mongo(document)

    async def find_all(self, sort: Optional[SortSpec] = None) -> List[DocumentT]:
        """Return every document in the collection."""
        return await self._find_many({}, sort=sort)

    async def count(self, filter_dict: Optional[Dict[str, Any]] = None) -> int:
        """Count documents matching a filter."""
        return await self.collection.count_documents(filter_dict or {})

    async def save(self, document: DocumentT) -> DocumentT:
        """Insert a new document or replace the stored one with the same id.

        Args:
            document: Document to persist

        Returns:
            The same document with its id set

        Raises:
            DataSaveError: If the write was not acknowledged
        """
        data = document.to_mongo()

        if document.id is None:
            result = await self.collection.insert_one(data)
            if not result.acknowledged:
                raise DataSaveError(
                    f"Insert into {self.model.collection_name} was not acknowledged"
                )
            document.id = result.inserted_id
            logger.debug(
                f"Inserted document into {self.model.collection_name}",
                extra={"document_id": str(result.inserted_id)}
            )
            return document

        result = await self.collection.replace_one({"_id": document.id}, data, upsert=True)
        if not result.acknowledged:
            raise DataSaveError(
                f"Update of {self.model.collection_name} was not acknowledged"
            )
        return document

    async def delete_by_id(self, document_id: Any) -> bool:
        """Delete a document by id.

        Returns:
            bool: True if a document was removed
        """
        object_id = to_object_id(document_id)
        if object_id is None:
            return False

        result = await self.collection.delete_one({"_id": object_id})
        return result.deleted_count > 0


class ProfileRepository(BaseRepository[Profile]):
    """Repository for user profiles."""

    model = Profile

    async def find_by_user_id(self, user_id: str) -> List[Profile]:
        """Find a user's profiles, newest first."""
        return await self._find_many(
            {"user_id": user_id},
            sort=[("created_at", DESCENDING)],
        )


class PsychometricSessionRepository(BaseRepository[PsychometricSession]):
    """Repository for psychometric test sessions."""

    model = PsychometricSession


class SavedReportRepository(BaseRepository[SavedPsychometricReport]):
    """Repository for reports users saved from their sessions."""

    model = SavedPsychometricReport

    async def find_by_user_id_order_by_saved_at_desc(
        self, user_id: str
    ) -> List[SavedPsychometricReport]:
        """Find all saved reports for a user, most recently saved first."""
        return await self._find_many(
            {"user_id": user_id},
            sort=[("saved_at", DESCENDING)],
        )

    async def find_by_user_id_and_session_id(
        self, user_id: str, session_id: str
    ) -> Optional[SavedPsychometricReport]:
        """Find the report a user saved for a session."""
        document = await self.collection.find_one(
            {"user_id": user_id, "session_id": session_id}
        )
        return self.model.from_mongo(document)

    async def exists_by_user_id_and_session_id(self, user_id: str, session_id: str) -> bool:
        """Check whether a user already saved a session's report."""
        count = await self.collection.count_documents(
            {"user_id": user_id, "session_id": session_id}, limit=1
        )
        return count > 0

    async def delete_by_user_id_and_session_id(self, user_id: str, session_id: str) -> int:
        """Delete a user's saved report for a session.

        Returns:
            int: Number of removed documents
        """
        result = await self.collection.delete_many(
            {"user_id": user_id, "session_id": session_id}
        )
        return result.deleted_count


class ProctoringViolationRepository(BaseRepository[ProctoringViolation]):
    """Repository for proctoring violations."""

    model = ProctoringViolation

    async def find_by_session_id_order_by_timestamp_desc(
        self, session_id: str
    ) -> List[ProctoringViolation]:
        """Find a session's violations, newest first."""
        return await self._find_many(
            {"session_id": session_id},
            sort=[("timestamp", DESCENDING)],
        )

    async def find_by_session_id(self, session_id: str) -> List[ProctoringViolation]:
        """Find a session's violations in recording order."""
        return await self._find_many(
            {"session_id": session_id},
            sort=[("timestamp", ASCENDING)],
        )

    async def find_by_user_id_order_by_timestamp_desc(
        self, user_id: str
    ) -> List[ProctoringViolation]:
        """Find a user's violations across sessions, newest first."""
        return await self._find_many(
            {"user_id": user_id},
            sort=[("timestamp", DESCENDING)],
        )

    async def count_by_session_id(self, session_id: str) -> int:
        """Count a session's violations."""
        return await self.collection.count_documents({"session_id": session_id})

    async def delete_by_session_id(self, session_id: str) -> int:
        """Delete all violations for a session.

        Returns:
            int: Number of removed documents
        """
        result = await self.collection.delete_many({"session_id": session_id})
        return result.deleted_count


__all__ = [
    "BaseRepository",
    "ProfileRepository",
    "PsychometricSessionRepository",
    "SavedReportRepository",
    "ProctoringViolationRepository",
    "to_object_id",
]
