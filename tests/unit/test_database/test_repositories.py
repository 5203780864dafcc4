"""Unit tests for the document repositories.

Motor collections are replaced with mocks; only the queries the repositories
issue and the models they build are checked.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import PyMongoError

from src.database.repositories import (
    ProctoringViolationRepository,
    ProfileRepository,
    SavedReportRepository,
    to_object_id,
)
from src.models.profile import Profile
from src.models.psychometric import ProctoringViolation, SavedPsychometricReport


def make_collection(documents=None):
    """Mock collection whose find() cursor yields the given documents."""
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=documents or [])

    collection = MagicMock()
    collection.find.return_value = cursor
    collection.find_one = AsyncMock(return_value=None)
    collection.count_documents = AsyncMock(return_value=0)
    collection.insert_one = AsyncMock()
    collection.replace_one = AsyncMock()
    collection.delete_one = AsyncMock()
    collection.delete_many = AsyncMock()
    return collection


class TestToObjectId:
    """Test suite for to_object_id."""

    def test_valid_string(self):
        oid = ObjectId()

        assert to_object_id(str(oid)) == oid

    def test_object_id_passthrough(self):
        oid = ObjectId()

        assert to_object_id(oid) is oid

    @pytest.mark.parametrize("value", ["not-an-id", "", None, 42])
    def test_invalid(self, value):
        assert to_object_id(value) is None


class TestBaseRepository:
    """Base CRUD behaviour, exercised through ProfileRepository."""

    @pytest.fixture
    def collection(self):
        return make_collection()

    @pytest.fixture
    def repository(self, collection):
        return ProfileRepository(collection=collection)

    @pytest.mark.asyncio
    async def test_find_by_id(self, repository, collection):
        oid = ObjectId()
        collection.find_one.return_value = {
            "_id": oid,
            "user_id": "user-1",
            "name": "Asha",
            "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        }

        profile = await repository.find_by_id(str(oid))

        collection.find_one.assert_awaited_once_with({"_id": oid})
        assert isinstance(profile, Profile)
        assert profile.id == oid
        assert profile.name == "Asha"

    @pytest.mark.asyncio
    async def test_find_by_id_missing(self, repository):
        assert await repository.find_by_id(str(ObjectId())) is None

    @pytest.mark.asyncio
    async def test_find_by_malformed_id(self, repository, collection):
        """Malformed ids never reach the database."""
        assert await repository.find_by_id("not-an-id") is None
        collection.find_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_find_all(self, repository, collection):
        collection.find.return_value.to_list.return_value = [
            {"_id": ObjectId(), "user_id": "user-1", "name": "Asha"},
            {"_id": ObjectId(), "user_id": "user-2", "name": "Ravi"},
        ]

        profiles = await repository.find_all()

        collection.find.assert_called_once_with({})
        collection.find.return_value.sort.assert_not_called()
        assert [p.name for p in profiles] == ["Asha", "Ravi"]
        assert all(isinstance(p, Profile) for p in profiles)

    @pytest.mark.asyncio
    async def test_find_all_sorted(self, repository, collection):
        await repository.find_all(sort=[("name", 1)])

        collection.find.assert_called_once_with({})
        collection.find.return_value.sort.assert_called_once_with([("name", 1)])

    @pytest.mark.asyncio
    async def test_save_inserts_new_document(self, repository, collection):
        new_id = ObjectId()
        collection.insert_one.return_value = MagicMock(acknowledged=True, inserted_id=new_id)

        profile = await repository.save(Profile(user_id="user-1", name="Asha"))

        inserted = collection.insert_one.await_args.args[0]
        assert "_id" not in inserted
        assert inserted["user_id"] == "user-1"
        assert profile.id == new_id
        collection.replace_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_save_replaces_existing_document(self, repository, collection):
        oid = ObjectId()
        collection.replace_one.return_value = MagicMock(acknowledged=True)

        await repository.save(Profile(_id=oid, user_id="user-1"))

        args, kwargs = collection.replace_one.await_args
        assert args[0] == {"_id": oid}
        assert args[1]["_id"] == oid
        assert kwargs == {"upsert": True}

    @pytest.mark.asyncio
    async def test_delete_by_id(self, repository, collection):
        collection.delete_one.return_value = MagicMock(deleted_count=1)

        assert await repository.delete_by_id(str(ObjectId())) is True

    @pytest.mark.asyncio
    async def test_count(self, repository, collection):
        collection.count_documents.return_value = 7

        assert await repository.count() == 7
        collection.count_documents.assert_awaited_once_with({})

    @pytest.mark.asyncio
    async def test_driver_errors_propagate(self, repository, collection):
        collection.find_one.side_effect = PyMongoError("connection reset")

        with pytest.raises(PyMongoError):
            await repository.find_by_id(str(ObjectId()))

    @pytest.mark.asyncio
    async def test_find_by_user_id_sorted_newest_first(self, repository, collection):
        await repository.find_by_user_id("user-1")

        collection.find.assert_called_once_with({"user_id": "user-1"})
        collection.find.return_value.sort.assert_called_once_with([("created_at", -1)])


class TestSavedReportRepository:
    """Test suite for SavedReportRepository."""

    @pytest.fixture
    def report_document(self):
        return {
            "_id": ObjectId(),
            "user_id": "user-1",
            "session_id": "session-1",
            "report_title": "My report",
            "saved_at": datetime(2024, 5, 1, tzinfo=timezone.utc),
        }

    @pytest.mark.asyncio
    async def test_find_by_user_ordered_by_saved_at(self, report_document):
        collection = make_collection([report_document])
        repository = SavedReportRepository(collection=collection)

        reports = await repository.find_by_user_id_order_by_saved_at_desc("user-1")

        collection.find.assert_called_once_with({"user_id": "user-1"})
        collection.find.return_value.sort.assert_called_once_with([("saved_at", -1)])
        assert len(reports) == 1
        assert isinstance(reports[0], SavedPsychometricReport)
        assert reports[0].report_title == "My report"

    @pytest.mark.asyncio
    async def test_find_by_user_and_session(self, report_document):
        collection = make_collection()
        collection.find_one.return_value = report_document
        repository = SavedReportRepository(collection=collection)

        report = await repository.find_by_user_id_and_session_id("user-1", "session-1")

        collection.find_one.assert_awaited_once_with({"user_id": "user-1", "session_id": "session-1"})
        assert report.session_id == "session-1"

    @pytest.mark.asyncio
    async def test_exists(self):
        collection = make_collection()
        collection.count_documents.return_value = 1
        repository = SavedReportRepository(collection=collection)

        assert await repository.exists_by_user_id_and_session_id("user-1", "session-1") is True

    @pytest.mark.asyncio
    async def test_delete_by_user_and_session(self):
        collection = make_collection()
        collection.delete_many.return_value = MagicMock(deleted_count=1)
        repository = SavedReportRepository(collection=collection)

        deleted = await repository.delete_by_user_id_and_session_id("user-1", "session-1")

        assert deleted == 1
        collection.delete_many.assert_awaited_once_with({"user_id": "user-1", "session_id": "session-1"})


class TestProctoringViolationRepository:
    """Test suite for ProctoringViolationRepository."""

    @pytest.mark.asyncio
    async def test_find_by_session_newest_first(self):
        collection = make_collection([
            {
                "_id": ObjectId(),
                "session_id": "session-1",
                "violation_type": "TAB_SWITCH",
                "severity": "HIGH",
                "timestamp": datetime(2024, 5, 1, tzinfo=timezone.utc),
            }
        ])
        repository = ProctoringViolationRepository(collection=collection)

        violations = await repository.find_by_session_id_order_by_timestamp_desc("session-1")

        collection.find.return_value.sort.assert_called_once_with([("timestamp", -1)])
        assert isinstance(violations[0], ProctoringViolation)
        assert violations[0].severity == "HIGH"

    @pytest.mark.asyncio
    async def test_find_by_user_newest_first(self):
        collection = make_collection()
        repository = ProctoringViolationRepository(collection=collection)

        await repository.find_by_user_id_order_by_timestamp_desc("user-1")

        collection.find.assert_called_once_with({"user_id": "user-1"})
        collection.find.return_value.sort.assert_called_once_with([("timestamp", -1)])

    @pytest.mark.asyncio
    async def test_count_and_delete_by_session(self):
        collection = make_collection()
        collection.count_documents.return_value = 3
        collection.delete_many.return_value = MagicMock(deleted_count=3)
        repository = ProctoringViolationRepository(collection=collection)

        assert await repository.count_by_session_id("session-1") == 3
        assert await repository.delete_by_session_id("session-1") == 3
        collection.delete_many.assert_awaited_once_with({"session_id": "session-1"})
