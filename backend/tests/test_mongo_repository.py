"""
Diario de Classe API — MongoDB Repository Unit Tests (Mocked)
==============================================================

What:  Tests for MongoPostRepository with a mocked AsyncCollection.
Why:   Tests should not require a running MongoDB.
How:   The mock_collection fixture stands in for pymongo's AsyncCollection;
       assertions check the filters/updates sent to the driver.

What we test:
    ✅ Lookups go through the numeric `id` field and hide `_id`
    ✅ Search builds an escaped, case-insensitive regex over title/content
    ✅ Clock-derived ids stay strictly increasing within the process
    ✅ Updates only $set mutable fields
    ✅ Driver errors and malformed documents become DatabaseError
    ✅ Ids beyond int64 are rejected before reaching the driver
    ❌ Real server behavior (use an integration environment for that)
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from diario_api.exceptions import DatabaseError, InvalidInputError
from diario_api.repositories.mongo import PROJECTION, MongoPostRepository
from diario_api.services.post_service import PostService


def make_document(post_id=1, title="Segundo Post", content="Conteúdo sobre Node.js", author="Maria"):
    return {
        "id": post_id,
        "title": title,
        "content": content,
        "author": author,
        "createdAt": datetime(2026, 1, 2, tzinfo=timezone.utc),
    }


class TestMongoFind:

    @pytest.mark.asyncio
    async def test_find_all_maps_documents(self, mock_collection):
        mock_collection.find.return_value.to_list.return_value = [make_document(1), make_document(2)]
        repo = MongoPostRepository(mock_collection)

        posts = await repo.find_all()

        assert [p.id for p in posts] == [1, 2]
        mock_collection.find.assert_called_once_with({}, PROJECTION)

    @pytest.mark.asyncio
    async def test_find_by_id_queries_numeric_id_field(self, mock_collection):
        mock_collection.find_one.return_value = make_document(5)
        repo = MongoPostRepository(mock_collection)

        post = await repo.find_by_id(5)

        assert post.id == 5
        assert post.created_at.tzinfo is not None
        mock_collection.find_one.assert_awaited_once_with({"id": 5}, {"_id": False})

    @pytest.mark.asyncio
    async def test_find_by_id_missing(self, mock_collection):
        repo = MongoPostRepository(mock_collection)
        assert await repo.find_by_id(999) is None

    @pytest.mark.asyncio
    async def test_naive_dates_are_read_as_utc(self, mock_collection):
        document = make_document(1)
        document["createdAt"] = datetime(2026, 1, 2, 10, 30)
        mock_collection.find_one.return_value = document
        repo = MongoPostRepository(mock_collection)

        post = await repo.find_by_id(1)

        assert post.created_at == datetime(2026, 1, 2, 10, 30, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_document_without_created_at_is_a_database_error(self, mock_collection):
        document = make_document(7)
        del document["createdAt"]
        mock_collection.find_one.return_value = document
        repo = MongoPostRepository(mock_collection)

        with pytest.raises(DatabaseError) as exc_info:
            await repo.find_by_id(7)

        assert exc_info.value.context["operation"] == "decode"
        assert exc_info.value.context["post_id"] == 7

    @pytest.mark.asyncio
    async def test_listing_fails_on_a_malformed_document(self, mock_collection):
        broken = make_document(2)
        broken["createdAt"] = "2026-01-02"
        mock_collection.find.return_value.to_list.return_value = [make_document(1), broken]
        repo = MongoPostRepository(mock_collection)

        with pytest.raises(DatabaseError):
            await repo.find_all()

    @pytest.mark.asyncio
    async def test_find_by_text_escapes_the_term(self, mock_collection):
        mock_collection.find.return_value.to_list.return_value = [make_document(2)]
        repo = MongoPostRepository(mock_collection)

        posts = await repo.find_by_text("Node.js")

        assert [p.title for p in posts] == ["Segundo Post"]
        criteria, projection = mock_collection.find.call_args.args
        pattern = {"$regex": r"Node\.js", "$options": "i"}
        assert criteria == {"$or": [{"title": pattern}, {"content": pattern}]}
        assert projection == PROJECTION


class TestMongoCreate:

    @pytest.mark.asyncio
    async def test_create_uses_clock_milliseconds(self, mock_collection, valid_post_data):
        repo = MongoPostRepository(mock_collection, clock=lambda: 1_767_225_600.5)

        post = await repo.create(valid_post_data)

        assert post.id == 1_767_225_600_500
        inserted = mock_collection.insert_one.await_args.args[0]
        assert inserted["id"] == post.id
        assert inserted["title"] == valid_post_data["title"]
        assert "createdAt" in inserted
        assert inserted["createdAt"] == post.created_at

    @pytest.mark.asyncio
    async def test_ids_increase_when_clock_does_not_move(self, mock_collection, valid_post_data):
        repo = MongoPostRepository(mock_collection, clock=lambda: 1000.0)

        first = await repo.create(valid_post_data)
        second = await repo.create(valid_post_data)
        third = await repo.create(valid_post_data)

        assert first.id == 1_000_000
        assert second.id == first.id + 1
        assert third.id == second.id + 1

    @pytest.mark.asyncio
    async def test_duplicate_key_becomes_database_error(self, mock_collection, valid_post_data):
        mock_collection.insert_one.side_effect = DuplicateKeyError("E11000 duplicate key")
        repo = MongoPostRepository(mock_collection)

        with pytest.raises(DatabaseError) as exc_info:
            await repo.create(valid_post_data)

        assert exc_info.value.context["operation"] == "insert"
        assert "E11000" not in exc_info.value.message


class TestMongoUpdateDelete:

    @pytest.mark.asyncio
    async def test_update_sets_only_mutable_fields(self, mock_collection):
        mock_collection.find_one_and_update.return_value = make_document(3, title="Novo")
        repo = MongoPostRepository(mock_collection)

        post = await repo.update(3, {"title": "Novo", "id": 9, "createdAt": "x"})

        assert post.title == "Novo"
        mock_collection.find_one_and_update.assert_awaited_once_with(
            {"id": 3},
            {"$set": {"title": "Novo"}},
            projection=PROJECTION,
            return_document=ReturnDocument.AFTER,
        )

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, mock_collection):
        repo = MongoPostRepository(mock_collection)
        assert await repo.update(999, {"title": "Novo"}) is None

    @pytest.mark.asyncio
    async def test_empty_update_reads_current_post(self, mock_collection):
        mock_collection.find_one.return_value = make_document(3)
        repo = MongoPostRepository(mock_collection)

        post = await repo.update(3, {})

        assert post.id == 3
        mock_collection.find_one_and_update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_reports_deleted_count(self, mock_collection):
        mock_collection.delete_one.return_value = MagicMock(deleted_count=1)
        repo = MongoPostRepository(mock_collection)

        assert await repo.delete(4) is True
        mock_collection.delete_one.assert_awaited_once_with({"id": 4})

    @pytest.mark.asyncio
    async def test_delete_missing_returns_false(self, mock_collection):
        mock_collection.delete_one.return_value = MagicMock(deleted_count=0)
        repo = MongoPostRepository(mock_collection)

        assert await repo.delete(4) is False


class TestMongoInfrastructure:

    @pytest.mark.asyncio
    async def test_ensure_indexes_creates_unique_id_index(self, mock_collection):
        repo = MongoPostRepository(mock_collection)

        await repo.ensure_indexes()

        mock_collection.create_index.assert_awaited_once()
        assert mock_collection.create_index.await_args.kwargs["unique"] is True

    @pytest.mark.asyncio
    async def test_connection_loss_becomes_database_error(self, mock_collection):
        mock_collection.find.return_value.to_list = AsyncMock(
            side_effect=ServerSelectionTimeoutError("no servers")
        )
        repo = MongoPostRepository(mock_collection)

        with pytest.raises(DatabaseError):
            await repo.find_all()

    @pytest.mark.asyncio
    async def test_ping_success(self, mock_collection):
        repo = MongoPostRepository(mock_collection)
        assert await repo.ping() is True

    @pytest.mark.asyncio
    async def test_ping_failure(self, mock_collection):
        mock_collection.database.command = AsyncMock(side_effect=ServerSelectionTimeoutError("down"))
        repo = MongoPostRepository(mock_collection)
        assert await repo.ping() is False


class TestServiceOverMongo:
    """Ids the driver cannot encode as int64 must be rejected before any query."""

    def setup_method(self):
        self.collection = MagicMock()
        self.collection.find_one = AsyncMock(return_value=None)
        self.collection.find_one_and_update = AsyncMock(return_value=None)
        self.collection.delete_one = AsyncMock()
        self.service = PostService(MongoPostRepository(self.collection))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_id", ["99999999999999999999", "9223372036854775808", 2**64])
    async def test_get_by_id_beyond_int64_is_invalid_input(self, raw_id):
        with pytest.raises(InvalidInputError) as exc_info:
            await self.service.get_by_id(raw_id)

        assert exc_info.value.status_code == 400
        self.collection.find_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_and_delete_beyond_int64_never_reach_the_driver(self):
        with pytest.raises(InvalidInputError):
            await self.service.update("99999999999999999999", {"title": "Título Novo"})
        with pytest.raises(InvalidInputError):
            await self.service.delete("99999999999999999999")

        self.collection.find_one_and_update.assert_not_awaited()
        self.collection.delete_one.assert_not_awaited()
