"""
Blog API — Blog Service Unit Tests
====================================

What:  Tests for BlogService validation, update merging, and error translation.
How:   Uses an AsyncMock store (no database); asserts both results and which
       store calls were made.

What we test:
    ✅ Update merge keeps only allow-listed, present fields
    ✅ Null clears image fields and is rejected on the others
    ✅ Invalid ids are rejected before any store call
    ✅ Missing/empty required fields are rejected before insert
    ✅ Missing documents become NotFoundError
    ✅ Store exceptions become StoreError without leaking driver details
"""

from datetime import datetime, timezone

import pytest

from blog_api.exceptions import (
    InvalidIdentifierError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from blog_api.schemas.blog import BlogCreate, BlogUpdate
from blog_api.services.blog_service import (
    UPDATABLE_FIELDS,
    BlogService,
    build_update_fields,
    resolve_nulls,
    utc_now,
)

VALID_ID = "65a1b2c3d4e5f60718293a4b"


class TestBuildUpdateFields:
    """Tests for the allow-listed field merge."""

    def test_keeps_only_present_fields(self):
        assert build_update_fields({"title": "X"}) == {"title": "X"}

    def test_drops_unrecognized_fields(self):
        assert build_update_fields({"title": "X", "views": 10, "_id": "abc"}) == {"title": "X"}

    def test_only_unrecognized_fields_gives_empty_set(self):
        assert build_update_fields({"views": 10, "likes": 2}) == {}

    def test_null_counts_as_present(self):
        assert build_update_fields({"title": None, "name": "B"}) == {"title": None, "name": "B"}

    def test_empty_string_is_kept(self):
        """An explicit empty string clears an optional image field."""
        assert build_update_fields({"cover_img": ""}) == {"cover_img": ""}

    def test_all_updatable_fields_pass_through(self):
        payload = {field: f"value-{field}" for field in UPDATABLE_FIELDS}
        assert build_update_fields(payload) == payload

    def test_allow_list_matches_blog_fields(self):
        assert set(UPDATABLE_FIELDS) == {
            "name", "email", "user_img", "cover_img", "title", "description", "date",
        }


class TestResolveNulls:

    def test_null_image_fields_become_empty(self):
        assert resolve_nulls({"user_img": None, "cover_img": None, "title": "X"}) == {
            "user_img": "", "cover_img": "", "title": "X",
        }

    @pytest.mark.parametrize("field", ["name", "email", "title", "description", "date"])
    def test_null_on_valued_field_rejected(self, field):
        with pytest.raises(ValidationError, match=f"{field} cannot be null") as exc_info:
            resolve_nulls({field: None})

        assert exc_info.value.context["null_fields"] == [field]
        assert exc_info.value.field == field

    def test_values_pass_through(self):
        assert resolve_nulls({"title": "X", "cover_img": ""}) == {"title": "X", "cover_img": ""}


class TestUtcNow:

    def test_millisecond_precision_in_utc(self):
        now = utc_now()

        assert now.tzinfo is timezone.utc
        assert now.microsecond % 1000 == 0


class TestBlogServiceList:

    @pytest.mark.asyncio
    async def test_list_returns_documents_in_store_order(self, mock_store, sample_blog_document):
        second = dict(sample_blog_document, id="65a1b2c3d4e5f60718293a4c", title="Older")
        mock_store.list_blogs.return_value = [sample_blog_document, second]

        result = await BlogService(mock_store).list_blogs()

        assert [blog.title for blog in result] == [sample_blog_document["title"], "Older"]
        mock_store.list_blogs.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_list_store_failure_raises_store_error(self, mock_store):
        mock_store.list_blogs.side_effect = ConnectionError("mongodb://admin:hunter2@db:27017")

        with pytest.raises(StoreError) as exc_info:
            await BlogService(mock_store).list_blogs()

        assert exc_info.value.message == "Failed to fetch blogs"
        assert "hunter2" not in exc_info.value.message
        assert exc_info.value.context["error_type"] == "ConnectionError"


class TestBlogServiceGet:

    @pytest.mark.asyncio
    async def test_get_found(self, mock_store, sample_blog_document):
        mock_store.get_blog.return_value = sample_blog_document

        result = await BlogService(mock_store).get_blog(VALID_ID)

        assert result.id == sample_blog_document["id"]
        assert result.cover_img == sample_blog_document["cover_img"]
        mock_store.get_blog.assert_awaited_once_with(VALID_ID)

    @pytest.mark.asyncio
    async def test_get_not_found(self, mock_store):
        mock_store.get_blog.return_value = None

        with pytest.raises(NotFoundError, match="Blog not found"):
            await BlogService(mock_store).get_blog(VALID_ID)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_id", ["not-an-id", "123", "", "65a1b2c3d4e5f60718293a4z"])
    async def test_get_invalid_id_skips_store(self, mock_store, bad_id):
        with pytest.raises(InvalidIdentifierError):
            await BlogService(mock_store).get_blog(bad_id)

        mock_store.get_blog.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_document_missing_optional_fields_serializes(self, mock_store):
        """Documents written without image fields come back with empty strings."""
        mock_store.get_blog.return_value = {
            "id": VALID_ID, "name": "A", "email": "a@x.com",
            "title": "T", "description": "D", "user_img": None,
        }

        result = await BlogService(mock_store).get_blog(VALID_ID)

        assert result.user_img == ""
        assert result.cover_img == ""


class TestBlogServiceCreate:

    @pytest.mark.asyncio
    async def test_create_stamps_date_and_defaults_images(self, mock_store, sample_blog_payload):
        async def insert(document):
            return {"id": VALID_ID, **document}

        mock_store.insert_blog.side_effect = insert
        before = utc_now()

        result = await BlogService(mock_store).create_blog(BlogCreate(**sample_blog_payload))

        inserted = mock_store.insert_blog.await_args.args[0]
        assert inserted["user_img"] == ""
        assert inserted["cover_img"] == ""
        assert inserted["date"].tzinfo is not None
        assert inserted["date"] >= before
        assert inserted["date"].microsecond % 1000 == 0
        assert "id" not in inserted
        assert result.id == VALID_ID
        assert result.name == "Ada"

    @pytest.mark.asyncio
    async def test_create_keeps_supplied_images(self, mock_store, sample_blog_payload):
        async def insert(document):
            return {"id": VALID_ID, **document}

        mock_store.insert_blog.side_effect = insert
        payload = BlogCreate(**sample_blog_payload, user_img="u.png", cover_img="c.png")

        result = await BlogService(mock_store).create_blog(payload)

        assert result.user_img == "u.png"
        assert result.cover_img == "c.png"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["name", "email", "title", "description"])
    async def test_create_missing_required_field(self, mock_store, sample_blog_payload, field):
        payload = dict(sample_blog_payload)
        del payload[field]

        with pytest.raises(ValidationError) as exc_info:
            await BlogService(mock_store).create_blog(BlogCreate(**payload))

        assert exc_info.value.context["missing_fields"] == [field]
        mock_store.insert_blog.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["name", "email", "title", "description"])
    async def test_create_empty_required_field(self, mock_store, sample_blog_payload, field):
        payload = dict(sample_blog_payload, **{field: ""})

        with pytest.raises(ValidationError, match="are required"):
            await BlogService(mock_store).create_blog(BlogCreate(**payload))

        mock_store.insert_blog.assert_not_awaited()


class TestBlogServiceUpdate:

    @pytest.mark.asyncio
    async def test_update_sends_only_supplied_fields(self, mock_store, sample_blog_document):
        mock_store.update_blog.return_value = dict(sample_blog_document, title="X")

        result = await BlogService(mock_store).update_blog(VALID_ID, BlogUpdate(title="X"))

        mock_store.update_blog.assert_awaited_once_with(VALID_ID, {"title": "X"})
        assert result.title == "X"
        assert result.name == sample_blog_document["name"]

    @pytest.mark.asyncio
    async def test_update_with_only_unrecognized_fields(self, mock_store):
        payload = BlogUpdate.model_validate({"views": 3, "likes": 1})

        with pytest.raises(ValidationError, match="At least one field"):
            await BlogService(mock_store).update_blog(VALID_ID, payload)

        mock_store.update_blog.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_null_image_clears_it(self, mock_store, sample_blog_document):
        mock_store.update_blog.return_value = dict(sample_blog_document, cover_img="")
        payload = BlogUpdate.model_validate({"cover_img": None})

        result = await BlogService(mock_store).update_blog(VALID_ID, payload)

        mock_store.update_blog.assert_awaited_once_with(VALID_ID, {"cover_img": ""})
        assert result.cover_img == ""

    @pytest.mark.asyncio
    async def test_update_null_title_rejected_before_store(self, mock_store):
        payload = BlogUpdate.model_validate({"title": None, "name": "B"})

        with pytest.raises(ValidationError, match="title cannot be null"):
            await BlogService(mock_store).update_blog(VALID_ID, payload)

        mock_store.update_blog.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_invalid_id_checked_first(self, mock_store):
        with pytest.raises(InvalidIdentifierError):
            await BlogService(mock_store).update_blog("bogus", BlogUpdate())

        mock_store.update_blog.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_vanished_document_is_not_found(self, mock_store):
        mock_store.update_blog.return_value = None

        with pytest.raises(NotFoundError):
            await BlogService(mock_store).update_blog(VALID_ID, BlogUpdate(title="X"))

    @pytest.mark.asyncio
    async def test_update_date_is_normalized_to_utc(self, mock_store, sample_blog_document):
        mock_store.update_blog.return_value = sample_blog_document
        payload = BlogUpdate.model_validate({"date": "2024-02-01T10:00:00+02:00"})

        await BlogService(mock_store).update_blog(VALID_ID, payload)

        fields = mock_store.update_blog.await_args.args[1]
        assert fields["date"] == datetime(2024, 2, 1, 8, 0, tzinfo=timezone.utc)


class TestBlogServiceDelete:

    @pytest.mark.asyncio
    async def test_delete_success(self, mock_store):
        mock_store.delete_blog.return_value = 1

        result = await BlogService(mock_store).delete_blog(VALID_ID)

        assert result.message == "Blog deleted successfully"
        mock_store.delete_blog.assert_awaited_once_with(VALID_ID)

    @pytest.mark.asyncio
    async def test_delete_not_found(self, mock_store):
        mock_store.delete_blog.return_value = 0

        with pytest.raises(NotFoundError):
            await BlogService(mock_store).delete_blog(VALID_ID)

    @pytest.mark.asyncio
    async def test_delete_store_failure(self, mock_store):
        mock_store.delete_blog.side_effect = TimeoutError("server selection timeout")

        with pytest.raises(StoreError, match="Failed to delete blog"):
            await BlogService(mock_store).delete_blog(VALID_ID)
