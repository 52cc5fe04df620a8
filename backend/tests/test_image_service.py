"""
Floreria Backend — Image Store Unit Tests
===========================================

What:  Tests for ImageService: data URI decoding, generated names, lookups
       of stored references, removal and public URLs.
How:   Each test gets an ImageService over a temporary directory.
"""

import base64
import re

import pytest

from app.exceptions import ImageWriteError
from app.services.image_service import ImageService, extension_for, is_data_uri

GENERATED_NAME = re.compile(r"^\d{14}_[0-9a-f]{16}\.(png|gif|jpg)$")


@pytest.fixture
def store(temp_storage):
    return ImageService(storage_root=temp_storage, max_size=1024)


class TestHelpers:

    @pytest.mark.parametrize(
        "subtype, extension",
        [("png", ".png"), ("PNG", ".png"), ("gif", ".gif"), ("jpeg", ".jpg"), ("jpg", ".jpg"), ("webp", ".jpg")],
    )
    def test_extension_for(self, subtype, extension):
        assert extension_for(subtype) == extension

    def test_is_data_uri(self):
        assert is_data_uri("data:image/png;base64,AAAA")
        assert is_data_uri("DATA:image/png;base64,AAAA")
        assert not is_data_uri("20250101120000_0123456789abcdef.png")
        assert not is_data_uri(None)
        assert not is_data_uri("")


class TestDecode:

    def test_decode_png(self, store, png_data_uri, png_bytes):
        content, extension = store.decode_data_uri(png_data_uri)
        assert content == png_bytes
        assert extension == ".png"

    def test_decode_tolerates_whitespace(self, store, png_bytes):
        body = base64.b64encode(png_bytes).decode("ascii")
        payload = "data:image/png;base64," + body[:10] + "\n" + body[10:]
        content, _ = store.decode_data_uri(payload)
        assert content == png_bytes

    def test_invalid_base64_rejected(self, store):
        with pytest.raises(ImageWriteError):
            store.decode_data_uri("data:image/png;base64,!!!not-base64!!!")

    def test_non_image_uri_rejected(self, store):
        with pytest.raises(ImageWriteError):
            store.decode_data_uri("data:text/plain;base64,aGVsbG8=")

    def test_oversized_image_rejected(self, store):
        payload = "data:image/png;base64," + base64.b64encode(b"x" * 2048).decode("ascii")
        with pytest.raises(ImageWriteError):
            store.decode_data_uri(payload)


class TestStore:

    @pytest.mark.asyncio
    async def test_store_data_uri_writes_file(self, store, png_data_uri, png_bytes):
        file_ref = await store.store(png_data_uri)

        assert GENERATED_NAME.match(file_ref)
        assert (store.storage_root / file_ref).read_bytes() == png_bytes

    @pytest.mark.asyncio
    async def test_jpeg_saved_as_jpg(self, store, jpeg_data_uri):
        file_ref = await store.store(jpeg_data_uri)
        assert file_ref.endswith(".jpg")

    @pytest.mark.asyncio
    async def test_two_uploads_get_distinct_names(self, store, png_data_uri):
        first = await store.store(png_data_uri)
        second = await store.store(png_data_uri)
        assert first != second

    @pytest.mark.asyncio
    async def test_undecodable_payload_returns_none(self, store):
        assert await store.store("data:image/png;base64,@@@") is None
        assert list(store.storage_root.iterdir()) == []

    @pytest.mark.asyncio
    async def test_existing_reference_returned_unchanged(self, store, png_data_uri):
        file_ref = await store.store(png_data_uri)
        assert await store.store(file_ref) == file_ref

    @pytest.mark.asyncio
    async def test_url_reference_uses_last_segment(self, store, png_data_uri):
        file_ref = await store.store(png_data_uri)
        assert await store.store(f"http://shop.test/uploads/{file_ref}") == file_ref

    @pytest.mark.asyncio
    async def test_unknown_reference_returns_none(self, store):
        assert await store.store("20250101120000_0123456789abcdef.png") is None
        assert await store.store("../../etc/passwd") is None

    @pytest.mark.asyncio
    async def test_empty_payload_returns_none(self, store):
        assert await store.store(None) is None
        assert await store.store("") is None


class TestRemove:

    @pytest.mark.asyncio
    async def test_remove_deletes_file(self, store, png_data_uri):
        file_ref = await store.store(png_data_uri)
        await store.remove(file_ref)
        assert not store.exists(file_ref)

    @pytest.mark.asyncio
    async def test_remove_is_idempotent(self, store, png_data_uri):
        file_ref = await store.store(png_data_uri)
        await store.remove(file_ref)
        await store.remove(file_ref)
        await store.remove(None)

    @pytest.mark.asyncio
    async def test_remove_ignores_paths_outside_storage(self, store, tmp_path):
        outside = tmp_path / "keep.png"
        outside.write_bytes(b"x")
        await store.remove("../keep.png")
        assert outside.exists()


class TestPaths:

    def test_path_for_rejects_traversal(self, store):
        assert store.path_for("../secret.png") is None
        assert store.path_for("a/b.png") is None
        assert store.path_for("notes.txt") is None

    def test_path_for_generated_name(self, store):
        name = "20250101120000_0123456789abcdef.png"
        assert store.path_for(name) == store.storage_root / name

    def test_resolve_url(self, store):
        assert (
            store.resolve_url("20250101120000_0123456789abcdef.png", "http://10.0.2.2:8000/")
            == "http://10.0.2.2:8000/uploads/20250101120000_0123456789abcdef.png"
        )
        assert store.resolve_url(None, "http://test") is None
