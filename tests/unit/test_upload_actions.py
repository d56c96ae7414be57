"""Tests for UploadActions with an in-memory storage."""

import pytest

from storefront.application.actions import UploadActions
from storefront.application.dtos.upload import UploadResult
from tests.fakes import ADMIN, FILES_BASE, USER, FakeStorage

PNG = b"\x89PNG\r\n\x1a\n" + b"0" * 16


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def actions(storage) -> UploadActions:
    return UploadActions(storage, max_size=64)


@pytest.mark.parametrize("principal", [None, USER])
async def test_upload_requires_admin(actions: UploadActions, storage: FakeStorage, principal) -> None:
    result = await actions.upload_file(principal, "a.png", "image/png", PNG)
    assert result.error == "Unauthorized"
    assert storage.objects == {}


@pytest.mark.parametrize(
    ("file_name", "content_type", "data", "upload_type", "message"),
    [
        ("", "image/png", PNG, "image", "A file name is required"),
        ("a.png", "image/png", PNG, "video", 'Invalid upload type. Must be "image" or "product"'),
        ("a.png", "image/png", b"", "image", "File is empty"),
        ("a.png", "image/png", b"0" * 65, "image", "File exceeds the maximum size of 64 bytes"),
    ],
)
async def test_upload_validation(
    actions: UploadActions, file_name, content_type, data, upload_type, message
) -> None:
    result = await actions.upload_file(
        ADMIN, file_name, content_type, data, upload_type=upload_type
    )
    assert result.error == message


async def test_image_upload_rejects_pdf(actions: UploadActions) -> None:
    result = await actions.upload_file(ADMIN, "a.pdf", "application/pdf", PNG)
    assert result.error.startswith("Invalid file type. Allowed types: ")
    assert "image/png" in result.error


async def test_product_upload_accepts_pdf(actions: UploadActions) -> None:
    result = await actions.upload_file(
        ADMIN, "poster.pdf", "application/pdf", PNG, upload_type="product"
    )
    assert result.ok


async def test_upload_stores_under_user_prefix(actions: UploadActions, storage: FakeStorage) -> None:
    result = await actions.upload_file(ADMIN, "my photo.png", "image/png; charset=binary", PNG)

    upload = result.data
    assert isinstance(upload, UploadResult)
    assert upload.key.startswith(f"uploads/{ADMIN.id}/")
    assert upload.url == f"{FILES_BASE}{upload.key}"
    assert (upload.size, upload.content_type) == (len(PNG), "image/png")
    assert storage.objects[upload.key] == PNG
    assert storage.metadata[upload.key] == {"uploaded_by": ADMIN.id}
