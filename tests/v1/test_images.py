# tests/v1/test_images.py
"""Tests for the image store and the upload endpoint."""

import io
import logging

import pytest
from fastapi import UploadFile, status
from starlette.datastructures import Headers

from postboard.services.images import ImageStore


def _upload(name: str, content_type: str, data: bytes = b"\x89PNG fake") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(data),
        filename=name,
        headers=Headers({"content-type": content_type}),
    )


class TestImageStore:
    @pytest.mark.asyncio
    async def test_save_png(self, image_store: ImageStore):
        path = await image_store.save(_upload("cat.png", "image/png"))
        assert path.startswith("images/")
        assert path.endswith("-cat.png")
        assert image_store.resolve(path).read_bytes() == b"\x89PNG fake"

    @pytest.mark.asyncio
    async def test_unsupported_type_is_dropped(self, image_store: ImageStore):
        assert await image_store.save(_upload("doc.pdf", "application/pdf")) is None
        assert list(image_store.root.iterdir()) == []

    @pytest.mark.asyncio
    async def test_directory_components_are_stripped(self, image_store: ImageStore):
        path = await image_store.save(_upload("../../escape.jpg", "image/jpeg"))
        assert image_store.resolve(path).parent == image_store.root

    def test_clear_removes_file(self, image_store: ImageStore):
        target = image_store.resolve("images/old.png")
        target.write_bytes(b"x")
        assert image_store.clear("images/old.png") is True
        assert not target.exists()

    def test_clear_missing_file_is_logged_not_raised(self, image_store: ImageStore, caplog):
        with caplog.at_level(logging.WARNING, logger="postboard.services.images"):
            assert image_store.clear("images/never-existed.png") is False
        assert "already missing" in caplog.text

    def test_clear_cannot_escape_root(self, image_store: ImageStore, tmp_path):
        outside = tmp_path / "secret.txt"
        outside.write_text("keep me")
        assert image_store.clear("../secret.txt") is False
        assert outside.exists()


class TestUploadEndpoint:
    def test_requires_auth(self, client):
        response = client.put(
            "/post-image",
            files={"image": ("cat.png", b"data", "image/png")},
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_stores_image(self, client, auth_token, image_store):
        response = client.put(
            "/post-image",
            files={"image": ("cat.png", b"data", "image/png")},
            headers=auth_token,
        )
        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["message"] == "File stored"
        assert image_store.resolve(body["filePath"]).read_bytes() == b"data"

    def test_replaces_old_image(self, client, auth_token, image_store):
        old = image_store.resolve("images/old.png")
        old.write_bytes(b"old")
        response = client.put(
            "/post-image",
            files={"image": ("new.jpg", b"new", "image/jpeg")},
            data={"oldPath": "images/old.png"},
            headers=auth_token,
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert not old.exists()

    def test_wrong_type_is_ignored(self, client, auth_token, image_store):
        response = client.put(
            "/post-image",
            files={"image": ("notes.txt", b"text", "text/plain")},
            headers=auth_token,
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "No file provided"}
        assert list(image_store.root.iterdir()) == []

    def test_no_file(self, client, auth_token):
        response = client.put("/post-image", headers=auth_token)
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "No file provided"}

    def test_uploaded_images_are_served(self, client, auth_token):
        from postboard.core.settings import settings
        from pathlib import Path

        target = Path(settings.images_dir) / "served.png"
        target.write_bytes(b"served bytes")
        response = client.get("/images/served.png")
        assert response.status_code == status.HTTP_200_OK
        assert response.content == b"served bytes"
