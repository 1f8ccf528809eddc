"""
Tests for ImageService: local cache copy and upload.
"""

from pathlib import Path

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp import test_utils

from storefront.errors import RemoteStatusError
from storefront.models import SelectedImage
from storefront.services.image_service import ImageService


IMAGE = SelectedImage(content=b"\xff\xd8\xff\xe0fake-jpeg", file_name="foto.jpg")


@pytest_asyncio.fixture
async def upload_server():
    received = []

    async def upload(request):
        data = await request.post()
        field = data["file"]
        received.append((field.filename, field.file.read()))
        if field.filename == "rechazada.jpg":
            return web.Response(status=413, text="too large")
        return web.json_response({"url": f"https://cdn.example.com/{field.filename}"})

    app = web.Application()
    app.router.add_post("/upload", upload)
    server = test_utils.TestServer(app)
    await server.start_server()
    yield server, received
    await server.close()


@pytest.mark.asyncio
async def test_without_upload_url_copies_to_cache(tmp_path):
    service = ImageService(None, tmp_path / "cache")

    reference = await service.resolve(IMAGE)

    path = Path(reference)
    assert path.is_absolute()
    assert path.parent == (tmp_path / "cache").resolve()
    assert path.name.startswith("temp_image_")
    assert path.suffix == ".jpg"
    assert path.read_bytes() == IMAGE.content


@pytest.mark.asyncio
async def test_upload_returns_remote_url(tmp_path, upload_server):
    server, received = upload_server
    async with aiohttp.ClientSession() as session:
        service = ImageService(session, tmp_path, str(server.make_url("/upload")))
        reference = await service.resolve(IMAGE)

    assert reference == "https://cdn.example.com/foto.jpg"
    assert received == [("foto.jpg", IMAGE.content)]
    assert list(tmp_path.iterdir()) == []


@pytest.mark.asyncio
async def test_rejected_upload_raises(tmp_path, upload_server):
    server, _ = upload_server
    rejected = SelectedImage(content=b"big", file_name="rechazada.jpg")
    async with aiohttp.ClientSession() as session:
        service = ImageService(session, tmp_path, str(server.make_url("/upload")))
        with pytest.raises(RemoteStatusError) as excinfo:
            await service.resolve(rejected)

    assert excinfo.value.status == 413
    assert str(excinfo.value) == "Error 413: too large"
