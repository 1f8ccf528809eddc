# storefront/services/image_service.py
import asyncio
import logging
import time
from pathlib import Path
from typing import Optional
import aiofiles
import aiohttp
from ..errors import RemoteStatusError, TransportError
from ..models.form import SelectedImage

logger = logging.getLogger(__name__)

class ImageService:
    """Resolves a locally picked image to a reference the catalog can store"""

    def __init__(self, session: Optional[aiohttp.ClientSession], cache_dir: Path,
                 upload_url: str = ""):
        self.session = session
        self.cache_dir = Path(cache_dir)
        self.upload_url = upload_url

    async def resolve(self, image: SelectedImage) -> str:
        if self.upload_url and self.session is not None:
            return await self.upload(image)
        return await self.save_to_cache(image)

    async def upload(self, image: SelectedImage) -> str:
        """Upload the image and return its remote URL"""
        form = aiohttp.FormData()
        form.add_field(
            "file",
            image.content,
            filename=image.file_name,
            content_type=image.mime_type
        )

        try:
            async with self.session.post(self.upload_url, data=form) as response:
                if response.status < 200 or response.status >= 300:
                    body = await response.text()
                    raise RemoteStatusError(
                        f"Error {response.status}: {body or 'Sin mensaje de error'}",
                        response.status,
                        body
                    )
                data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"Error de red: {e}") from e

        url = (data or {}).get("url") if isinstance(data, dict) else None
        if not url:
            raise RemoteStatusError("Error: la subida no devolvió una URL", 200, str(data))

        logger.info("Uploaded image %s -> %s", image.file_name, url)
        return url

    async def save_to_cache(self, image: SelectedImage) -> str:
        """Copy the image into the local cache and return its path"""
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        file_path = self.cache_dir / f"temp_image_{int(time.time() * 1000)}.jpg"

        async with aiofiles.open(file_path, 'wb') as f:
            await f.write(image.content)

        logger.info("Cached picked image at %s", file_path)
        return str(file_path.resolve())
