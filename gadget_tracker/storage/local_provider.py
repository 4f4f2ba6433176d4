"""
Local filesystem storage for generated export artifacts.
Files land in EXPORTS_DIR, which the app serves under DOWNLOADS_URL_PREFIX.
"""
from typing import Optional, BinaryIO
from pathlib import Path
from urllib.parse import quote

import structlog

from ..config import settings
from .provider import StorageProvider


logger = structlog.get_logger(__name__)


class LocalStorageProvider(StorageProvider):
    """Local filesystem storage provider."""

    def __init__(self, base_dir: Optional[str] = None, url_prefix: Optional[str] = None):
        self.base_dir = Path(base_dir or settings.exports_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.url_prefix = (url_prefix or settings.downloads_url_prefix).rstrip("/")

    def _get_path(self, key: str) -> Path:
        """Get the local filesystem path for a given key."""
        # Remove leading slash and sanitize
        clean_key = key.lstrip("/").replace("..", "").replace("\\", "/")
        return self.base_dir / clean_key

    def save(self, key: str, data: bytes | BinaryIO) -> None:
        path = self._get_path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = data.read() if hasattr(data, "read") else data
        with open(path, "wb") as f:
            f.write(payload)
        logger.info("export_written", key=key, bytes=len(payload))

    def get_download_url(self, key: str) -> Optional[str]:
        if self._get_path(key).exists():
            return f"{self.url_prefix}/{quote(key.lstrip('/'))}"
        return None


def get_storage() -> StorageProvider:
    """Storage for export artifacts, resolved from the current settings."""
    return LocalStorageProvider()
