from typing import BinaryIO, Optional


class StorageProvider:
    def save(self, key: str, data: bytes | BinaryIO) -> None:
        raise NotImplementedError

    def get_download_url(self, key: str) -> Optional[str]:
        raise NotImplementedError
