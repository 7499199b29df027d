import logging
from pathlib import Path
from typing import Protocol


logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def clear(self, key: str) -> None:
        ...


class MemoryBlobStore:
    """Blob store that lives as long as the process."""

    def __init__(self, blobs: dict[str, str] | None = None) -> None:
        self.blobs = {} if blobs is None else blobs

    def get(self, key: str) -> str | None:
        return self.blobs.get(key)

    def set(self, key: str, value: str) -> None:
        self.blobs[key] = value

    def clear(self, key: str) -> None:
        self.blobs.pop(key, None)


class FileBlobStore:
    """One file per key under `directory`."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self.path(key)
        if not path.exists():
            return None
        with open(path, encoding="utf-8") as f:
            return f.read()

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        with open(self.path(key), "w", encoding="utf-8") as f:
            f.write(value)
        logger.debug("Wrote %s", self.path(key))

    def clear(self, key: str) -> None:
        self.path(key).unlink(missing_ok=True)
