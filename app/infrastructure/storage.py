"""File storage for uploaded product images.

Files are kept on local disk under a fixed folder of the content root
and served at "/<folder>/<file_name>".
"""

import asyncio
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO
from uuid import uuid4

import structlog

from app.infrastructure.config import settings

logger = structlog.get_logger()

USER_CONTENT_FOLDER_NAME = "user-content"
PENDING_DELETE_FOLDER_NAME = ".pending-delete"


class StorageService(ABC):
    """Contract for storing uploaded files."""

    @abstractmethod
    async def save_file(self, stream: BinaryIO, file_name: str) -> int:
        """Write a stream to a file, overwriting it if present.

        Returns:
            Number of bytes written.
        """

    @abstractmethod
    async def delete_file(self, file_name: str) -> None:
        """Remove a file if it exists."""

    @abstractmethod
    def get_file_url(self, file_name: str) -> str:
        """Build the public URL of a stored file."""

    @abstractmethod
    def pending_deletion(self) -> "PendingDeletion":
        """Start a batch of deletions that can still be undone."""


class PendingDeletion:
    """Files moved aside until the surrounding transaction settles.

    stage() moves a file from the served folder into a holding folder
    outside it. commit() purges everything staged and rollback() puts
    it back.
    """

    def __init__(self, folder: Path, holding: Path) -> None:
        self._folder = folder
        self._holding = holding
        self._staged: list[tuple[Path, Path]] = []

    @property
    def staged(self) -> list[str]:
        """Names of the files currently staged."""
        return [source.name for source, _ in self._staged]

    async def stage(self, file_name: str) -> None:
        """Move a file aside. Missing files are ignored."""
        source = _resolve(self._folder, file_name)
        target = self._holding / f"{uuid4().hex}-{source.name}"
        moved = await asyncio.to_thread(_move_if_exists, source, target)
        if moved:
            self._staged.append((source, target))

    async def commit(self) -> None:
        """Permanently delete every staged file."""
        staged, self._staged = self._staged, []
        for _, target in staged:
            await asyncio.to_thread(target.unlink, True)
        if staged:
            logger.info("Deleted stored files", count=len(staged))

    async def rollback(self) -> None:
        """Restore every staged file to its original name."""
        staged, self._staged = self._staged, []
        for source, target in reversed(staged):
            await asyncio.to_thread(target.replace, source)
        if staged:
            logger.warning("Restored stored files after failed write", count=len(staged))


class FileStorageService(StorageService):
    """Local-disk storage rooted at <content_root>/<folder_name>.

    Example usage:
        storage = FileStorageService("/srv/eshop")
        size = await storage.save_file(upload.file, "3f2a.jpg")
        storage.get_file_url("3f2a.jpg")  # "/user-content/3f2a.jpg"
    """

    def __init__(
        self,
        content_root: str | Path,
        folder_name: str = USER_CONTENT_FOLDER_NAME,
    ) -> None:
        """Initialize storage.

        Args:
            content_root: Application content root directory.
            folder_name: Subfolder holding user content.
        """
        self.folder_name = folder_name
        self.content_root = Path(content_root)
        self.folder = self.content_root / folder_name
        self.holding_folder = self.content_root / PENDING_DELETE_FOLDER_NAME

    def ensure_folder(self) -> Path:
        """Create the storage folder if missing."""
        self.folder.mkdir(parents=True, exist_ok=True)
        return self.folder

    def path_of(self, file_name: str) -> Path:
        """Absolute path of a stored file."""
        return _resolve(self.folder, file_name)

    async def save_file(self, stream: BinaryIO, file_name: str) -> int:
        """Write a stream to a file, overwriting it if present.

        Args:
            stream: Readable binary stream.
            file_name: Target file name (no directories).

        Returns:
            Number of bytes written.
        """
        path = self.path_of(file_name)
        size = await asyncio.to_thread(_write_stream, stream, path)
        logger.debug("Stored file", file_name=file_name, size=size)
        return size

    async def delete_file(self, file_name: str) -> None:
        """Remove a file if it exists; no-op otherwise."""
        path = self.path_of(file_name)
        await asyncio.to_thread(path.unlink, True)

    def get_file_url(self, file_name: str) -> str:
        """Build the public URL of a stored file."""
        return f"/{self.folder_name}/{file_name}"

    def pending_deletion(self) -> PendingDeletion:
        """Start a batch of deletions that can still be undone."""
        return PendingDeletion(self.folder, self.holding_folder)


def _resolve(folder: Path, file_name: str) -> Path:
    if not file_name or Path(file_name).name != file_name:
        raise ValueError(f"Invalid file name: {file_name!r}")
    return folder / file_name


def _write_stream(stream: BinaryIO, path: Path) -> int:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as out:
        shutil.copyfileobj(stream, out)
        return out.tell()


def _move_if_exists(source: Path, target: Path) -> bool:
    if not source.exists():
        return False
    target.parent.mkdir(parents=True, exist_ok=True)
    source.replace(target)
    return True


_storage: FileStorageService | None = None


def get_storage() -> FileStorageService:
    """Get file storage singleton."""
    global _storage
    if _storage is None:
        _storage = FileStorageService(settings.content_root, settings.user_content_folder)
    return _storage
