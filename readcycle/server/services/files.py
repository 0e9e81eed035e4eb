"""
File Service.

Stores uploaded images (book thumbnails) in the local upload directory.
Stored files are served publicly under ``/upload``.
"""

from __future__ import annotations

import os
import time
from pathlib import Path
from typing import List, Optional

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from readcycle.core.database.base import utc_now
from readcycle.core.exceptions import StorageError
from readcycle.core.logging_config import get_logger
from readcycle.core.models.io import UploadFileResponse
from readcycle.server.core.config import settings

logger = get_logger(__name__)


def _write(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


class FileService:
    """Local file storage."""

    def __init__(self, base_dir: Optional[str] = None, allowed_extensions: Optional[List[str]] = None) -> None:
        upload = settings.upload
        self.base_dir = Path(base_dir or upload.base_dir)
        self.allowed_extensions = [ext.lower() for ext in (allowed_extensions or upload.allowed_extensions)]

    def _check_extension(self, file_name: str) -> None:
        extension = file_name.rsplit(".", 1)[-1].lower() if "." in file_name else ""
        if extension not in self.allowed_extensions:
            raise StorageError(f"Invalid file extension. only allows [{', '.join(self.allowed_extensions)}]")

    def _resolve(self, file_name: str) -> Path:
        # Only plain names inside the upload directory
        name = os.path.basename(file_name)
        if not name or name != file_name:
            raise StorageError(f"File not found: {file_name}")
        return self.base_dir / name

    async def upload(self, file: Optional[UploadFile]) -> UploadFileResponse:
        """Store an upload as ``{epoch_millis}-{original name}``.

        Raises:
            StorageError: Empty file or an extension outside the allowed list
        """
        content = await file.read() if file is not None else b""
        if not content:
            raise StorageError("File is empty. Please upload a file.")
        original_name = os.path.basename(file.filename or "")
        self._check_extension(original_name)

        stored_name = f"{int(time.time() * 1000)}-{original_name}"
        await run_in_threadpool(_write, self.base_dir / stored_name, content)
        logger.info(f"Stored upload {stored_name} ({len(content)} bytes)")
        return UploadFileResponse(file_name=stored_name, uploaded_at=utc_now())

    async def delete(self, file_name: str) -> None:
        path = self._resolve(file_name)
        if not path.is_file():
            raise StorageError(f"File not found: {file_name}")
        await run_in_threadpool(path.unlink)
        logger.info(f"Deleted upload {file_name}")
