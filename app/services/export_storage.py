"""
File-based storage for finished exports.

The only place a generated PDF touches the disk; it is called after
generation has succeeded, so a failed export never leaves a file behind.
"""

import logging
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os

from app.config import get_settings
from app.exceptions import StorageError
from app.models import RenderedDocument

logger = logging.getLogger(__name__)


class ExportStorage:
    """Saves rendered documents under a single output directory."""

    def __init__(self, base_path: Optional[Path] = None):
        self.base_path = Path(base_path or get_settings().output_dir)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _free_path(self, filename: str) -> Path:
        """``filename`` under base_path, numbered ``_2``, ``_3``... while taken."""
        file_path = self.base_path / filename
        stem, suffix = file_path.stem, file_path.suffix
        counter = 2
        while file_path.exists():
            file_path = file_path.with_name(f"{stem}_{counter}{suffix}")
            counter += 1
        return file_path

    async def save(self, document: RenderedDocument, overwrite: bool = True) -> Path:
        """
        Write the document bytes to ``{base_path}/{filename}``.

        The bytes go to a hidden temporary file first and are moved into
        place once complete, so a failed write never leaves a truncated PDF.

        Args:
            document: The finished document.
            overwrite: Replace an existing file of the same name. When False
                the file gets a numbered name instead.

        Returns:
            Path of the written file.

        Raises:
            StorageError: The file could not be written.
        """
        if overwrite:
            file_path = self.base_path / document.filename
        else:
            file_path = self._free_path(document.filename)
        tmp_path = file_path.with_name(f".{file_path.name}.tmp")
        try:
            async with aiofiles.open(tmp_path, "wb") as f:
                await f.write(document.content)
            await aiofiles.os.replace(tmp_path, file_path)
        except OSError as e:
            logger.error(f"Failed to save export {file_path}: {e}", exc_info=True)
            tmp_path.unlink(missing_ok=True)
            raise StorageError(
                f"Failed to save export: {document.filename}",
                details={"path": str(file_path), "error": str(e)},
            ) from e
        logger.info(f"Saved {document.document_id} -> {file_path} ({document.size_bytes} bytes)")
        return file_path

    async def get(self, filename: str) -> Optional[bytes]:
        """Bytes of a saved export, or None when it does not exist."""
        file_path = self.base_path / Path(filename).name
        if not file_path.exists():
            return None
        async with aiofiles.open(file_path, "rb") as f:
            return await f.read()

    def list_exports(self) -> list[Path]:
        """Saved PDFs, newest first."""
        return sorted(
            self.base_path.glob("*.pdf"),
            key=lambda f: f.stat().st_mtime,
            reverse=True,
        )

    def delete(self, filename: str) -> bool:
        file_path = self.base_path / Path(filename).name
        if file_path.exists():
            file_path.unlink()
            return True
        return False


# Shared instance
_export_storage: Optional[ExportStorage] = None


def get_export_storage() -> ExportStorage:
    """Return the shared ExportStorage instance."""
    global _export_storage
    if _export_storage is None:
        _export_storage = ExportStorage()
    return _export_storage
