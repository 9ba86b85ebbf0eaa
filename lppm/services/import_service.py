"""
Spreadsheet upload handling shared by the import endpoints.
"""
import logging
import os
from typing import Type

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.exceptions import FieldValidationError, ImportFailedError
from ..imports.base import Importer
from ..imports.sheet import read_sheet

logger = logging.getLogger(__name__)


def upload_extension(upload: UploadFile) -> str:
    """Lower-case extension of an accepted upload; anything else is a 422 on ``file``."""
    extension = os.path.splitext(upload.filename or "")[1].lstrip(".").lower()
    if extension not in settings.IMPORT_EXTENSIONS:
        allowed = ", ".join(settings.IMPORT_EXTENSIONS)
        raise FieldValidationError.single("file", f"The file field must be a file of type: {allowed}.")
    return extension


class ImportService:
    """Import service class."""

    @staticmethod
    async def run(
        session: AsyncSession,
        importer_class: Type[Importer],
        upload: UploadFile,
        reset_table: bool = False,
    ) -> int:
        extension = upload_extension(upload)
        content = await upload.read()
        logger.info(
            f"Importing {importer_class.label} from {upload.filename} "
            f"({len(content)} bytes, reset={reset_table})"
        )
        try:
            grid = read_sheet(content, extension)
        except Exception as e:
            logger.warning(f"Unreadable spreadsheet {upload.filename}: {e}")
            raise ImportFailedError(f"Unable to read {upload.filename}: {e}")

        return await importer_class(session).run(grid, reset_table)
