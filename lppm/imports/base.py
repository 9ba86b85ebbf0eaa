"""
Import pipeline shared by every spreadsheet importer.

An import runs in one transaction: the optional table reset, every row and
the author links are committed together or not at all.
"""
import logging
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.exceptions import ImportFailedError
from .sheet import Grid, cell_text, heading_rows

logger = logging.getLogger(__name__)

# (required, max_length)
Rule = Tuple[bool, Optional[int]]


class ImportPolicy(Enum):
    """How an importer reacts to a bad row."""

    FAIL_FAST = "fail_fast"
    COLLECT_ERRORS = "collect_errors"


class RowError(Exception):
    """A row that stops a fail-fast import; the message is shown to the client."""


def check_rules(row: Dict[str, Any], rules: Dict[str, Rule]) -> Dict[str, List[str]]:
    errors: Dict[str, List[str]] = {}
    for field, (required, max_length) in rules.items():
        value = cell_text(row.get(field))
        label = field.replace("_", " ")
        if value is None:
            if required:
                errors.setdefault(field, []).append(f"The {label} field is required.")
        elif max_length is not None and len(value) > max_length:
            errors.setdefault(field, []).append(
                f"The {label} field must not be greater than {max_length} characters."
            )
    return errors


class Importer:
    """Base class; subclasses turn rows into model instances."""

    model = None
    link_table = None
    label = "Data"
    policy = ImportPolicy.FAIL_FAST

    def __init__(self, session: AsyncSession):
        self.session = session
        self.failures: List[Dict[str, Any]] = []
        self.reset_table = False

    def rows(self, grid: Grid) -> Iterable[Tuple[int, Any]]:
        return heading_rows(grid, settings.IMPORT_HEADING_ROW)

    async def prepare(self, rows: List[Tuple[int, Any]]) -> None:
        """Checks that need every row before anything is written."""

    async def validate_row(self, number: int, row: Any) -> Dict[str, List[str]]:
        return {}

    async def build(self, number: int, row: Any):
        raise NotImplementedError

    def fail(self, number: int, attribute: str, errors: List[str], values: Any) -> None:
        self.failures.append(
            {"row": number, "attribute": attribute, "errors": errors, "values": values}
        )

    async def reset(self) -> None:
        if self.link_table is not None:
            await self.session.execute(delete(self.link_table))
        await self.session.execute(delete(self.model))

    async def run(self, grid: Grid, reset_table: bool = False) -> int:
        """Import every data row of ``grid``; returns the number of records created."""
        self.reset_table = reset_table
        rows = list(self.rows(grid))
        try:
            await self.prepare(rows)
            if self.policy is ImportPolicy.COLLECT_ERRORS:
                for number, row in rows:
                    for attribute, messages in (await self.validate_row(number, row)).items():
                        self.fail(number, attribute, messages, row)
                if self.failures:
                    raise ImportFailedError("The given data was invalid.", self.failures)

            if reset_table:
                await self.reset()

            created = 0
            for number, row in rows:
                record = await self.build(number, row)
                if record is not None:
                    self.session.add(record)
                    created += 1
            await self.session.commit()
        except ImportFailedError:
            await self.session.rollback()
            raise
        except RowError as e:
            await self.session.rollback()
            logger.warning(f"{self.label} import aborted: {e}")
            raise ImportFailedError(str(e))
        except Exception as e:
            await self.session.rollback()
            logger.exception(f"{self.label} import failed")
            raise ImportFailedError(str(e))

        logger.info(f"{self.label} import created {created} records (reset={reset_table})")
        return created


class UniqueTitles:
    """Tracks titles seen in the file and checks them against a table."""

    def __init__(self, session: AsyncSession, model, field: str = "title", check_table: bool = True):
        self.session = session
        self.model = model
        self.field = field
        self.check_table = check_table
        self.seen: Set[str] = set()

    async def taken(self, value: Optional[str]) -> bool:
        if value is None:
            return False
        if value in self.seen:
            return True
        self.seen.add(value)
        if not self.check_table:
            return False
        column = getattr(self.model, self.field)
        result = await self.session.execute(select(self.model.id).where(column == value).limit(1))
        return result.first() is not None
