"""
Author import: one lecturer per row, columns by position.

    NO | sinta_id | nidn | name | affiliation | study_program | last_education |
    functional_position | title_prefix | title_suffix | sinta_score
"""
from typing import Dict, Optional, Set

from sqlalchemy import delete, select

from ..models.associations import AUTHOR_LINK_TABLES
from ..models.author import Author, StudyProgram
from .base import Importer, RowError
from .sheet import cell_text, indexed_rows

AUTHOR_COLUMNS = 11


class AuthorImporter(Importer):
    model = Author
    label = "Author"

    def __init__(self, session):
        super().__init__(session)
        self._nidns: Set[str] = set()
        self._programs: Dict[str, StudyProgram] = {}

    def rows(self, grid):
        return indexed_rows(grid, AUTHOR_COLUMNS)

    async def reset(self) -> None:
        # records stay; only their links to authors go
        for table in AUTHOR_LINK_TABLES:
            await self.session.execute(delete(table))
        await self.session.execute(delete(Author))

    async def study_program(self, name: Optional[str]) -> Optional[StudyProgram]:
        """First-or-create a study program by name."""
        if not name:
            return None
        if name not in self._programs:
            result = await self.session.execute(
                select(StudyProgram).where(StudyProgram.name == name).order_by(StudyProgram.id).limit(1)
            )
            program = result.scalar_one_or_none()
            if program is None:
                program = StudyProgram(name=name)
                self.session.add(program)
                await self.session.flush()
            self._programs[name] = program
        return self._programs[name]

    async def build(self, number, cells):
        nidn = cell_text(cells[2])
        if nidn is None:
            raise RowError(f"Row {number}: NIDN is required.")

        exists = await self.session.execute(select(Author.id).where(Author.nidn == nidn))
        if nidn in self._nidns or exists.first() is not None:
            raise RowError(f"Author with NIDN {nidn} already exists.")
        self._nidns.add(nidn)

        program = await self.study_program(cell_text(cells[5]))
        return Author(
            sinta_id=cell_text(cells[1]),
            nidn=nidn,
            name=cell_text(cells[3]),
            affiliation=cell_text(cells[4]),
            study_program_id=program.id if program else None,
            last_education=cell_text(cells[6]),
            functional_position=cell_text(cells[7]),
            title_prefix=cell_text(cells[8]),
            title_suffix=cell_text(cells[9]),
            sinta_score=cell_text(cells[10]),
        )
