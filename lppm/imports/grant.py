"""
Research and community service grant imports.

Columns by position: ``NO``, the grant columns in ``GRANT_FIELDS`` order,
then up to five member NIDNs. Every NIDN in the sheet must belong to a known
author; the sheet is checked as a whole before anything is written.
"""
from decimal import Decimal
from typing import Dict, List

from sqlalchemy import select

from ..core.exceptions import ImportFailedError
from ..models.associations import author_research, author_service
from ..models.author import Author
from ..models.grant import GRANT_FIELDS, Research, Service
from ..utils.helpers import join_names, null_if_dash, parse_money
from .base import Importer, RowError
from .sheet import cell_text, indexed_rows

MEMBER_COLUMNS = 5
GRANT_COLUMNS = 1 + len(GRANT_FIELDS) + MEMBER_COLUMNS
REQUIRED_FIELDS = ("nama_ketua", "nidn_ketua", "judul")


def row_nidns(cells) -> List[str]:
    """Leader NIDN followed by the member NIDNs of a row."""
    leader = cell_text(cells[1 + GRANT_FIELDS.index("nidn_ketua")])
    members = [cell_text(null_if_dash(cell)) for cell in cells[1 + len(GRANT_FIELDS):]]
    return [nidn for nidn in [leader] + members if nidn]


class GrantImporter(Importer):
    def __init__(self, session):
        super().__init__(session)
        self.authors: Dict[str, Author] = {}

    def rows(self, grid):
        return indexed_rows(grid, GRANT_COLUMNS)

    async def prepare(self, rows) -> None:
        wanted: List[str] = []
        for _, cells in rows:
            for nidn in row_nidns(cells):
                if nidn not in wanted:
                    wanted.append(nidn)
        if not wanted:
            return

        result = await self.session.execute(select(Author).where(Author.nidn.in_(wanted)))
        self.authors = {author.nidn: author for author in result.scalars()}
        for nidn in wanted:
            if nidn not in self.authors:
                raise ImportFailedError(f"Author with NIDN {nidn} not found.")

    async def build(self, number, cells):
        values = {}
        for field, cell in zip(GRANT_FIELDS, cells[1:1 + len(GRANT_FIELDS)]):
            if field == "dana_disetujui":
                continue
            values[field] = cell_text(null_if_dash(cell))
        for field in REQUIRED_FIELDS:
            if values[field] is None:
                raise RowError(f"Row {number}: The {field.replace('_', ' ')} field is required.")

        amount = null_if_dash(cells[1 + GRANT_FIELDS.index("dana_disetujui")])
        try:
            values["dana_disetujui"] = parse_money(amount) if amount is not None else Decimal(0)
        except ValueError as e:
            raise RowError(f"Row {number}: {e}.")

        authors = []
        for nidn in row_nidns(cells):
            author = self.authors[nidn]
            if author not in authors:
                authors.append(author)

        record = self.model(**values)
        record.authors = authors
        record.creators = join_names([author.name for author in authors]) or None
        return record


class ResearchImporter(GrantImporter):
    model = Research
    link_table = author_research
    label = "Research"


class ServiceImporter(GrantImporter):
    model = Service
    link_table = author_service
    label = "Service"
