"""
Heading-based importers for books, HKI and publications.

Row 5 of the sheet holds the headings; each data row below it becomes one
record whose ``creators`` is taken verbatim from the sheet.
"""
from typing import Any, Dict, List, Optional

from ..models.associations import (
    author_book,
    author_google_publication,
    author_hki,
    author_publication,
)
from ..models.book import Book
from ..models.hki import HKI
from ..models.publication import GOOGLE, SCOPUS, GooglePublication, Publication
from ..utils.helpers import null_if_dash
from .base import Importer, ImportPolicy, RowError, Rule, UniqueTitles, check_rules
from .sheet import cell_date, cell_text

NATIONAL_JOURNAL = "Jurnal Nasional"


def ranking(value: Any) -> Optional[str]:
    """Accreditation or quartile; ``-`` means a national journal."""
    text = cell_text(value)
    if text == "-":
        return NATIONAL_JOURNAL
    return text


class TitledImporter(Importer):
    """Importer for a table with unique titles."""

    def __init__(self, session):
        super().__init__(session)
        self.titles: UniqueTitles = None

    async def prepare(self, rows) -> None:
        self.titles = UniqueTitles(self.session, self.model, check_table=not self.reset_table)

    async def claim_title(self, number: int, title: str) -> None:
        """Fail-fast check that ``title`` is new to the table and the file."""
        if title is None:
            raise RowError(f"Row {number}: The title field is required.")
        if await self.titles.taken(title):
            raise RowError(f"Row {number}: The title has already been taken.")


class BookImporter(TitledImporter):
    model = Book
    link_table = author_book
    label = "Book"
    policy = ImportPolicy.COLLECT_ERRORS

    rules: Dict[str, Rule] = {
        "tahun_terbit": (True, 4),
        "isbn": (True, 50),
        "kategori": (True, 50),
        "title": (True, 255),
        "author": (False, 255),
        "tempat_terbit": (True, 100),
        "penerbit": (True, 255),
        "page": (True, 20),
    }

    async def validate_row(self, number, row) -> Dict[str, List[str]]:
        errors = check_rules(row, self.rules)
        if "title" not in errors and await self.titles.taken(cell_text(row.get("title"))):
            errors["title"] = ["The title has already been taken."]
        return errors

    async def build(self, number, row):
        return Book(
            tahun_terbit=cell_text(row.get("tahun_terbit")),
            isbn=cell_text(row.get("isbn")),
            kategori=cell_text(row.get("kategori")),
            title=cell_text(row.get("title")),
            creators=cell_text(row.get("author")),
            tempat_terbit=cell_text(row.get("tempat_terbit")),
            penerbit=cell_text(row.get("penerbit")),
            page=cell_text(row.get("page")),
        )


class HKIImporter(TitledImporter):
    model = HKI
    link_table = author_hki
    label = "HKI"

    async def build(self, number, row):
        row = {key: null_if_dash(value) for key, value in row.items()}
        title = cell_text(row.get("title"))
        await self.claim_title(number, title)

        dates = {}
        for field, column in (
            ("tanggal_publikasi", "tgl_publikasi"),
            ("filing_date", "filing_date"),
            ("reception_date", "reception_date"),
            ("tanggal_registrasi", "tgl_registrasi"),
        ):
            try:
                dates[field] = cell_date(row.get(column))
            except ValueError as e:
                raise RowError(f"Row {number}: {column} {e}.")

        return HKI(
            tahun_permohonan=cell_text(row.get("tahun_permohonan")),
            nomor_permohonan=cell_text(row.get("nomor_permohonan")),
            kategori=cell_text(row.get("kategori")),
            title=title,
            pemegang_paten=cell_text(row.get("pemegang_paten")),
            inventor=cell_text(row.get("inventor")),
            status=cell_text(row.get("status")),
            nomor_publikasi=cell_text(row.get("no_publikasi")),
            nomor_registrasi=cell_text(row.get("no_registrasi")),
            **dates,
        )


class GooglePublicationImporter(TitledImporter):
    """Google Scholar sheet into ``google_publications``."""

    model = GooglePublication
    link_table = author_google_publication
    label = "Google publication"

    async def build(self, number, row):
        title = cell_text(row.get("title"))
        await self.claim_title(number, title)
        return GooglePublication(
            accreditation=ranking(row.get("accreditation")),
            title=title,
            journal=cell_text(row.get("journal")),
            creators=cell_text(row.get("authors")),
            year=cell_text(row.get("year")),
            citation=cell_text(row.get("citation")),
        )


class PublicationGoogleImporter(GooglePublicationImporter):
    """Google Scholar sheet into ``publications`` with category ``google``."""

    model = Publication
    link_table = author_publication
    label = "Publication"

    async def build(self, number, row):
        title = cell_text(row.get("title"))
        await self.claim_title(number, title)
        return Publication(
            category=GOOGLE,
            accreditation=ranking(row.get("accreditation")),
            title=title,
            journal=cell_text(row.get("journal")),
            creators=cell_text(row.get("authors")),
            year=cell_text(row.get("year")),
            citation=cell_text(row.get("citation")),
        )


class ScopusImporter(TitledImporter):
    model = Publication
    link_table = author_publication
    label = "Publication"
    policy = ImportPolicy.COLLECT_ERRORS

    rules: Dict[str, Rule] = {
        "title": (True, 255),
        "year": (True, 4),
        "citation": (True, 10),
    }

    async def validate_row(self, number, row) -> Dict[str, List[str]]:
        errors = check_rules(row, self.rules)
        if "title" not in errors and await self.titles.taken(cell_text(row.get("title"))):
            errors["title"] = ["The title has already been taken."]
        return errors

    async def build(self, number, row):
        return Publication(
            category=SCOPUS,
            identifier=cell_text(row.get("identifier")),
            quartile=ranking(row.get("quartile")),
            title=cell_text(row.get("title")),
            publication_name=cell_text(row.get("publication_name")),
            creators=cell_text(row.get("creator")),
            year=cell_text(row.get("year")),
            citation=cell_text(row.get("citation")),
        )
