"""
Author join tables. A row is identified by its (record, author) pair only and
disappears with either side.
"""
from sqlalchemy import Column, ForeignKey, Integer, Table

from ..db.database import Base


def _author_link(name: str, record_column: str, record_table: str) -> Table:
    return Table(
        name,
        Base.metadata,
        Column(
            record_column,
            Integer,
            ForeignKey(f"{record_table}.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        Column(
            "author_id",
            Integer,
            ForeignKey("authors.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )


author_book = _author_link("author_book", "book_id", "books")
author_hki = _author_link("author_hki", "hki_id", "hkis")
author_publication = _author_link("author_publication", "publication_id", "publications")
author_google_publication = _author_link(
    "author_google_publication", "google_publication_id", "google_publications"
)
author_research = _author_link("author_research", "research_id", "researches")
author_service = _author_link("author_service", "service_id", "services")

AUTHOR_LINK_TABLES = (
    author_book,
    author_hki,
    author_publication,
    author_google_publication,
    author_research,
    author_service,
)
