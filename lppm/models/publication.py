"""
Publication model definitions.

``publications`` stores both Google Scholar and Scopus records in one table;
``category`` decides which of the nullable column groups is meaningful:

    google: accreditation, journal
    scopus: identifier, quartile, publication_name

``google_publications`` is the older Google-only table kept for its own
endpoints and imports.
"""
from typing import List, Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..db.database import Base
from .associations import author_google_publication, author_publication
from .author import Author
from .mixins import TimestampMixin

GOOGLE = "google"
SCOPUS = "scopus"

GOOGLE_FIELDS = ("accreditation", "journal")
SCOPUS_FIELDS = ("identifier", "quartile", "publication_name")


class Publication(TimestampMixin, Base):
    __tablename__ = "publications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    category: Mapped[str] = mapped_column(String(10), default=GOOGLE, index=True)
    accreditation: Mapped[Optional[str]] = mapped_column(String(50))
    identifier: Mapped[Optional[str]] = mapped_column(String(50))
    quartile: Mapped[Optional[str]] = mapped_column(String(50))
    title: Mapped[Optional[str]] = mapped_column(String(255), unique=True)
    journal: Mapped[Optional[str]] = mapped_column(String(255))
    publication_name: Mapped[Optional[str]] = mapped_column(String(255))
    creators: Mapped[Optional[str]] = mapped_column(Text)
    year: Mapped[str] = mapped_column(String(4))
    citation: Mapped[str] = mapped_column(String(10))

    authors: Mapped[List[Author]] = relationship(
        secondary=author_publication, passive_deletes=True, order_by=Author.id
    )


class GooglePublication(TimestampMixin, Base):
    __tablename__ = "google_publications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    accreditation: Mapped[Optional[str]] = mapped_column(String(50), index=True)
    title: Mapped[Optional[str]] = mapped_column(String(255), unique=True)
    journal: Mapped[Optional[str]] = mapped_column(String(255))
    creators: Mapped[Optional[str]] = mapped_column(Text)
    year: Mapped[str] = mapped_column(String(4))
    citation: Mapped[str] = mapped_column(String(10))

    authors: Mapped[List[Author]] = relationship(
        secondary=author_google_publication, passive_deletes=True, order_by=Author.id
    )
