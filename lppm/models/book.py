"""
Book model definitions.
"""
from typing import List, Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..db.database import Base
from .associations import author_book
from .author import Author
from .mixins import TimestampMixin


class Book(TimestampMixin, Base):
    """Published book with its ISBN and publisher."""
    __tablename__ = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    tahun_terbit: Mapped[str] = mapped_column(String(4))
    isbn: Mapped[str] = mapped_column(String(50))
    kategori: Mapped[str] = mapped_column(String(50), index=True)
    title: Mapped[str] = mapped_column(String(255), unique=True)
    creators: Mapped[Optional[str]] = mapped_column(Text)
    tempat_terbit: Mapped[str] = mapped_column(String(100))
    penerbit: Mapped[str] = mapped_column(String(255))
    page: Mapped[str] = mapped_column(String(20))

    authors: Mapped[List[Author]] = relationship(
        secondary=author_book, passive_deletes=True, order_by=Author.id
    )
