"""
HKI (intellectual property: patents, copyrights) model definitions.
"""
from datetime import date
from typing import List, Optional

from sqlalchemy import Date, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..db.database import Base
from .associations import author_hki
from .author import Author
from .mixins import TimestampMixin


class HKI(TimestampMixin, Base):
    __tablename__ = "hkis"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    tahun_permohonan: Mapped[Optional[str]] = mapped_column(String(4))
    nomor_permohonan: Mapped[Optional[str]] = mapped_column(String(50))
    kategori: Mapped[Optional[str]] = mapped_column(String(50), index=True)
    title: Mapped[Optional[str]] = mapped_column(String(255), unique=True)
    pemegang_paten: Mapped[Optional[str]] = mapped_column(String(255))
    inventor: Mapped[Optional[str]] = mapped_column(String(255))
    status: Mapped[Optional[str]] = mapped_column(String(50))
    nomor_publikasi: Mapped[Optional[str]] = mapped_column(String(50))
    tanggal_publikasi: Mapped[Optional[date]] = mapped_column(Date)
    filing_date: Mapped[Optional[date]] = mapped_column(Date)
    reception_date: Mapped[Optional[date]] = mapped_column(Date)
    nomor_registrasi: Mapped[Optional[str]] = mapped_column(String(50))
    tanggal_registrasi: Mapped[Optional[date]] = mapped_column(Date)
    creators: Mapped[Optional[str]] = mapped_column(Text)

    authors: Mapped[List[Author]] = relationship(
        secondary=author_hki, passive_deletes=True, order_by=Author.id
    )
