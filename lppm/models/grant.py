"""
Research and community service grant model definitions.

Both tables share the SIMLITABMAS/BIMA export columns; the leader is
referenced by ``nidn_ketua`` and, together with the members, linked through
the author join tables.
"""
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..db.database import Base
from .associations import author_research, author_service
from .author import Author
from .mixins import TimestampMixin

# Column order of the grant exports, also the order of the import sheet.
GRANT_FIELDS = (
    "nama_ketua",
    "nidn_ketua",
    "afiliasi_ketua",
    "kd_pt_ketua",
    "judul",
    "nama_singkat_skema",
    "thn_pertama_usulan",
    "thn_usulan_kegiatan",
    "thn_pelaksanaan_kegiatan",
    "lama_kegiatan",
    "bidang_fokus",
    "nama_skema",
    "status_usulan",
    "dana_disetujui",
    "afiliasi_sinta_id",
    "nama_institusi_penerima_dana",
    "target_tkt",
    "nama_program_hibah",
    "kategori_sumber_dana",
    "negara_sumber_dana",
    "sumber_dana",
)


class GrantMixin(TimestampMixin):
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    nama_ketua: Mapped[str] = mapped_column(String(255))
    nidn_ketua: Mapped[str] = mapped_column(String(100), index=True)
    afiliasi_ketua: Mapped[Optional[str]] = mapped_column(String(255))
    kd_pt_ketua: Mapped[Optional[str]] = mapped_column(String(50))
    judul: Mapped[str] = mapped_column(String(255))
    nama_singkat_skema: Mapped[Optional[str]] = mapped_column(String(50), index=True)
    thn_pertama_usulan: Mapped[Optional[str]] = mapped_column(String(4))
    thn_usulan_kegiatan: Mapped[Optional[str]] = mapped_column(String(4))
    thn_pelaksanaan_kegiatan: Mapped[Optional[str]] = mapped_column(String(4))
    lama_kegiatan: Mapped[Optional[str]] = mapped_column(String(4))
    bidang_fokus: Mapped[Optional[str]] = mapped_column(String(100))
    nama_skema: Mapped[Optional[str]] = mapped_column(String(100))
    status_usulan: Mapped[Optional[str]] = mapped_column(String(50))
    dana_disetujui: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0)
    afiliasi_sinta_id: Mapped[Optional[str]] = mapped_column(String(20))
    nama_institusi_penerima_dana: Mapped[Optional[str]] = mapped_column(String(255))
    target_tkt: Mapped[Optional[str]] = mapped_column(String(20))
    nama_program_hibah: Mapped[Optional[str]] = mapped_column(String(100))
    kategori_sumber_dana: Mapped[Optional[str]] = mapped_column(String(50))
    negara_sumber_dana: Mapped[Optional[str]] = mapped_column(String(50))
    sumber_dana: Mapped[Optional[str]] = mapped_column(String(50))
    creators: Mapped[Optional[str]] = mapped_column(Text)


class Research(GrantMixin, Base):
    __tablename__ = "researches"

    authors: Mapped[List[Author]] = relationship(
        secondary=author_research, passive_deletes=True, order_by=Author.id
    )


class Service(GrantMixin, Base):
    """Community service (pengabdian) grant."""
    __tablename__ = "services"

    authors: Mapped[List[Author]] = relationship(
        secondary=author_service, passive_deletes=True, order_by=Author.id
    )
