"""
Author and study program model definitions.
"""
from typing import List, Optional

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..db.database import Base
from .mixins import TimestampMixin


class StudyProgram(TimestampMixin, Base):
    """Study program (prodi) that lecturers belong to."""
    __tablename__ = "study_programs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100))

    authors: Mapped[List["Author"]] = relationship(
        back_populates="study_program",
        passive_deletes=True,
        order_by="Author.id",
    )


class Author(TimestampMixin, Base):
    """Lecturer identified by NIDN."""
    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    sinta_id: Mapped[str] = mapped_column(String(20))
    nidn: Mapped[str] = mapped_column(String(20), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(100))
    affiliation: Mapped[str] = mapped_column(String(100))
    study_program_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("study_programs.id", ondelete="SET NULL"), nullable=True
    )
    last_education: Mapped[Optional[str]] = mapped_column(String(20))
    functional_position: Mapped[Optional[str]] = mapped_column(String(50))
    title_prefix: Mapped[Optional[str]] = mapped_column(String(50))
    title_suffix: Mapped[Optional[str]] = mapped_column(String(50))
    sinta_score: Mapped[Optional[str]] = mapped_column(String(20))

    study_program: Mapped[Optional[StudyProgram]] = relationship(back_populates="authors")
