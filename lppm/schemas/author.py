"""
Author and study program Pydantic schemas.
"""
from typing import List, Optional

from .common import (
    AuthorSummary,
    NullableStr,
    Payload,
    RequiredStr,
    StudyProgramSummary,
    Timestamps,
)


class AuthorCreate(Payload):
    """Schema for creating or replacing an author."""
    sinta_id: RequiredStr(20)
    nidn: RequiredStr(20)
    name: RequiredStr(100)
    affiliation: RequiredStr(100)
    study_program_id: int
    last_education: RequiredStr(20)
    functional_position: RequiredStr(50)
    title_prefix: NullableStr(50) = None
    title_suffix: NullableStr(50) = None


class AuthorRead(Timestamps):
    """Schema for reading author data."""
    id: int
    sinta_id: str
    nidn: str
    name: str
    affiliation: str
    study_program_id: Optional[int] = None
    last_education: Optional[str] = None
    functional_position: Optional[str] = None
    title_prefix: Optional[str] = None
    title_suffix: Optional[str] = None
    sinta_score: Optional[str] = None
    study_program: Optional[StudyProgramSummary] = None


class StudyProgramCreate(Payload):
    name: RequiredStr(100)


class StudyProgramRead(Timestamps):
    id: int
    name: str
    authors: List[AuthorSummary] = []
