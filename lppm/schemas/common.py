"""
Schemas shared by several entities.
"""
from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field

def RequiredStr(max_length: int):
    """Non-empty string of at most ``max_length`` characters."""
    return Annotated[str, Field(min_length=1, max_length=max_length)]


def NullableStr(max_length: int):
    # fields using this still need an explicit ``= None``
    return Annotated[Optional[str], Field(max_length=max_length)]


class Payload(BaseModel):
    """Base for request bodies; numbers sent for text columns are accepted."""
    model_config = ConfigDict(coerce_numbers_to_str=True, str_strip_whitespace=True)


class ReadModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class StudyProgramSummary(ReadModel):
    id: int
    name: str


class AuthorSummary(ReadModel):
    """Author as embedded in publication-like records."""
    id: int
    sinta_id: str
    nidn: str
    name: str
    study_program_id: Optional[int] = None


class Timestamps(ReadModel):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AuthoredRead(Timestamps):
    creators: Optional[str] = None
    authors: List[AuthorSummary] = []
