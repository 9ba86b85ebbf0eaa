"""
Publication Pydantic schemas.

A publication payload is either a Google Scholar or a Scopus record, told
apart by ``category``; each variant carries only its own descriptive fields.
"""
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import Field, TypeAdapter, ValidationError

from ..core.exceptions import FieldValidationError
from ..models.publication import GOOGLE, SCOPUS
from .common import AuthoredRead, Payload, RequiredStr

PublicationCategory = Literal["google", "scopus"]


class PublicationBase(Payload):
    title: RequiredStr(255)
    year: RequiredStr(4)
    citation: RequiredStr(10)
    authors: Optional[List[int]] = None


class GooglePublicationPayload(PublicationBase):
    category: Literal["google"]
    accreditation: RequiredStr(50)
    journal: RequiredStr(255)


class ScopusPublicationPayload(PublicationBase):
    category: Literal["scopus"]
    identifier: RequiredStr(50)
    quartile: RequiredStr(50)
    publication_name: RequiredStr(255)


PublicationPayload = Annotated[
    Union[GooglePublicationPayload, ScopusPublicationPayload],
    Field(discriminator="category"),
]

_payload_adapter = TypeAdapter(PublicationPayload)


def parse_publication(data: Any) -> Union[GooglePublicationPayload, ScopusPublicationPayload]:
    """Validate a raw request body into the variant named by its ``category``."""
    try:
        return _payload_adapter.validate_python(data)
    except ValidationError as e:
        raise FieldValidationError.from_pydantic(e.errors(), skip=(GOOGLE, SCOPUS))


class PublicationRead(AuthoredRead):
    """Full row; listings narrow it with ``variant_fields``."""
    id: int
    category: str
    accreditation: Optional[str] = None
    identifier: Optional[str] = None
    quartile: Optional[str] = None
    title: Optional[str] = None
    journal: Optional[str] = None
    publication_name: Optional[str] = None
    year: str
    citation: str


COMMON_READ_FIELDS = ("id", "category", "title", "year", "citation", "creators", "authors",
                      "created_at", "updated_at")
VARIANT_READ_FIELDS = {
    GOOGLE: ("accreditation", "journal"),
    SCOPUS: ("identifier", "quartile", "publication_name"),
}


def render_publication(publication) -> Dict[str, Any]:
    """Serialize a publication with only the fields of its own category."""
    data = PublicationRead.model_validate(publication).model_dump()
    keep = COMMON_READ_FIELDS + VARIANT_READ_FIELDS.get(publication.category, ())
    return {key: data[key] for key in keep}


class GooglePublicationCreate(Payload):
    accreditation: RequiredStr(50)
    title: RequiredStr(255)
    journal: RequiredStr(255)
    year: RequiredStr(4)
    citation: RequiredStr(10)
    authors: Optional[List[int]] = None


class GooglePublicationRead(AuthoredRead):
    id: int
    accreditation: Optional[str] = None
    title: Optional[str] = None
    journal: Optional[str] = None
    year: str
    citation: str
