"""
HTTP errors raised by services and turned into the JSON envelope by the
handlers registered in ``lppm.main``.
"""
from typing import Any, Dict, Iterable, List, Optional, Sequence

from fastapi import HTTPException, status


class AuthenticationError(HTTPException):
    def __init__(self, message: str = "Unauthenticated."):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=message,
            headers={"WWW-Authenticate": "Bearer"},
        )


class PermissionDeniedError(HTTPException):
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=message)


class NotFoundError(HTTPException):
    def __init__(self, message: str):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=message)


class ConflictError(HTTPException):
    """Business-rule conflict such as a duplicate slug."""

    def __init__(self, message: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


class FieldValidationError(HTTPException):
    """Per-field validation failure, rendered as ``errors: {field: [messages]}``."""

    def __init__(self, errors: Dict[str, List[str]], message: str = "The given data was invalid."):
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=message)
        self.errors = errors

    @classmethod
    def single(cls, field: str, message: str) -> "FieldValidationError":
        return cls({field: [message]})

    @classmethod
    def from_pydantic(
        cls,
        errors: Sequence[Dict[str, Any]],
        skip: Iterable[str] = (),
    ) -> "FieldValidationError":
        return cls(field_errors(errors, skip))


_LOCATION_PREFIXES = ("body", "query", "path", "header", "cookie")


def field_errors(errors: Sequence[Dict[str, Any]], skip: Iterable[str] = ()) -> Dict[str, List[str]]:
    """Group pydantic error dicts by dotted field name.

    ``("body", "authors", 0)`` becomes ``authors.0``; segments listed in
    ``skip`` (union tags) are dropped. A missing or unknown union tag is
    reported under the discriminator field.
    """
    skip = set(skip)
    grouped: Dict[str, List[str]] = {}
    for err in errors:
        if err.get("type", "").startswith("union_tag"):
            key = str(err.get("ctx", {}).get("discriminator", "")).strip("'")
        else:
            loc = list(err.get("loc", ()))
            if loc and loc[0] in _LOCATION_PREFIXES:
                loc = loc[1:]
            key = ".".join(str(part) for part in loc if part not in skip)
        grouped.setdefault(key or "body", []).append(err.get("msg", "Invalid value"))
    return grouped


class ImportFailedError(HTTPException):
    """A spreadsheet import was aborted; nothing from it was persisted."""

    def __init__(self, message: str, failures: Optional[List[Dict[str, Any]]] = None):
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=message)
        self.failures = failures
