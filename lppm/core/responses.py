"""
Uniform JSON envelopes returned by every endpoint.

    {"success": bool, "message": str, "data": ..., "errors": {...}}

Paginated listings put the page rows in ``data`` and the page metadata in
``meta``.
"""
from typing import Any, Dict, List, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.datastructures import URL

from ..db.pagination import Page


def success(data: Any = None, message: str = "", status_code: int = status.HTTP_200_OK) -> JSONResponse:
    content: Dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        content["data"] = jsonable_encoder(data)
    return JSONResponse(content=content, status_code=status_code)


def created(data: Any = None, message: str = "") -> JSONResponse:
    return success(data, message, status.HTTP_201_CREATED)


def auth_success(data: Any, message: str, token: str) -> JSONResponse:
    return JSONResponse(
        content={
            "success": True,
            "message": message,
            "data": jsonable_encoder(data),
            "token": token,
        },
        status_code=status.HTTP_200_OK,
    )


def error(
    message: str,
    status_code: int = status.HTTP_400_BAD_REQUEST,
    errors: Optional[Dict[str, List[str]]] = None,
    failures: Optional[List[Dict[str, Any]]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {"success": False, "message": message}
    if errors is not None:
        content["errors"] = errors
    if failures is not None:
        content["failures"] = jsonable_encoder(failures)
    return JSONResponse(content=content, status_code=status_code, headers=headers)


def _page_links(page: Page, url: URL) -> List[Dict[str, Any]]:
    def link(number: int) -> Optional[str]:
        if number < 1 or number > page.last_page:
            return None
        return str(url.include_query_params(page=number))

    links = [{"url": link(page.page - 1), "label": "&laquo; Previous", "active": False}]
    for number in range(1, page.last_page + 1):
        links.append({"url": link(number), "label": str(number), "active": number == page.page})
    links.append({"url": link(page.page + 1), "label": "Next &raquo;", "active": False})
    return links


def paginated(page: Page, message: str, url: URL, schema=None) -> JSONResponse:
    """Render one page of rows, optionally passing each through a read ``schema``."""
    items = page.items
    if schema is not None:
        items = [schema.model_validate(item) for item in items]
    return JSONResponse(
        content={
            "success": True,
            "message": message,
            "data": jsonable_encoder(items),
            "meta": {
                "current_page": page.page,
                "last_page": page.last_page,
                "per_page": page.per_page,
                "total": page.total,
                "from": page.first_index,
                "to": page.last_index,
                "links": _page_links(page, url),
            },
        },
        status_code=status.HTTP_200_OK,
    )
