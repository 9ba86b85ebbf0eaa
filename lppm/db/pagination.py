"""
Offset pagination over SQLAlchemy selects.
"""
import math
from dataclasses import dataclass
from typing import Any, List, Optional

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession


@dataclass
class Page:
    items: List[Any]
    total: int
    page: int
    per_page: int

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))

    @property
    def first_index(self) -> Optional[int]:
        if not self.items:
            return None
        return (self.page - 1) * self.per_page + 1

    @property
    def last_index(self) -> Optional[int]:
        if not self.items:
            return None
        return (self.page - 1) * self.per_page + len(self.items)


async def paginate(
    session: AsyncSession,
    query: Select,
    page: int,
    per_page: int,
    *options
) -> Page:
    """Run ``query`` for one page and count every matching row.

    Loader ``options`` are applied to the page query only.
    """
    page = max(1, page)
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total = (await session.execute(count_query)).scalar_one()

    page_query = query.options(*options).offset((page - 1) * per_page).limit(per_page)
    result = await session.execute(page_query)
    items = list(result.scalars().unique().all())
    return Page(items=items, total=total, page=page, per_page=per_page)
